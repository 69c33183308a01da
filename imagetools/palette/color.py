"""Colour conversions for palette entries (hex, HSL and CSS strings)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]
HSL = Tuple[int, int, int]


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Return ``#rrggbb`` with two lowercase hex digits per channel."""
    return "#" + "".join(f"{int(c):02x}" for c in (r, g, b))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """Convert 0..255 RGB to (hue 0..360, saturation %, lightness %), rounded.

    Doxygen:
    - @param r: Red channel 0..255.
    - @param g: Green channel 0..255.
    - @param b: Blue channel 0..255.
    - @return: Tuple (h, s, l) of rounded integers.
    """
    rf, gf, bf = r / 255, g / 255, b / 255
    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    lightness = (mx + mn) / 2

    if mx == mn:
        hue = sat = 0.0
    else:
        d = mx - mn
        sat = d / (2 - mx - mn) if lightness > 0.5 else d / (mx + mn)
        if mx == rf:
            hue = (gf - bf) / d + (6 if gf < bf else 0)
        elif mx == gf:
            hue = (bf - rf) / d + 2
        else:
            hue = (rf - gf) / d + 4
        hue /= 6

    return _round_half_up(hue * 360), _round_half_up(sat * 100), _round_half_up(lightness * 100)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Inverse of :func:`rgb_to_hsl` for degrees and percentages."""
    sf, lf = s / 100, l / 100
    c = (1 - abs(2 * lf - 1)) * sf
    hp = (h % 360) / 60
    x = c * (1 - abs(hp % 2 - 1))
    if hp < 1:
        r1, g1, b1 = c, x, 0.0
    elif hp < 2:
        r1, g1, b1 = x, c, 0.0
    elif hp < 3:
        r1, g1, b1 = 0.0, c, x
    elif hp < 4:
        r1, g1, b1 = 0.0, x, c
    elif hp < 5:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x
    m = lf - c / 2
    return tuple(_round_half_up((v + m) * 255) for v in (r1, g1, b1))  # type: ignore[return-value]


def _round_half_up(value: float) -> int:
    # browsers round .5 up; Python's round() goes to even
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def css_rgb(rgb: RGB) -> str:
    return "rgb(" + ",".join(str(c) for c in rgb) + ")"


def css_hsl(hsl: HSL) -> str:
    return "hsl(" + ",".join(str(c) for c in hsl) + ")"


@dataclass(frozen=True)
class PaletteEntry:
    rgb: RGB

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.rgb)

    @property
    def hsl(self) -> HSL:
        return rgb_to_hsl(*self.rgb)

    def describe(self) -> str:
        return (
            f"RGB: {', '.join(str(c) for c in self.rgb)}  "
            f"HEX: {self.hex}  "
            f"HSL: {', '.join(str(c) for c in self.hsl)}"
        )
