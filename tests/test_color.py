import colorsys
import itertools

from imagetools.palette.color import (
    PaletteEntry,
    css_hsl,
    css_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)

GRID = list(itertools.product(range(0, 256, 17), repeat=3))


def test_rgb_to_hex_zero_pads_each_channel():
    assert rgb_to_hex(0, 0, 0) == "#000000"
    assert rgb_to_hex(255, 255, 255) == "#ffffff"
    assert rgb_to_hex(1, 10, 171) == "#010aab"


def test_rgb_to_hex_matches_channels_for_grid():
    for r, g, b in GRID:
        h = rgb_to_hex(r, g, b)
        assert len(h) == 7 and h.startswith("#")
        assert (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16)) == (r, g, b)
        assert h.upper()[1:] == f"{r:02X}{g:02X}{b:02X}"


def test_rgb_to_hsl_known_values():
    assert rgb_to_hsl(255, 0, 0) == (0, 100, 50)
    assert rgb_to_hsl(0, 255, 0) == (120, 100, 50)
    assert rgb_to_hsl(0, 0, 255) == (240, 100, 50)
    assert rgb_to_hsl(255, 255, 255) == (0, 0, 100)
    assert rgb_to_hsl(0, 0, 0) == (0, 0, 0)
    assert rgb_to_hsl(128, 128, 128) == (0, 0, 50)
    assert rgb_to_hsl(255, 0, 128) == (330, 100, 50)


def test_rgb_to_hsl_agrees_with_reference_within_one_unit():
    for r, g, b in GRID:
        h, s, l = rgb_to_hsl(r, g, b)
        rh, rl, rs = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
        dh = abs(h - rh * 360)
        assert min(dh, 360 - dh) <= 1
        assert abs(s - rs * 100) <= 1
        assert abs(l - rl * 100) <= 1
        assert 0 <= h <= 360 and 0 <= s <= 100 and 0 <= l <= 100


def test_hsl_to_rgb_inverts_primary_colors():
    assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
    assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
    assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)
    assert hsl_to_rgb(0, 0, 100) == (255, 255, 255)


def test_css_strings_and_entry():
    entry = PaletteEntry(rgb=(255, 0, 0))
    assert entry.hex == "#ff0000"
    assert entry.hsl == (0, 100, 50)
    assert css_rgb(entry.rgb) == "rgb(255,0,0)"
    assert css_hsl(entry.hsl) == "hsl(0,100,50)"
    assert entry.describe() == "RGB: 255, 0, 0  HEX: #ff0000  HSL: 0, 100, 50"
