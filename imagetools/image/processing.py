"""Pixel depth helpers for decoded Pillow images."""

from __future__ import annotations

import numpy as np
from PIL import Image

_WIDE_GRAY_MODES = ("I;16", "I;16B", "I;16L", "I;16N", "I")


def to_8bit(img: Image.Image) -> Image.Image:
    """Scale a 16/32-bit grayscale image down to 8-bit "L".

    Pillow's own conversion of these modes clips every value above 255,
    so a 16-bit gradient would come out almost white.

    Doxygen:
    - @param img: Decoded image in any mode.
    - @return: An "L" image for wide grayscale modes, otherwise ``img`` unchanged.
    """
    if img.mode not in _WIDE_GRAY_MODES:
        return img
    arr = np.asarray(img).astype(np.int64)
    if img.mode != "I" or arr.max(initial=0) > 255:
        arr = arr >> 8
    return Image.fromarray(np.clip(arr, 0, 255).astype(np.uint8))
