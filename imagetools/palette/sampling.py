"""Decode an image into an RGBA pixel buffer and sample its RGB values."""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from imagetools.image import to_8bit


def decode_pixels(data: bytes) -> np.ndarray:
    """Decode encoded image bytes into an (H, W, 4) RGBA uint8 array.

    Doxygen:
    - @param data: Encoded image (PNG, JPEG, WebP, ...).
    - @return: RGBA pixel buffer.
    - @throws ValueError: If the bytes are not a decodable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = to_8bit(img).convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Could not decode image: {exc}") from exc
    return np.asarray(rgba, dtype=np.uint8)


def sample_pixels(pixels: np.ndarray) -> np.ndarray:
    """Return every pixel's (R, G, B), skipping alpha, as an (N, 3) array.

    Walks the flat RGBA byte buffer with stride 4.
    """
    flat = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    if flat.size % 4:
        raise ValueError("Pixel buffer length must be a multiple of 4 (RGBA).")
    return np.stack([flat[0::4], flat[1::4], flat[2::4]], axis=1)
