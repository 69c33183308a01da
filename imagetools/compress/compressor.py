"""Resize and re-encode images with Pillow and OpenCV, aiming for a size budget."""

from __future__ import annotations

import io
from typing import Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from imagetools.image import to_8bit

from .options import CompressionOptions

_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}
_LOSSY = {"JPEG", "WEBP"}

DEFAULT_QUALITY = 0.92
MAX_ITERATIONS = 10
QUALITY_STEP = 0.8


def image_dimensions(data: bytes) -> Tuple[int, int]:
    """Decode ``data`` and return its (width, height)."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.size


def fit_within(width: int, height: int, max_dimension: Optional[int]) -> Tuple[int, int]:
    """Scale (width, height) down so the longest side is at most ``max_dimension``."""
    if not max_dimension or max(width, height) <= max_dimension:
        return width, height
    scale = max_dimension / max(width, height)
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def _resize(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
    if img.size == size:
        return img
    arr = np.asarray(img)
    resized = cv2.resize(arr, size, interpolation=cv2.INTER_AREA)
    return Image.fromarray(resized)


def _prepare_mode(img: Image.Image, fmt: str) -> Image.Image:
    img = to_8bit(img)
    if fmt == "JPEG":
        if img.mode in ("RGBA", "LA", "P"):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return img.convert("RGB") if img.mode != "RGB" else img
    if img.mode not in ("RGB", "RGBA"):
        return img.convert("RGBA")
    return img


def _encode(img: Image.Image, fmt: str, quality: float) -> bytes:
    buf = io.BytesIO()
    if fmt in _LOSSY:
        img.save(buf, format=fmt, quality=max(1, min(100, int(round(quality * 100)))))
    else:
        img.save(buf, format=fmt, optimize=True)
    return buf.getvalue()


def compress_image(data: bytes, options: CompressionOptions) -> bytes:
    """Resize and re-encode one image.

    Doxygen:
    - @param data: Encoded source image.
    - @param options: Resolved compression options.
    - @return: Encoded output image. When the first encoding is above
      ``target_size_mb``, lossy formats are re-encoded at lower quality (up to
      MAX_ITERATIONS attempts) and the smallest result is returned. Pixel
      dimensions only change through ``max_dimension``.
    - @throws ValueError: If the source cannot be decoded or the type is unsupported.
    """
    try:
        with Image.open(io.BytesIO(data)) as src:
            src.load()
            source_format = src.format or "PNG"
            img = src.copy()
    except OSError as exc:
        raise ValueError(f"Could not decode image: {exc}") from exc

    if options.output_mime_type:
        fmt = _PIL_FORMATS.get(options.output_mime_type.lower())
        if fmt is None:
            raise ValueError(f"Unsupported output type: {options.output_mime_type}")
    else:
        fmt = source_format if source_format in _PIL_FORMATS.values() else "PNG"

    img = _prepare_mode(img, fmt)
    img = _resize(img, fit_within(img.width, img.height, options.max_dimension))

    quality = DEFAULT_QUALITY if options.quality is None else options.quality
    target_bytes = options.target_size_mb * 1024 * 1024

    best = _encode(img, fmt, quality)
    if fmt not in _LOSSY:
        return best

    attempts = 1
    while len(best) > target_bytes and attempts < MAX_ITERATIONS:
        quality *= QUALITY_STEP
        candidate = _encode(img, fmt, quality)
        attempts += 1
        if len(candidate) < len(best):
            best = candidate
    return best
