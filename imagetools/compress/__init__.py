"""Image compression and resizing: parameters, the Pillow/OpenCV compressor, the tool session."""

from .options import (
    OUTPUT_FORMATS,
    RESOLUTION_PRESETS,
    CompressionOptions,
    CompressionParams,
)
from .compressor import compress_image, fit_within, image_dimensions
from .session import CompressionSession, ProcessedImage

__all__ = [
    "OUTPUT_FORMATS",
    "RESOLUTION_PRESETS",
    "CompressionOptions",
    "CompressionParams",
    "compress_image",
    "fit_within",
    "image_dimensions",
    "CompressionSession",
    "ProcessedImage",
]
