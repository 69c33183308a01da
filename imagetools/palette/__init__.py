"""Colour palette extraction: pixel sampling, KMeans quantization, colour formats."""

from .color import (
    PaletteEntry,
    css_hsl,
    css_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)
from .sampling import decode_pixels, sample_pixels
from .quantizer import KMeansQuantizer, validate_color_count
from .clipboard import Clipboard, MemoryClipboard, TkClipboard
from .session import INVALID_IMAGE_MESSAGE, PaletteSession, extract_palette

__all__ = [
    "PaletteEntry",
    "css_hsl",
    "css_rgb",
    "hsl_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "decode_pixels",
    "sample_pixels",
    "KMeansQuantizer",
    "validate_color_count",
    "Clipboard",
    "MemoryClipboard",
    "TkClipboard",
    "INVALID_IMAGE_MESSAGE",
    "PaletteSession",
    "extract_palette",
]
