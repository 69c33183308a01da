from __future__ import annotations

from typing import List, Optional

import numpy as np

from imagetools.files import InputFile, InvalidImageError

from .clipboard import Clipboard, MemoryClipboard
from .color import PaletteEntry, css_hsl, css_rgb
from .quantizer import KMeansQuantizer, validate_color_count
from .sampling import decode_pixels, sample_pixels

INVALID_IMAGE_MESSAGE = "Please upload a valid image file."


def extract_palette(pixels: np.ndarray, color_count: int) -> List[PaletteEntry]:
    """Sample the full pixel buffer and quantize it to ``color_count`` entries."""
    samples = sample_pixels(pixels)
    return [PaletteEntry(rgb=c) for c in KMeansQuantizer(color_count).quantize(samples)]


class PaletteSession:
    """State of the palette tool.

    The decoded source image is retained so a new colour count re-samples the
    original pixels instead of reworking the previous palette.
    """

    def __init__(self, color_count: int = 5, clipboard: Optional[Clipboard] = None) -> None:
        self.color_count = validate_color_count(color_count)
        self.clipboard: Clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self.image: Optional[InputFile] = None
        self.pixels: Optional[np.ndarray] = None
        self.palette: List[PaletteEntry] = []
        self.error: Optional[str] = None

    def load(self, file: InputFile) -> List[PaletteEntry]:
        """Decode ``file`` and extract its palette.

        Doxygen:
        - @param file: Uploaded file; must have an ``image/*`` MIME type.
        - @return: The new palette.
        - @throws InvalidImageError: For non-image files; image and palette stay unchanged.
        """
        if not file.is_image:
            self.error = INVALID_IMAGE_MESSAGE
            raise InvalidImageError(INVALID_IMAGE_MESSAGE)

        try:
            pixels = decode_pixels(file.data)
        except ValueError as exc:
            self.error = INVALID_IMAGE_MESSAGE
            raise InvalidImageError(INVALID_IMAGE_MESSAGE) from exc

        self.palette = extract_palette(pixels, self.color_count)
        self.pixels = pixels
        self.image = file
        self.error = None
        return self.palette

    def set_color_count(self, count: int) -> List[PaletteEntry]:
        self.color_count = validate_color_count(count)
        if self.pixels is not None:
            self.palette = extract_palette(self.pixels, self.color_count)
        return self.palette

    def copy_rgb(self, index: int) -> str:
        return self._copy(css_rgb(self.palette[index].rgb))

    def copy_hex(self, index: int) -> str:
        return self._copy(self.palette[index].hex)

    def copy_hsl(self, index: int) -> str:
        return self._copy(css_hsl(self.palette[index].hsl))

    def _copy(self, text: str) -> str:
        try:
            self.clipboard.write_text(text)
        except Exception as err:
            print(f"Could not copy text: {err}")
        return text
