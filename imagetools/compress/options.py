"""User-facing compression parameters and the options they resolve to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

OUTPUT_FORMATS = ("jpg", "jpeg", "png", "webp")

RESOLUTION_PRESETS: Dict[str, Union[int, str]] = {
    "Original": "original",
    "HD (720p)": 720,
    "Full HD (1080p)": 1080,
    "QHD (1440p)": 1440,
    "4K (2160p)": 2160,
}

MIN_WIDTH = 50
MAX_WIDTH = 3840
MIN_SIZE_KB = 100
MAX_SIZE_KB = 10240
# the default sits above MAX_SIZE_KB and is accepted as-is
DEFAULT_MAX_SIZE_KB = 102400


@dataclass(frozen=True)
class CompressionOptions:
    """Options handed to the compressor for one file."""

    target_size_mb: float
    max_dimension: Optional[int] = None
    use_background_worker: bool = True
    output_mime_type: Optional[str] = None
    quality: Optional[float] = None


@dataclass
class CompressionParams:
    output_format: str = "jpeg"
    quality: int = 80
    max_size_kb: int = DEFAULT_MAX_SIZE_KB
    resize_enabled: bool = False
    width: Optional[int] = None

    def __post_init__(self) -> None:
        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format '{self.output_format}', choose one of {', '.join(OUTPUT_FORMATS)}")
        if not 0 <= self.quality <= 100:
            raise ValueError(f"Compression level must be within 0..100, got {self.quality}")
        if self.max_size_kb != DEFAULT_MAX_SIZE_KB and not MIN_SIZE_KB <= self.max_size_kb <= MAX_SIZE_KB:
            raise ValueError(f"Max file size must be within {MIN_SIZE_KB}..{MAX_SIZE_KB} KB, got {self.max_size_kb}")
        if self.width is not None:
            self.set_width(self.width)

    def set_width(self, width: int) -> None:
        if not MIN_WIDTH <= width <= MAX_WIDTH:
            raise ValueError(f"Width must be within {MIN_WIDTH}..{MAX_WIDTH}, got {width}")
        self.width = int(width)

    def apply_preset(self, value: Union[int, str]) -> None:
        """Apply a preset value: ``"original"`` turns resizing off, a number turns it on.

        Preset labels ("Full HD (1080p)") are accepted as well as their values.
        """
        value = RESOLUTION_PRESETS.get(value, value) if isinstance(value, str) else value
        if value == "original":
            self.resize_enabled = False
            self.width = None
            return
        self.resize_enabled = True
        self.set_width(int(value))

    def resolve(self) -> CompressionOptions:
        return CompressionOptions(
            target_size_mb=self.max_size_kb / 1024,
            max_dimension=self.width if self.resize_enabled and self.width else None,
            use_background_worker=True,
            output_mime_type=f"image/{self.output_format}",
            quality=self.quality / 100,
        )
