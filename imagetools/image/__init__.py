"""Image-level helpers shared by the tools (bit depth normalisation)."""

from .processing import to_8bit

__all__ = [
    "to_8bit",
]
