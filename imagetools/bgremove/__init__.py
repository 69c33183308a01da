"""Background removal tool.

The rembg-backed remover lives in ``imagetools.bgremove.remover`` and is only
imported when a session needs its default remover.
"""

from .session import (
    BATCH_FAILED_MESSAGE,
    BackgroundRemovalSession,
    BackgroundRemover,
    removed_background_filename,
)

__all__ = [
    "BATCH_FAILED_MESSAGE",
    "BackgroundRemovalSession",
    "BackgroundRemover",
    "removed_background_filename",
]
