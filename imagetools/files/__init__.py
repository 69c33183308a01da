"""Input files, the ordered selection, and the session buffer for results.

Exposes:
- Data model: InputFile, ObjectRef, InvalidImageError
- Selection: FileSelection (picker and drag-and-drop semantics)
- Buffer manager: BufferManager (stores generated blobs under config/buffer)
"""

from .model import InputFile, ObjectRef, InvalidImageError
from .selection import FileSelection
from .buffer import BufferManager

__all__ = [
    "InputFile",
    "ObjectRef",
    "InvalidImageError",
    "FileSelection",
    "BufferManager",
]
