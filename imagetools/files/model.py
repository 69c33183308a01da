from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from typing import Optional


class InvalidImageError(ValueError):
    """Raised when a non-image file is handed to a tool that needs an image."""


@dataclass(frozen=True)
class InputFile:
    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "InputFile":
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")
        if mime_type is None:
            mime_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
        with open(path, "rb") as f:
            data = f.read()
        return cls(name=os.path.basename(path), mime_type=mime_type, data=data)

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ObjectRef:
    """Handle to a generated blob held by a BufferManager."""

    key: str
    path: str
    mime_type: str
    size: int
