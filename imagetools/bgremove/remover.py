"""Background removal backed by rembg's ONNX segmentation models."""

from __future__ import annotations

import threading
from typing import Dict

from rembg import new_session, remove

# Model sessions cache to avoid reloading per image
_SESSION_CACHE: Dict[str, object] = {}
_SESSION_LOCK = threading.Lock()


def get_session(model_name: str):
    """Return a cached rembg session for ``model_name``.

    Useful models:
      - "isnet-general-use" (default)
      - "u2net"
      - "u2net_human_seg" (people)
    """
    with _SESSION_LOCK:
        sess = _SESSION_CACHE.get(model_name)
        if sess is None:
            sess = new_session(model_name)
            _SESSION_CACHE[model_name] = sess
        return sess


class RembgRemover:
    def __init__(self, model_name: str = "isnet-general-use") -> None:
        self.model_name = model_name

    def remove(self, data: bytes) -> bytes:
        """Return PNG bytes of the cut-out image."""
        if not data:
            raise ValueError("Empty image data.")
        return remove(data, session=get_session(self.model_name))
