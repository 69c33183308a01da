from __future__ import annotations

import os
import shutil
import tempfile
import threading
import time
from typing import Dict, List, Optional

from .model import ObjectRef


_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/webp": ".webp",
}


class BufferManager:
    """Session buffer under <root>/config/buffer/<timestamp> for generated blobs.

    Without a project root the buffer lives in the system temp directory.

    Every stored blob gets an ObjectRef, which plays the part of a browser
    object URL: a handle that can be previewed, read back or downloaded.
    Debug mode keeps the buffer on disk; release mode removes it on cleanup().
    """

    def __init__(self, project_root: Optional[str] = None, debug: bool = False) -> None:
        self.debug = bool(debug)
        if project_root:
            base = os.path.join(project_root, "config", "buffer")
        else:
            base = os.path.join(tempfile.gettempdir(), "imagetools-buffer")
        os.makedirs(base, exist_ok=True)
        ts = time.strftime("%Y%m%d-%H%M%S")
        self.base_dir = tempfile.mkdtemp(prefix=f"{ts}-", dir=base)
        self._refs: Dict[str, ObjectRef] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def path(self, *parts: str) -> str:
        p = os.path.join(self.base_dir, *parts)
        os.makedirs(os.path.dirname(p), exist_ok=True)
        return p

    def put(self, data: bytes, mime_type: str) -> ObjectRef:
        with self._lock:
            self._counter += 1
            key = f"blob-{self._counter:05d}"
        p = self.path(key + _EXTENSIONS.get(mime_type, ".bin"))
        with open(p, "wb") as f:
            f.write(data)
        ref = ObjectRef(key=key, path=p, mime_type=mime_type, size=len(data))
        with self._lock:
            self._refs[key] = ref
        return ref

    def read(self, ref: ObjectRef) -> bytes:
        if ref.key not in self._refs:
            raise KeyError(f"Object reference was released: {ref.key}")
        with open(ref.path, "rb") as f:
            return f.read()

    def download(self, ref: ObjectRef, dest_dir: str, filename: str) -> str:
        """Copy a stored blob to ``dest_dir/filename`` and return the written path."""
        if ref.key not in self._refs:
            raise KeyError(f"Object reference was released: {ref.key}")
        os.makedirs(dest_dir, exist_ok=True)
        out_path = os.path.join(dest_dir, filename)
        shutil.copyfile(ref.path, out_path)
        return out_path

    def release(self, ref: ObjectRef) -> None:
        with self._lock:
            known = self._refs.pop(ref.key, None)
        if known is not None:
            try:
                os.remove(known.path)
            except OSError as e:
                print(f"Warning: failed to release {known.path}: {e}")

    def release_all(self, refs: List[ObjectRef]) -> None:
        for ref in refs:
            self.release(ref)

    @property
    def live_refs(self) -> List[ObjectRef]:
        with self._lock:
            return list(self._refs.values())

    def cleanup(self) -> None:
        with self._lock:
            self._refs.clear()
        if not self.debug:
            shutil.rmtree(self.base_dir, ignore_errors=True)
