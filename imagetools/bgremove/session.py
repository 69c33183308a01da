from __future__ import annotations

import os
from typing import Callable, List, Optional, Protocol

from imagetools.batch import run_all_or_nothing
from imagetools.files import BufferManager, FileSelection, InputFile, ObjectRef
from imagetools.state import SessionState

BATCH_FAILED_MESSAGE = "Failed to process one or more images. Please try again."


class BackgroundRemover(Protocol):
    def remove(self, data: bytes) -> bytes: ...


def removed_background_filename(original_name: str) -> str:
    """``photo.final.jpg`` -> ``photo.final_removedbg.png``."""
    stem, ext = os.path.splitext(original_name)
    return f"{stem if ext else original_name}_removedbg.png"


class BackgroundRemovalSession:
    """State of the background removal tool: selection, batch state and results.

    A batch is all-or-nothing: when any file fails, no result of that batch
    is kept and the session reports one generic error.
    """

    def __init__(
        self,
        remover: Optional[BackgroundRemover] = None,
        buffer: Optional[BufferManager] = None,
        max_workers: Optional[int] = None,
        remover_factory: Optional[Callable[[], BackgroundRemover]] = None,
    ) -> None:
        self.selection = FileSelection()
        self.state = SessionState()
        self.buffer = buffer or BufferManager()
        self.max_workers = max_workers
        self._remover = remover
        self._remover_factory = remover_factory
        self._results: List[ObjectRef] = []
        self._sources: List[InputFile] = []

    @property
    def remover(self) -> BackgroundRemover:
        if self._remover is None:
            if self._remover_factory is not None:
                self._remover = self._remover_factory()
            else:
                from .remover import RembgRemover
                self._remover = RembgRemover()
        return self._remover

    @property
    def results(self) -> List[ObjectRef]:
        return list(self._results)

    @property
    def error(self) -> Optional[str]:
        return getattr(self.state.current, "message", None)

    def process(self) -> List[ObjectRef]:
        """Remove the background of every selected file.

        Doxygen:
        - @return: One ObjectRef per selected file, in selection order; empty on failure.
        - @throws BatchInProgressError: If a batch is already running.
        """
        files = self.selection.files
        if not files:
            return []

        self.state.start(len(files))
        self.buffer.release_all(self._results)
        self._results = []
        self._sources = []

        stored: List[ObjectRef] = []
        try:
            remover = self.remover
            outputs = run_all_or_nothing(files, lambda f: remover.remove(f.data), self.max_workers)
            for out in outputs:
                stored.append(self.buffer.put(out, "image/png"))
        except Exception as e:
            print(f"Background removal failed: {e}")
            self.buffer.release_all(stored)
            self.state.fail(BATCH_FAILED_MESSAGE)
            return []

        self._results = stored
        self._sources = files
        self.state.succeed(self._results)
        return self.results

    def download_name(self, index: int) -> str:
        return removed_background_filename(self._sources[index].name)

    def download(self, index: int, dest_dir: str) -> str:
        return self.buffer.download(self._results[index], dest_dir, self.download_name(index))

    def download_all(self, dest_dir: str) -> List[str]:
        return [self.download(i, dest_dir) for i in range(len(self._results))]

    def close(self) -> None:
        self.buffer.cleanup()
