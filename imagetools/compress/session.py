from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from imagetools.batch import run_best_effort
from imagetools.files import BufferManager, FileSelection, InputFile, ObjectRef
from imagetools.state import SessionState

from .compressor import compress_image, image_dimensions
from .options import CompressionOptions, CompressionParams

Compressor = Callable[[bytes, CompressionOptions], bytes]


@dataclass(frozen=True)
class ProcessedImage:
    original: InputFile
    ref: ObjectRef
    size: int
    width: int
    height: int
    extension: str

    @property
    def download_name(self) -> str:
        return f"{self.original.name.split('.')[0]}_{self.width}x{self.height}.{self.extension}"

    def describe(self) -> str:
        return f"Size: {self.size / 1024:.2f} KB | Dimensions: {self.width}x{self.height}"


class CompressionSession:
    """State of the compression/resize tool.

    Files are processed independently: a failing file is reported on the
    console and left out, the others are kept in selection order.
    """

    def __init__(
        self,
        params: Optional[CompressionParams] = None,
        compressor: Compressor = compress_image,
        buffer: Optional[BufferManager] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.selection = FileSelection()
        self.params = params or CompressionParams()
        self.state = SessionState()
        self.buffer = buffer or BufferManager()
        self.compressor = compressor
        self.max_workers = max_workers
        self._results: List[ProcessedImage] = []

    @property
    def results(self) -> List[ProcessedImage]:
        return list(self._results)

    def _process_one(self, file: InputFile, options: CompressionOptions, extension: str) -> ProcessedImage:
        out = self.compressor(file.data, options)
        width, height = image_dimensions(out)
        ref = self.buffer.put(out, options.output_mime_type or file.mime_type)
        return ProcessedImage(original=file, ref=ref, size=len(out), width=width, height=height, extension=extension)

    def process(self) -> List[ProcessedImage]:
        """Compress every selected file with the current parameters.

        Doxygen:
        - @return: Results of the files that succeeded, in selection order.
        - @throws BatchInProgressError: If a batch is already running.
        """
        files = self.selection.files
        self.state.start(len(files))
        self.buffer.release_all([r.ref for r in self._results])
        self._results = []

        options = self.params.resolve()
        extension = self.params.output_format
        workers = self.max_workers if options.use_background_worker else 1
        try:
            kept = run_best_effort(
                files,
                lambda f: self._process_one(f, options, extension),
                workers,
                label=lambda f: f.name,
            )
        except Exception:
            self.state.reset()
            raise

        self._results = [result for _, result in kept]
        self.state.succeed(self._results)
        return self.results

    def download(self, index: int, dest_dir: str) -> str:
        result = self._results[index]
        return self.buffer.download(result.ref, dest_dir, result.download_name)

    def download_all(self, dest_dir: str) -> List[str]:
        return [self.download(i, dest_dir) for i in range(len(self._results))]

    def close(self) -> None:
        self.buffer.cleanup()
