from __future__ import annotations

from typing import Iterable, Iterator, List

from .model import InputFile


class FileSelection:
    """Ordered list of files picked by the user.

    Order is display order; processing order does not depend on it.
    """

    def __init__(self, files: Iterable[InputFile] = ()) -> None:
        self._files: List[InputFile] = list(files)

    def add(self, files: Iterable[InputFile]) -> None:
        self._files.extend(files)

    def add_dropped(self, files: Iterable[InputFile]) -> int:
        """Append only the image files of a drop; returns how many were kept."""
        images = [f for f in files if f.is_image]
        self._files.extend(images)
        return len(images)

    def remove(self, index: int) -> InputFile:
        if index < 0 or index >= len(self._files):
            raise IndexError(f"No selected file at index {index}")
        return self._files.pop(index)

    def clear(self) -> None:
        self._files.clear()

    @property
    def files(self) -> List[InputFile]:
        return list(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[InputFile]:
        return iter(list(self._files))

    def __getitem__(self, index: int) -> InputFile:
        return self._files[index]
