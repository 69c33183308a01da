from __future__ import annotations

from typing import List, Optional, Protocol


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


class MemoryClipboard:
    """In-process clipboard; keeps every copied string."""

    def __init__(self) -> None:
        self.history: List[str] = []

    def write_text(self, text: str) -> None:
        self.history.append(text)

    @property
    def text(self) -> Optional[str]:
        return self.history[-1] if self.history else None


class TkClipboard:
    """System clipboard through a hidden Tk root window."""

    def __init__(self) -> None:
        import tkinter as tk

        try:
            self._root = tk.Tk()
        except tk.TclError as exc:
            raise RuntimeError(f"System clipboard unavailable: {exc}") from exc
        self._root.withdraw()

    def write_text(self, text: str) -> None:
        self._root.clipboard_clear()
        self._root.clipboard_append(text)
        self._root.update()
