"""Processing state of a tool session.

A session is always in exactly one of four states. Only one batch may be in
flight per session; ``SessionState.start`` enforces it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Union


class BatchInProgressError(RuntimeError):
    """Raised when a batch is started while another one is still running."""


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Running:
    total: int


@dataclass(frozen=True)
class Succeeded:
    results: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Failed:
    message: str


ProcessingState = Union[Idle, Running, Succeeded, Failed]


class SessionState:
    def __init__(self) -> None:
        self.current: ProcessingState = Idle()

    @property
    def is_running(self) -> bool:
        return isinstance(self.current, Running)

    def start(self, total: int) -> None:
        if self.is_running:
            raise BatchInProgressError("A batch is already being processed.")
        self.current = Running(total=total)

    def succeed(self, results: List[Any]) -> None:
        self.current = Succeeded(results=list(results))

    def fail(self, message: str) -> None:
        self.current = Failed(message=message)

    def reset(self) -> None:
        self.current = Idle()
