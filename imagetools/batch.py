"""Concurrent per-file execution with the two failure policies of the tools.

Both helpers submit every item at once and wait for all of them to settle.
Results are returned in input order, never completion order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 4


def _settle(items: Sequence[T], fn: Callable[[T], R], max_workers: Optional[int]) -> List[Tuple[Optional[R], Optional[BaseException]]]:
    if not items:
        return []
    workers = max(1, min(max_workers or DEFAULT_MAX_WORKERS, len(items)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(fn, item) for item in items]
        outcomes: List[Tuple[Optional[R], Optional[BaseException]]] = []
        for future in futures:
            exc = future.exception()
            outcomes.append((None, exc) if exc is not None else (future.result(), None))
    return outcomes


def run_all_or_nothing(items: Sequence[T], fn: Callable[[T], R], max_workers: Optional[int] = None) -> List[R]:
    """Run ``fn`` over all items; raise the first failure (in input order) if any failed.

    Doxygen:
    - @param items: Inputs, one call each.
    - @param fn: Per-item operation.
    - @param max_workers: Thread pool size (default 4).
    - @return: One result per item, aligned with ``items``.
    - @throws Exception: The first item's exception when any call failed.
    """
    outcomes = _settle(items, fn, max_workers)
    for _, exc in outcomes:
        if exc is not None:
            raise exc
    return [result for result, _ in outcomes]


def run_best_effort(
    items: Sequence[T],
    fn: Callable[[T], R],
    max_workers: Optional[int] = None,
    label: Callable[[T], str] = str,
) -> List[Tuple[int, R]]:
    """Run ``fn`` over all items; print and drop failures.

    Doxygen:
    - @param items: Inputs, one call each.
    - @param fn: Per-item operation.
    - @param max_workers: Thread pool size (default 4).
    - @param label: How an item is named in the failure message.
    - @return: ``(index, result)`` pairs of the successful items, in input order.
    """
    kept: List[Tuple[int, R]] = []
    for idx, (result, exc) in enumerate(_settle(items, fn, max_workers)):
        if exc is not None:
            print(f"Error processing image {label(items[idx])}: {exc}")
            continue
        kept.append((idx, result))
    return kept
