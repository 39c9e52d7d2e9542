from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def split_into_batches(items: Sequence[T], batch_size: int) -> List[List[T]]:
    """Partition items into consecutive batches of at most batch_size."""
    if not items:
        return []
    size = max(1, batch_size)
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def unique_in_order(items: Sequence[T]) -> List[T]:
    """Drop repeats while keeping first-occurrence order."""
    seen: set[T] = set()
    unique: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique
