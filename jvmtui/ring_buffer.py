"""Fixed-capacity history buffer."""

from __future__ import annotations

from collections import deque
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Keeps the most recent items, discarding the oldest when full."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        # A zero capacity still keeps the single newest item.
        self._items: deque[T] = deque(maxlen=max(capacity, 1))

    def push(self, item: T) -> None:
        self._items.append(item)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def last(self) -> T | None:
        """The newest item, or None when empty."""
        return self._items[-1] if self._items else None

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self.capacity}, items={list(self._items)!r})"