"""A stable priority queue: lower priority values come out first."""

from __future__ import annotations

from bisect import bisect_right
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Items ordered by ascending priority; equal priorities keep insertion order."""

    def __init__(self) -> None:
        self._priorities: list[int] = []
        self._items: list[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, item: T, priority: int) -> None:
        """Insert ``item`` after every queued item whose priority is not greater."""
        index = bisect_right(self._priorities, priority)
        self._priorities.insert(index, priority)
        self._items.insert(index, item)

    def pop(self) -> T:
        """Remove and return the front item; raise IndexError when empty."""
        if not self._items:
            raise IndexError("pop from an empty priority queue")
        self._priorities.pop(0)
        return self._items.pop(0)

    def peek(self, index: int) -> T:
        """Return the item at ``index`` from the front without removing it."""
        if index < 0 or index >= len(self._items):
            raise IndexError(f"no item at position {index}")
        return self._items[index]

    def clear(self) -> None:
        """Remove every item."""
        self._priorities.clear()
        self._items.clear()