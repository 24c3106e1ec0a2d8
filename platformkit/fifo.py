"""A first-in, first-out queue."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

T = TypeVar("T")


class Fifo(Generic[T]):
    """Items come out in the order they were pushed."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, item: T) -> None:
        """Append ``item`` to the back."""
        self._items.append(item)

    def pop(self) -> T:
        """Remove and return the front item; raise IndexError when empty."""
        if not self._items:
            raise IndexError("pop from an empty queue")
        return self._items.popleft()

    def peek(self, index: int) -> T:
        """Return the item at ``index`` from the front without removing it."""
        if index < 0 or index >= len(self._items):
            raise IndexError(f"no item at position {index}")
        return self._items[index]

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()