"""Bounded FIFO queue and bounded double-ended queue."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Iterator


class QueueFullError(Exception):
    """Raised when adding to a queue that is at capacity."""

    def __init__(self, message: str = "queue is full"):
        super().__init__(message)


class QueueEmptyError(Exception):
    """Raised when reading from an empty queue."""

    def __init__(self, message: str = "queue is empty"):
        super().__init__(message)


def _check_capacity(capacity: int) -> int:
    if capacity < 1:
        raise ValueError("capacity must be greater than 0")
    return capacity


class LoopQueue:
    """FIFO queue holding at most ``capacity`` items."""

    def __init__(self, capacity: int):
        self._capacity = _check_capacity(capacity)
        self._items: Deque[Any] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, value: Any) -> None:
        """Append ``value`` at the tail."""
        if self.is_full():
            raise QueueFullError()
        self._items.append(value)

    def pop(self) -> Any:
        """Remove and return the oldest item."""
        if self.is_empty():
            raise QueueEmptyError()
        return self._items.popleft()

    def front(self) -> Any:
        """Return the oldest item without removing it."""
        if self.is_empty():
            raise QueueEmptyError()
        return self._items[0]

    def tail(self) -> Any:
        """Return the newest item without removing it."""
        if self.is_empty():
            raise QueueEmptyError()
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))


class LoopDeque:
    """Double-ended queue holding at most ``capacity`` items."""

    def __init__(self, capacity: int):
        self._capacity = _check_capacity(capacity)
        self._items: Deque[Any] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push_front(self, value: Any) -> None:
        if self.is_full():
            raise QueueFullError()
        self._items.appendleft(value)

    def push_tail(self, value: Any) -> None:
        if self.is_full():
            raise QueueFullError()
        self._items.append(value)

    def pop_front(self) -> Any:
        if self.is_empty():
            raise QueueEmptyError()
        return self._items.popleft()

    def pop_tail(self) -> Any:
        if self.is_empty():
            raise QueueEmptyError()
        return self._items.pop()

    def get_front(self) -> Any:
        if self.is_empty():
            raise QueueEmptyError()
        return self._items[0]

    def get_tail(self) -> Any:
        if self.is_empty():
            raise QueueEmptyError()
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))