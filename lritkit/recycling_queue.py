"""Bounded pool of reusable items passed between a writer and a reader thread."""

import threading
from collections import deque
from typing import Callable, Deque, Generic, Optional, TypeVar

T = TypeVar("T")


class QueueClosedError(RuntimeError):
    """Raised when the writing side uses a closed queue."""


class RecyclingQueue(Generic[T]):
    """Items cycle from writer to reader and back; at most ``capacity`` exist."""

    def __init__(self, capacity: int, factory: Callable[[], T]) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._factory = factory
        self._elements = 0
        self._closed = False
        self._cond = threading.Condition()
        self._write: Deque[T] = deque()
        self._read: Deque[T] = deque()

    def size(self) -> int:
        """Number of items created so far."""
        with self._cond:
            return self._elements

    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def pop_for_write(self) -> T:
        """Take an item to fill, creating one or waiting for a recycled one."""
        with self._cond:
            if self._closed:
                raise QueueClosedError("queue is closed")
            if not self._write:
                if self._elements < self._capacity:
                    self._elements += 1
                    self._write.append(self._factory())
                else:
                    self._cond.wait_for(lambda: self._write or self._closed)
                    if self._closed:
                        raise QueueClosedError("queue is closed")
            return self._write.popleft()

    def push_write(self, item: T) -> None:
        """Hand a filled item to the reader."""
        with self._cond:
            if self._closed:
                raise QueueClosedError("queue is closed")
            self._read.append(item)
            self._cond.notify_all()

    def pop_for_read(self) -> Optional[T]:
        """Take a filled item; None once the queue is closed and drained."""
        with self._cond:
            self._cond.wait_for(lambda: self._read or self._closed)
            if not self._read:
                return None
            return self._read.popleft()

    def push_read(self, item: T) -> None:
        """Return a consumed item for reuse by the writer."""
        with self._cond:
            if not self._closed:
                self._write.append(item)
                self._cond.notify_all()