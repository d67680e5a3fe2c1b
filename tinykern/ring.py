"""A fixed-capacity ring buffer that hands consumed items to a callback."""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_SIZE = 8


class RingBuffer(Generic[T]):
    """A bounded FIFO; items produced while full are dropped."""

    def __init__(self, consume_next: Callable[[T], None], size: int = DEFAULT_SIZE) -> None:
        if size < 1:
            raise ValueError("ring buffer size must be positive")
        self._consume_next = consume_next
        self._size = size
        self._buffer: List[Optional[T]] = [None] * size
        self._consumer = 0
        self._producer = 0
        self._full = False

    def __len__(self) -> int:
        if self._full:
            return self._size
        return (self._producer - self._consumer) % self._size

    def is_empty(self) -> bool:
        """True when nothing is waiting to be consumed."""
        return not self._full and self._producer == self._consumer

    def is_full(self) -> bool:
        """True when a further produce would be dropped."""
        return self._full

    def produce(self, item: T) -> bool:
        """Store ``item``; return False and drop it if the buffer is full."""
        if self._full:
            return False
        self._buffer[self._producer] = item
        self._producer = (self._producer + 1) % self._size
        self._full = self._producer == self._consumer
        return True

    def consume(self) -> bool:
        """Pass the oldest item to the callback; return False if empty."""
        if self.is_empty():
            return False
        item = self._buffer[self._consumer]
        self._buffer[self._consumer] = None
        self._consumer = (self._consumer + 1) % self._size
        self._full = False
        self._consume_next(item)  # type: ignore[arg-type]
        return True