"""A circular sequence with O(1) rotation and both-end access."""

from __future__ import annotations

from collections import deque
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class CircularList(Generic[T]):
    """An ordered ring of values whose head can be rotated in either direction."""

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: deque[T] = deque(items if items is not None else ())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def insert(self, idx: int, val: T) -> None:
        """Insert ``val`` so that it ends up at position ``idx``.

        ``idx`` may equal the length (append). Anything beyond raises IndexError.
        """
        if idx < 0 or idx > len(self._items):
            raise IndexError(f"insert index {idx} out of range for length {len(self._items)}")
        self._items.insert(idx, val)

    def push_front(self, val: T) -> None:
        """Make ``val`` the new head."""
        self._items.appendleft(val)

    def push_back(self, val: T) -> None:
        """Append ``val`` just before the head."""
        self._items.append(val)

    def _check_index(self, idx: int) -> None:
        if not self._items or idx < 0 or idx >= len(self._items):
            raise IndexError(f"index {idx} out of range for length {len(self._items)}")

    def peek(self, idx: int) -> T:
        """Return the value at ``idx`` without removing it."""
        self._check_index(idx)
        return self._items[idx]

    def peek_front(self) -> T:
        """Return the head value."""
        return self.peek(0)

    def peek_back(self) -> T:
        """Return the value just before the head."""
        return self.peek(len(self._items) - 1)

    def pop(self, idx: int) -> T:
        """Remove and return the value at ``idx``."""
        self._check_index(idx)
        val = self._items[idx]
        del self._items[idx]
        return val

    def pop_front(self) -> T:
        """Remove and return the head value."""
        return self.pop(0)

    def pop_back(self) -> T:
        """Remove and return the last value."""
        return self.pop(len(self._items) - 1)

    def find_where(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Return the first value satisfying ``predicate``, or None."""
        return next((val for val in self._items if predicate(val)), None)

    def find_idx_where(self, predicate: Callable[[T], bool]) -> int:
        """Return the position of the first value satisfying ``predicate``, or -1."""
        return next((k for k, val in enumerate(self._items) if predicate(val)), -1)

    def concat(self, other: "CircularList[T]") -> "CircularList[T]":
        """Move every value of ``other`` onto the end of this list and return it.

        ``other`` is left empty.
        """
        if other is self:
            raise ValueError("cannot concatenate a list with itself")
        self._items.extend(other._items)
        other._items.clear()
        return self

    def rotate_fwd(self, n: int) -> None:
        """Advance the head ``n`` steps towards the tail."""
        if len(self._items) < 2:
            return
        self._items.rotate(-(n % len(self._items)))

    def rotate_bkwd(self, n: int) -> None:
        """Move the head ``n`` steps backwards."""
        if len(self._items) < 2:
            return
        self._items.rotate(n % len(self._items))

    def clear(self) -> None:
        """Remove every value."""
        self._items.clear()