"""Fixed-capacity sequence that is filled once and then read cyclically."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

__all__ = ["SeqBuffer"]

_MAX_CAPACITY = 0xFFFF


class SeqBuffer:
    """Stores up to *capacity* items and walks over them in a loop.

    Items are appended with ``push``; ``front`` returns the current item and
    ``pop`` advances the cursor, wrapping to the first item after the last.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be greater than 0")
        if capacity >= _MAX_CAPACITY:
            raise ValueError(f"capacity must be less than {_MAX_CAPACITY:#x}")
        self._capacity = capacity
        self._items: list[Any] = []
        self._index = 0

    def clear(self) -> None:
        """Drop all items and reset the cursor."""
        self._items.clear()
        self._index = 0

    def push(self, value: Any) -> bool:
        """Append *value*; False when the buffer is full."""
        if len(self._items) >= self._capacity:
            return False
        self._items.append(value)
        return True

    def front(self) -> Any:
        """The item under the cursor.

        Raises IndexError when the buffer is empty.
        """
        if not self._items:
            raise IndexError("front of an empty SeqBuffer")
        return self._items[self._index]

    def pop(self) -> None:
        """Advance the cursor, wrapping to the first item after the last."""
        if not self._items:
            return
        self._index += 1
        if self._index == len(self._items):
            self._index = 0

    def is_empty(self) -> bool:
        return not self._items

    def is_last(self) -> bool:
        """True when the cursor is on the last stored item."""
        return self._index + 1 == len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def capacity(self) -> int:
        return self._capacity

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SeqBuffer(capacity={self._capacity}, items={self._items!r})"