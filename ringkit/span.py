"""Non-owning views over a contiguous part of a sequence."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

__all__ = ["Span", "make_span", "make_array"]


class Span:
    """A window of *size* elements of *data* starting at *offset*.

    Reads and writes go straight to the underlying sequence; nothing is
    copied.  A span without data is empty.
    """

    __slots__ = ("_data", "_offset", "_size")

    def __init__(self, data: Any = None, offset: int = 0, size: int | None = None) -> None:
        if data is None:
            if offset or size:
                raise ValueError("a span without data has no offset or size")
            self._data = None
            self._offset = 0
            self._size = 0
            return
        total = len(data)
        if not 0 <= offset <= total:
            raise ValueError(f"offset {offset} outside a sequence of {total} elements")
        available = total - offset
        if size is None:
            size = available
        elif not 0 <= size <= available:
            raise ValueError(
                f"size {size} does not fit after offset {offset} in {total} elements"
            )
        self._data = data
        self._offset = offset
        self._size = size

    def __len__(self) -> int:
        return self._size

    def _position(self, index: int) -> int:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("span index out of range")
        return self._offset + index

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            start, stop, step = index.indices(self._size)
            if step != 1:
                raise ValueError("span slices must be contiguous")
            return Span(self._data, self._offset + start, max(stop - start, 0))
        return self._data[self._position(index)]

    def __setitem__(self, index: int, value: Any) -> None:
        self._data[self._position(index)] = value

    def __iter__(self) -> Iterator[Any]:
        data = self._data
        return (data[i] for i in range(self._offset, self._offset + self._size))

    def at(self, index: int) -> Any:
        """Element at *index*, or None when the index is out of range."""
        if 0 <= index < self._size:
            return self._data[self._offset + index]
        return None

    def is_empty(self) -> bool:
        return self._size == 0

    def subspan(self, offset: int, count: int | None = None) -> Span:
        """A span of *count* elements starting *offset* elements in.

        An offset past the end gives an empty span; a count running past
        the end, or None, is cut to what remains.
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        if offset > self._size:
            return Span()
        if count is None or offset + count > self._size:
            count = self._size - offset
        return Span(self._data, self._offset + offset, count)

    def tolist(self) -> list[Any]:
        """Copy of the viewed elements."""
        return list(self)

    def __repr__(self) -> str:
        return f"Span({self.tolist()!r})"


def make_span(data: Any, size: int | None = None) -> Span:
    """A span over the first *size* elements of *data* (all when None)."""
    return Span(data, 0, size)


def make_array(items: Iterable[Any]) -> list[Any]:
    """An independent copy of *items*; raises ValueError when empty."""
    result = list(items)
    if not result:
        raise ValueError("array size must be greater than 0")
    return result