"""Read-only and write-only views that share storage with a ring buffer.

A view copies the counters of a source ring and works on the same storage.
A reader consumes data through a ``ReadOnlyRing`` and hands its progress
back with ``commit``. A writer appends through a ``WriteOnlyRing`` and
publishes its progress the same way. Until ``commit`` the source ring does
not see what the view did.
"""

from __future__ import annotations

from typing import Any

from ringkit.ring_base import REG_MASK
from ringkit.ring_buffer import RingBuffer

__all__ = ["ReadOnlyRing", "WriteOnlyRing"]


class _RingView:
    """Shared machinery: a private ring placed over a source's storage."""

    def __init__(self, source: Any) -> None:
        self._ring = RingBuffer()
        if source.has_buffer():
            self._ring.install_buffer(
                source.data(), source.capacity(), source.tail(), source.head()
            )

    def has_buffer(self) -> bool:
        return self._ring.has_buffer()

    def data(self) -> Any:
        return self._ring.data()

    def capacity(self) -> int:
        return self._ring.capacity()

    def head(self) -> int:
        return self._ring.head()

    def tail(self) -> int:
        return self._ring.tail()

    def __len__(self) -> int:
        return len(self._ring)

    def is_empty(self) -> bool:
        return self._ring.is_empty()

    def is_full(self) -> bool:
        return self._ring.is_full()

    def free_space(self) -> int:
        return self._ring.free_space()

    def _set_head(self, value: int) -> None:
        self._ring._set_head(value)

    def _set_tail(self, value: int) -> None:
        self._ring._set_tail(value)

    def _shares_storage(self, other: Any) -> bool:
        return (
            other.has_buffer()
            and self.has_buffer()
            and other.data() is self.data()
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self.capacity()}, "
            f"head={self.head()}, tail={self.tail()})"
        )


class ReadOnlyRing(_RingView):
    """A consumer's view of a ring: reading operations only."""

    def __init__(self, source: Any) -> None:
        """Place a reading view over *source*'s storage and counters."""
        super().__init__(source)

    def commit(self, other: Any) -> bool:
        """Move *other*'s tail to this view's tail.

        Returns False when the rings do not share storage or when the
        resulting distance to *other*'s head would exceed a capacity.
        """
        if not self._shares_storage(other):
            return False
        distance = (other.head() - self.tail()) & REG_MASK
        if distance > other.capacity() or distance > self.capacity():
            return False
        other._set_tail(self.tail())
        return True

    def front(self) -> memoryview:
        """Contiguous readable region starting at the read position."""
        return self._ring.front()

    def pop(self, size: int) -> None:
        """Discard up to *size* bytes from the front."""
        self._ring.pop(size)

    def get(self, size: int) -> bytes:
        """Remove and return up to *size* bytes."""
        return self._ring.get(size)

    def getc(self) -> int | None:
        """Remove and return one byte, or None when empty."""
        return self._ring.getc()

    def peek(self, size: int) -> bytes:
        """Return up to *size* bytes without consuming them."""
        return self._ring.peek(size)

    def peekc(self) -> int | None:
        """Return the next byte without consuming it, or None when empty."""
        return self._ring.peekc()

    def get_value(self, fmt: str) -> Any:
        """Remove and decode one value laid out as struct format *fmt*."""
        return self._ring.get_value(fmt)

    def peek_value(self, fmt: str) -> Any:
        """Decode one value as struct format *fmt* without consuming it."""
        return self._ring.peek_value(fmt)


class WriteOnlyRing(_RingView):
    """A producer's view of a ring: writing operations only."""

    def __init__(self, source: Any) -> None:
        """Place a writing view over *source*'s storage and counters."""
        super().__init__(source)

    def commit(self, other: Any) -> bool:
        """Move *other*'s head to this view's head.

        Returns False when the rings do not share storage or when the
        resulting distance from *other*'s tail would exceed a capacity.
        """
        if not self._shares_storage(other):
            return False
        distance = (self.head() - other.tail()) & REG_MASK
        if distance > other.capacity() or distance > self.capacity():
            return False
        other._set_head(self.head())
        return True

    def claim(self) -> memoryview:
        """Contiguous writable region starting at the write position."""
        return self._ring.claim()

    def publish(self, size: int) -> None:
        """Commit *size* bytes written into a claimed region."""
        self._ring.publish(size)

    def put(self, data: Any) -> int:
        """Append as many bytes of *data* as fit; return the count written."""
        return self._ring.put(data)

    def putc(self, value: int) -> bool:
        """Append one byte; False when there is no room."""
        return self._ring.putc(value)

    def put_value(self, fmt: str, value: Any) -> bool:
        """Encode *value* with struct format *fmt* and append it."""
        return self._ring.put_value(fmt, value)