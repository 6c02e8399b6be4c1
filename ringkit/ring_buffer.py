"""Byte ring buffer over a power-of-two storage area.

The storage is either allocated by the ring itself or supplied by the
caller (any writable bytes-like object such as a ``bytearray``).  Reads
and writes are bounded by the data present and the free space; they never
block and never raise for lack of room, they simply move fewer bytes.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from typing import Any

from ringkit.ring_base import REG_MASK, RingCounters, next_power_of_2

__all__ = ["RingBuffer"]

_EMPTY_READ = memoryview(b"")


class RingBuffer(RingCounters):
    """FIFO of bytes with free-running head/tail counters."""

    def __init__(self, capacity: int = 0, buffer: Any = None) -> None:
        super().__init__()
        self._buffer: Any = None
        self._owned = False
        if capacity or buffer is not None:
            self.init(capacity, buffer)

    # ------------------------------------------------------------------
    # storage management
    # ------------------------------------------------------------------
    def _reset_storage(self) -> None:
        self._buffer = None
        self._owned = False
        self.clear()

    def _attach_external(self, buffer: Any, capacity: int) -> None:
        if len(buffer) < capacity:
            raise ValueError(
                f"buffer of {len(buffer)} bytes is smaller than capacity {capacity}"
            )
        self._buffer = buffer
        self._owned = False

    def init(self, capacity: int, buffer: Any = None) -> None:
        """Set up storage and reset the counters.

        Without *buffer* the capacity is rounded up to a power of two and
        storage is allocated internally.  With *buffer* the capacity must
        already be a power of two and fit inside the buffer.

        Raises ValueError if the capacity or buffer is unusable; the ring is
        then left without storage.
        """
        try:
            if buffer is None:
                capacity2 = next_power_of_2(capacity)
                super().init(capacity2)
                self._buffer = bytearray(capacity2)
                self._owned = True
            else:
                super().init(capacity)
                self._attach_external(buffer, capacity)
        except ValueError:
            self._reset_storage()
            raise

    def install_buffer(
        self, buffer: Any = None, capacity: int = 0, tail: int = 0, head: int = 0
    ) -> None:
        """Install storage and restore the given tail and head counters.

        Storage already in place is reused when it matches the request.
        Counters whose distance exceeds the capacity are reset to zero.
        Raises ValueError when no usable storage can be installed.
        """
        try:
            if buffer is None:
                capacity2 = next_power_of_2(capacity)
                if self._owned and self._buffer is not None and capacity2 == self.capacity():
                    self._restore_counters(tail, head)
                    return
                self._buffer = None
                self._owned = False
                if capacity == 0:
                    raise ValueError("capacity must be non-zero")
                super().init(capacity2)
                self._buffer = bytearray(capacity2)
                self._owned = True
            else:
                if buffer is self._buffer and capacity == self.capacity():
                    self._restore_counters(tail, head)
                    return
                self._buffer = None
                self._owned = False
                super().init(capacity)
                self._attach_external(buffer, capacity)
        except ValueError:
            self._reset_storage()
            raise
        self._restore_counters(tail, head)

    def _restore_counters(self, tail: int, head: int) -> None:
        if ((head - tail) & REG_MASK) > self.capacity():
            self.clear()
        else:
            self._set_tail(tail)
            self._set_head(head)

    def has_buffer(self) -> bool:
        """True when storage is attached and the capacity is non-zero."""
        return self._buffer is not None and self.capacity() > 0

    def data(self) -> Any:
        """The underlying storage object, or None."""
        return self._buffer

    # ------------------------------------------------------------------
    # zero-copy access
    # ------------------------------------------------------------------
    def front(self) -> memoryview:
        """Contiguous readable region starting at the read position."""
        if not self.has_buffer() or self.is_empty():
            return _EMPTY_READ
        pos = self.read_pos()
        count = min(len(self), self.read_to_end())
        return memoryview(self._buffer)[pos : pos + count]

    def pop(self, size: int) -> None:
        """Discard up to *size* bytes from the front."""
        if size <= 0:
            return
        self._advance_tail(min(size, len(self)))

    def claim(self) -> memoryview:
        """Contiguous writable region starting at the write position."""
        if not self.has_buffer() or self.is_full():
            return memoryview(bytearray())
        pos = self.write_pos()
        count = min(self.free_space(), self.write_to_end())
        return memoryview(self._buffer)[pos : pos + count]

    def publish(self, size: int) -> None:
        """Commit *size* bytes written into a claimed region.

        Sizes of zero or larger than the free space are ignored.
        """
        if size <= 0 or size > self.free_space():
            return
        self._advance_head(size)

    # ------------------------------------------------------------------
    # copying access
    # ------------------------------------------------------------------
    def _copy_out(self, size: int) -> bytes:
        count = min(max(size, 0), len(self))
        pos = self.read_pos()
        first = min(count, self.capacity() - pos)
        view = memoryview(self._buffer)
        return bytes(view[pos : pos + first]) + bytes(view[: count - first])

    def get(self, size: int) -> bytes:
        """Remove and return up to *size* bytes."""
        if not self.has_buffer() or self.is_empty():
            return b""
        out = self._copy_out(size)
        self._advance_tail(len(out))
        return out

    def getc(self) -> int | None:
        """Remove and return one byte, or None when empty."""
        if not self.has_buffer() or self.is_empty():
            return None
        value = self._buffer[self.read_pos()]
        self._advance_tail()
        return value

    def peek(self, size: int) -> bytes:
        """Return up to *size* bytes without consuming them."""
        if not self.has_buffer() or self.is_empty():
            return b""
        return self._copy_out(size)

    def peekc(self) -> int | None:
        """Return the next byte without consuming it, or None when empty."""
        if not self.has_buffer() or self.is_empty():
            return None
        return self._buffer[self.read_pos()]

    def put(self, data: Any) -> int:
        """Append as many bytes of *data* as fit; return the count written."""
        if not self.has_buffer() or self.is_full():
            return 0
        src = data if isinstance(data, (bytes, bytearray)) else bytes(data)
        count = min(len(src), self.free_space())
        pos = self.write_pos()
        first = min(count, self.capacity() - pos)
        view = memoryview(self._buffer)
        view[pos : pos + first] = src[:first]
        view[: count - first] = src[first:count]
        self._advance_head(count)
        return count

    def putc(self, value: int) -> bool:
        """Append one byte; False when there is no room."""
        if not self.has_buffer() or self.is_full():
            return False
        self._buffer[self.write_pos()] = value & 0xFF
        self._advance_head()
        return True

    # ------------------------------------------------------------------
    # typed access through struct formats
    # ------------------------------------------------------------------
    @staticmethod
    def _unpack(fmt: str, raw: bytes) -> Any:
        values = struct.unpack(fmt, raw)
        return values[0] if len(values) == 1 else values

    def get_value(self, fmt: str) -> Any:
        """Remove and decode one value laid out as struct format *fmt*.

        When fewer bytes are present than the format needs, whatever is
        present is still consumed and None is returned.
        """
        size = struct.calcsize(fmt)
        raw = self.get(size)
        if len(raw) != size:
            return None
        return self._unpack(fmt, raw)

    def peek_value(self, fmt: str) -> Any:
        """Decode one value as struct format *fmt* without consuming it."""
        size = struct.calcsize(fmt)
        raw = self.peek(size)
        if len(raw) != size:
            return None
        return self._unpack(fmt, raw)

    def put_value(self, fmt: str, value: Any) -> bool:
        """Encode *value* with struct format *fmt* and append it.

        A tuple supplies several fields.  Returns True only if the whole
        encoding fit; otherwise the part that fit has been written.
        """
        args = value if isinstance(value, tuple) else (value,)
        raw = struct.pack(fmt, *args)
        return self.put(raw) == len(raw)

    # ------------------------------------------------------------------
    # whole-content views
    # ------------------------------------------------------------------
    def chunks(self) -> Iterator[memoryview]:
        """Yield the readable content as at most two contiguous views."""
        if not self.has_buffer() or self.is_empty():
            return
        count = len(self)
        pos = self.read_pos()
        first = min(count, self.capacity() - pos)
        view = memoryview(self._buffer)
        yield view[pos : pos + first]
        if count > first:
            yield view[: count - first]

    def contents(self) -> bytes:
        """All readable bytes, without consuming them."""
        return b"".join(bytes(chunk) for chunk in self.chunks())