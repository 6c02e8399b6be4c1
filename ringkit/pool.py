"""Pools of fixed-size byte blocks.

``PoolContainer`` is a FIFO of blocks: data is copied into the next free
block (or written in place through ``claim``/``publish``) and read back in
order.  ``InfinityContainer`` never fills up: every write goes to the next
block in a cycle and the most recently written block is always at hand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ringkit.ring_base import REG_MASK, RingCounters, next_power_of_2

__all__ = ["PoolContainer", "InfinityContainer"]


class PoolContainer(RingCounters):
    """FIFO of equally sized byte blocks over a power-of-two pool."""

    def __init__(self, buffer_size: int = 0, capacity: int = 0) -> None:
        super().__init__()
        self._pool: list[bytearray] | None = None
        self._buffer_size = 0
        if buffer_size or capacity:
            self.init(buffer_size, capacity)

    def init(self, buffer_size: int, capacity: int) -> None:
        """Allocate a pool of blocks of *buffer_size* bytes each.

        The number of blocks is *capacity* rounded up to a power of two.
        Raises ValueError for a block size of 0 or an unusable capacity;
        the container is then left without a pool.
        """
        self._pool = None
        self._buffer_size = 0
        try:
            if buffer_size <= 0:
                raise ValueError(f"buffer size must be positive, got {buffer_size}")
            capacity2 = next_power_of_2(capacity)
            super().init(capacity2)
        except ValueError:
            self.clear()
            raise
        self._pool = [bytearray(buffer_size) for _ in range(capacity2)]
        self._buffer_size = buffer_size

    def has_buffer(self) -> bool:
        """True when the pool is allocated."""
        return self._pool is not None

    def push(self, data: Any) -> bool:
        """Copy *data* into the next free block.

        Returns False when the data is larger than a block, the pool is
        full or there is no pool.  Bytes of the block past the data keep
        their previous contents.
        """
        src = data if isinstance(data, (bytes, bytearray)) else bytes(data)
        if len(src) > self._buffer_size or self.is_full() or not self.has_buffer():
            return False
        self._pool[self.write_pos()][: len(src)] = src
        self._advance_head()
        return True

    def front(self) -> memoryview | None:
        """The oldest block, or None when empty or without a pool."""
        if self.is_empty() or not self.has_buffer():
            return None
        return memoryview(self._pool[self.read_pos()])

    def pop(self) -> None:
        """Release the oldest block; does nothing when empty."""
        if self.is_empty() or not self.has_buffer():
            return
        self._advance_tail()

    def claim(self) -> memoryview | None:
        """The next free block to fill in place, or None when full."""
        if self.is_full() or not self.has_buffer():
            return None
        return memoryview(self._pool[self.write_pos()])

    def publish(self) -> None:
        """Commit the claimed block; does nothing when full."""
        if self.is_full() or not self.has_buffer():
            return
        self._advance_head()

    def __len__(self) -> int:
        return super().__len__() if self.has_buffer() else 0

    def capacity(self) -> int:
        """Number of blocks, or 0 without a pool."""
        return super().capacity() if self.has_buffer() else 0

    def buffer_size(self) -> int:
        """Size of each block in bytes, or 0 without a pool."""
        return self._buffer_size if self.has_buffer() else 0

    def __getitem__(self, index: int) -> memoryview:
        """Block at *index* counted from the read position.

        The index must lie within the pool's capacity; it may reach past
        the stored elements into free blocks.
        """
        if not self.has_buffer():
            raise IndexError("pool has no storage")
        if not 0 <= index < self.capacity():
            raise IndexError("pool index out of range")
        return memoryview(self._pool[(self.tail() + index) & self.mask()])

    def __repr__(self) -> str:
        return (
            f"PoolContainer(buffer_size={self.buffer_size()}, "
            f"capacity={self.capacity()}, elements={len(self)})"
        )


class InfinityContainer:
    """Cyclic pool of blocks that keeps the last written block available.

    Writing never fails for lack of room: it simply overwrites the oldest
    block.  Reading always refers to the most recently written block.
    """

    def __init__(self, depth: int | None = None, buffer_size: int = 0) -> None:
        self._pool: list[bytearray] | None = None
        self._current = 0
        self._last_read = 0
        self._mask = 0
        self._depth = 0
        self._buffer_size = 0
        if depth is not None:
            self.init(depth, buffer_size)

    def init(self, depth: int, buffer_size: int) -> None:
        """Allocate *depth* zeroed blocks (rounded up to a power of two).

        Raises ValueError for a negative depth or block size.
        """
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        if buffer_size < 0:
            raise ValueError(f"buffer size must be non-negative, got {buffer_size}")
        depth2 = next_power_of_2(depth)
        self._pool = [bytearray(buffer_size) for _ in range(depth2)]
        self._depth = depth2
        self._buffer_size = buffer_size
        self._current = 0
        self._last_read = 0
        self._mask = depth2 - 1

    def append(self, data: Any) -> int:
        """Copy *data* into the next block and advance to it.

        Returns the number of bytes written, or 0 when the data is larger
        than a block or the container is not initialised.
        """
        src = data if isinstance(data, (bytes, bytearray)) else bytes(data)
        if len(src) > self._buffer_size or self._pool is None:
            return 0
        self._pool[self._current & self._mask][: len(src)] = src
        self._current = (self._current + 1) & REG_MASK
        return len(src)

    def next(self) -> memoryview | None:
        """The block the next write goes to, or None when not initialised."""
        if self._pool is None:
            return None
        return memoryview(self._pool[self._current & self._mask])

    def commit(self) -> None:
        """Advance past a block filled in place through ``next``."""
        self._current = (self._current + 1) & REG_MASK

    def read(self, size: int) -> bytes:
        """Copy *size* bytes of the last written block and mark it read.

        Returns b"" when *size* exceeds a block or the container is not
        initialised.
        """
        if size < 0 or size > self._buffer_size or self._pool is None:
            return b""
        block = self._pool[(self._current - 1) & self._mask]
        self._last_read = self._current
        return bytes(block[:size])

    def last(self) -> memoryview | None:
        """The last written block, or None when not initialised."""
        if self._pool is None:
            return None
        return memoryview(self._pool[(self._current - 1) & self._mask])

    def acknowledge(self) -> None:
        """Mark the last written block as read."""
        self._last_read = self._current

    def is_empty(self) -> bool:
        """True when nothing new was written since the last read."""
        return self._last_read == self._current

    def buffer_size(self) -> int:
        return self._buffer_size

    def pool_size(self) -> int:
        return self._depth

    def is_initialized(self) -> bool:
        return self._pool is not None

    def initialize_pool(self, function: Callable[[bytearray, int], Any]) -> None:
        """Call ``function(block, buffer_size)`` on every block of the pool."""
        if function is None or self._pool is None:
            return
        for block in self._pool:
            function(block, self._buffer_size)

    def __repr__(self) -> str:
        return (
            f"InfinityContainer(pool_size={self._depth}, "
            f"buffer_size={self._buffer_size})"
        )