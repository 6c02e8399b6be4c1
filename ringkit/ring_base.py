"""Head/tail bookkeeping for power-of-two ring buffers.

Counters run freely and wrap modulo the register width; positions inside
the storage are obtained by masking with ``capacity - 1``.
"""

from __future__ import annotations

__all__ = [
    "REG_BITS",
    "REG_MASK",
    "is_power_of_2",
    "next_power_of_2",
    "countr_zero",
    "RingCounters",
]

REG_BITS = 64
REG_MASK = (1 << REG_BITS) - 1


def is_power_of_2(x: int) -> bool:
    """Return True if *x* is a positive power of two."""
    return x > 0 and (x & (x - 1)) == 0


def next_power_of_2(n: int) -> int:
    """Smallest power of two not below *n*; 0 maps to 1.

    Values that do not fit in a register wrap to 0, as the unsigned
    register arithmetic does.
    """
    if n < 0:
        raise ValueError(f"value must be non-negative, got {n}")
    if n == 0:
        return 1
    result = 1 << (n - 1).bit_length()
    return result & REG_MASK


def countr_zero(x: int) -> int:
    """Number of trailing zero bits of a power of two; 0 for anything else."""
    if not is_power_of_2(x):
        return 0
    return x.bit_length() - 1


class RingCounters:
    """Free-running head (write) and tail (read) counters of a ring.

    A capacity of 0 describes a ring without storage: it is both empty
    and full and accepts no data.
    """

    def __init__(self, capacity: int = 0) -> None:
        self._cap = 0
        self._mask = 0
        self._head = 0
        self._tail = 0
        if capacity:
            self.init(capacity)

    def init(self, capacity: int) -> None:
        """Set a new capacity (a power of two) and reset both counters."""
        if not is_power_of_2(capacity):
            raise ValueError(f"capacity must be a power of two, got {capacity}")
        self._cap = capacity
        self._mask = capacity - 1
        self._head = 0
        self._tail = 0

    def clear(self) -> None:
        """Drop all content by resetting both counters."""
        self._head = 0
        self._tail = 0

    def sync_head(self) -> None:
        """Move the head back onto the tail, discarding unread data."""
        self._head = self._tail

    def sync_tail(self) -> None:
        """Move the tail up to the head, consuming all data."""
        self._tail = self._head

    def is_empty(self) -> bool:
        return self._head == self._tail

    def is_full(self) -> bool:
        return len(self) == self._cap

    def is_last(self) -> bool:
        """True when exactly one element remains."""
        return len(self) == 1

    def __len__(self) -> int:
        return (self._head - self._tail) & REG_MASK

    def free_space(self) -> int:
        """Number of empty cells."""
        return self._cap - len(self)

    def capacity(self) -> int:
        return self._cap

    def mask(self) -> int:
        return self._mask

    def head(self) -> int:
        return self._head

    def tail(self) -> int:
        return self._tail

    def write_pos(self) -> int:
        """Storage index the next write goes to."""
        return self._head & self._mask

    def read_pos(self) -> int:
        """Storage index the next read comes from."""
        return self._tail & self._mask

    def write_to_end(self) -> int:
        """Cells from the write position to the end of storage."""
        return self._cap - self.write_pos()

    def read_to_end(self) -> int:
        """Cells from the read position to the end of storage."""
        return self._cap - self.read_pos()

    def _set_head(self, value: int) -> None:
        self._head = value & REG_MASK

    def _set_tail(self, value: int) -> None:
        self._tail = value & REG_MASK

    def _advance_head(self, count: int = 1) -> None:
        self._head = (self._head + count) & REG_MASK

    def _advance_tail(self, count: int = 1) -> None:
        self._tail = (self._tail + count) & REG_MASK

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._cap}, "
            f"head={self._head}, tail={self._tail})"
        )