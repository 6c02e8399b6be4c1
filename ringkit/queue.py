"""Fixed-capacity FIFO queues of arbitrary objects over power-of-two storage.

Storage is a list of slots. It is either built by the queue, filled through
an optional factory, or supplied by the caller. Besides plain ``push`` and
``pop`` the queue supports writing in two steps: ``claim`` hands out the
next free slot object to fill in place, and ``publish`` commits it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ringkit.ring_base import REG_MASK, RingCounters, is_power_of_2, next_power_of_2

__all__ = ["RingQueue", "BufferSlot", "make_buffer_collection"]


class RingQueue(RingCounters):
    """FIFO queue of objects with free-running head/tail counters."""

    def __init__(
        self, capacity: int = 0, factory: Callable[[], Any] | None = None
    ) -> None:
        super().__init__()
        self._factory = factory
        self._storage: list[Any] | None = None
        self._owned = False
        if capacity:
            self.init(capacity)

    # ------------------------------------------------------------------
    # storage management
    # ------------------------------------------------------------------
    def _allocate(self, count: int) -> list[Any]:
        if self._factory is None:
            return [None] * count
        return [self._factory() for _ in range(count)]

    def _reset_storage(self) -> None:
        self._storage = None
        self._owned = False
        self.clear()

    @staticmethod
    def _check_fits(storage: list[Any], capacity: int) -> None:
        if len(storage) < capacity:
            raise ValueError(
                f"storage of {len(storage)} slots is smaller than capacity {capacity}"
            )

    def _restore_counters(self, tail: int, head: int) -> None:
        if ((head - tail) & REG_MASK) > super().capacity():
            self.clear()
        else:
            self._set_tail(tail)
            self._set_head(head)

    def init(self, capacity: int, storage: list[Any] | None = None) -> None:
        """Set up storage and reset the counters.

        Without *storage* the capacity is rounded up to a power of two and
        slots are created internally.  With *storage* the capacity must
        already be a power of two and fit inside it.

        Raises ValueError on an unusable capacity or storage; the queue is
        then left without storage.
        """
        self._storage = None
        self._owned = False
        try:
            if storage is None:
                capacity2 = next_power_of_2(capacity)
                super().init(capacity2)
                self._storage = self._allocate(capacity2)
                self._owned = True
            else:
                super().init(capacity)
                self._check_fits(storage, capacity)
                self._storage = storage
        except ValueError:
            self._reset_storage()
            raise

    def install_buffer(
        self,
        storage: list[Any] | None = None,
        capacity: int = 0,
        tail: int = 0,
        head: int = 0,
    ) -> None:
        """Install storage and restore the given tail and head counters.

        Storage already in place is reused when it matches the request.  A
        capacity of 0 keeps the current capacity.  Counters whose distance
        exceeds the capacity are reset to zero.  Raises ValueError when no
        usable storage can be installed.
        """
        try:
            if storage is None:
                capacity2 = next_power_of_2(capacity)
                if (
                    self._owned
                    and self._storage is not None
                    and capacity2 == super().capacity()
                ):
                    self._restore_counters(tail, head)
                    return
                self._storage = None
                self._owned = False
                if capacity and capacity2 != super().capacity():
                    super().init(capacity2)
                elif super().capacity() == 0:
                    raise ValueError("capacity must be non-zero")
                self._storage = self._allocate(super().capacity())
                self._owned = True
            else:
                if storage is self._storage and capacity == super().capacity():
                    self._restore_counters(tail, head)
                    return
                self._storage = None
                self._owned = False
                if capacity and capacity != super().capacity():
                    super().init(capacity)
                elif super().capacity() == 0:
                    raise ValueError("capacity must be non-zero")
                self._check_fits(storage, super().capacity())
                self._storage = storage
        except ValueError:
            self._reset_storage()
            raise
        self._restore_counters(tail, head)

    def has_buffer(self) -> bool:
        """True when storage is attached."""
        return self._storage is not None

    def capacity(self) -> int:
        """Number of slots, or 0 without storage."""
        return super().capacity() if self.has_buffer() else 0

    # ------------------------------------------------------------------
    # queue operations
    # ------------------------------------------------------------------
    def push(self, value: Any) -> bool:
        """Append *value*; False when there is no storage or no room."""
        if not self.has_buffer() or self.is_full():
            return False
        self._storage[self.write_pos()] = value
        self._advance_head()
        return True

    def front(self) -> Any:
        """The oldest element.

        Raises IndexError when the queue is empty or has no storage.
        """
        if not self.has_buffer() or self.is_empty():
            raise IndexError("front of an empty queue")
        return self._storage[self.read_pos()]

    def pop(self) -> None:
        """Remove the oldest element; does nothing when empty."""
        if not self.has_buffer() or self.is_empty():
            return
        self._advance_tail()

    def claim(self) -> Any:
        """The slot object the next element will occupy.

        Fill it in place and call ``publish``.  Raises IndexError when the
        queue is full or has no storage.
        """
        if not self.has_buffer() or self.is_full():
            raise IndexError("claim on a full queue")
        return self._storage[self.write_pos()]

    def publish(self) -> None:
        """Commit the claimed slot; does nothing when full."""
        if not self.has_buffer() or self.is_full():
            return
        self._advance_head()

    def __len__(self) -> int:
        return super().__len__() if self.has_buffer() else 0

    def __getitem__(self, index: int) -> Any:
        """Element at *index* counted from the oldest one."""
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("queue index out of range")
        return self._storage[(self.tail() + index) & self.mask()]

    def __iter__(self) -> Iterator[Any]:
        """Yield the stored elements from oldest to newest."""
        if not self.has_buffer():
            return
        tail = self.tail()
        mask = self.mask()
        for offset in range(len(self)):
            yield self._storage[(tail + offset) & mask]

    def __repr__(self) -> str:
        return f"RingQueue(capacity={self.capacity()}, items={list(self)!r})"


@dataclass
class BufferSlot:
    """A fixed-size block of elements together with the count in use."""

    elem: list[Any] = field(default_factory=list)
    size: int = 0


def make_buffer_collection(slot_capacity: int, count: int) -> RingQueue:
    """A queue of *count* ``BufferSlot`` blocks of *slot_capacity* zeros each.

    *count* must be a power of two.
    """
    if not is_power_of_2(count):
        raise ValueError(f"count must be a power of two, got {count}")
    if slot_capacity < 0:
        raise ValueError(f"slot capacity must be non-negative, got {slot_capacity}")
    return RingQueue(count, factory=lambda: BufferSlot([0] * slot_capacity))