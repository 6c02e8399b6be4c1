# ringkit

Fixed-capacity FIFO containers built on power-of-two ring counters.
Head and tail count up freely and are masked into the storage, so
"empty" and "full" are always told apart without a wasted slot.

The package is pure Python and has no runtime dependencies.

## Installation

```
pip install ringkit
```

For running the tests:

```
pip install "ringkit[test]"
pytest
```

## What is in the package

| Module | Contents |
| --- | --- |
| `ringkit.status` | `Status` codes, with `is_ok`, `is_error`, `is_warning` |
| `ringkit.ring_base` | `RingCounters`, `is_power_of_2`, `next_power_of_2`, `countr_zero` |
| `ringkit.ring_buffer` | `RingBuffer`, a byte ring with bulk and struct-typed access |
| `ringkit.ring_views` | `ReadOnlyRing` and `WriteOnlyRing`, one-sided views over a shared ring |
| `ringkit.seq_buffer` | `SeqBuffer`, an append-only buffer read cyclically |
| `ringkit.queue` | `RingQueue` for arbitrary objects, `BufferSlot`, `make_buffer_collection` |
| `ringkit.span` | `Span`, a non-owning view over a sequence, `make_span`, `make_array` |
| `ringkit.pool` | `PoolContainer` (a queue of fixed-size byte blocks) and `InfinityContainer` (a cyclic pool that keeps the latest write) |

## Byte ring buffer

```python
from ringkit.ring_buffer import RingBuffer

ring = RingBuffer(10)          # rounded up to 16 bytes
ring.put(b"hello")             # 5, the number of bytes stored
ring.put_value("<I", 0xDEADBEEF)

ring.peek(2)                   # b"he", the data stays in the ring
ring.get(5)                    # b"hello"
ring.get_value("<I")           # 0xDEADBEEF
```

Writes that do not fit are cut short: `put` returns how many bytes were
accepted, and `put_value` returns False if the whole encoding did not fit.
Reads of more than is stored return what there is; `getc` and `peekc`
return None on an empty ring.

`claim()` gives a memoryview of the contiguous free region and
`publish(n)` commits `n` bytes written into it; `front()` and `pop(n)`
do the same on the reading side. `chunks()` yields the stored data as at
most two views and `contents()` returns it as bytes without consuming it.

A ring can also run over storage supplied by the caller. The capacity
must then be a power of two that fits inside the buffer:

```python
storage = bytearray(8)
ring = RingBuffer(8, storage)
```

`init` and `install_buffer` raise `ValueError` for an unusable capacity
or buffer. `install_buffer` also restores given tail and head counters.

## Split readers and writers

```python
from ringkit.ring_buffer import RingBuffer
from ringkit.ring_views import ReadOnlyRing, WriteOnlyRing

ring = RingBuffer(64)
writer = WriteOnlyRing(ring)
writer.put(b"frame")
writer.commit(ring)            # make the new head visible to the ring

reader = ReadOnlyRing(ring)
reader.get(5)                  # b"frame"
reader.commit(ring)            # hand the consumed space back
```

A view works on the same storage as its source but keeps its own
counters. `commit` returns False when the two do not share storage or
the resulting distance between head and tail would exceed the capacity.

## Object queues

```python
from ringkit.queue import RingQueue, make_buffer_collection

q = RingQueue(4)
q.push("a")                    # True
q.push("b")
q.front()                      # "a"
q.pop()
list(q)                        # ["b"]
q[0]                           # "b"
```

`front` raises `IndexError` on an empty queue and `claim` on a full one;
`push` returns False when there is no room. With a `factory`, every slot
is pre-built and can be filled in place through `claim()` and
`publish()`. `make_buffer_collection(slot_capacity, count)` returns such a
queue of `BufferSlot` blocks (`elem` list plus `size`); `count` must be a
power of two.

## Pools of byte blocks

```python
from ringkit.pool import PoolContainer, InfinityContainer

pool = PoolContainer(buffer_size=8, capacity=4)
pool.push(b"abc")              # True
bytes(pool.front()[:3])        # b"abc"
pool.pop()

latest = InfinityContainer(depth=3, buffer_size=4)   # depth rounded to 4
latest.append(b"v1")
latest.append(b"v2")
latest.read(2)                 # b"v2"
latest.is_empty()              # True: the last block has been read
```

`InfinityContainer` never fills up: each `append` overwrites the oldest
block, and `read`/`last` always refer to the most recent one.

## Sequences and spans

```python
from ringkit.seq_buffer import SeqBuffer
from ringkit.span import make_span

seq = SeqBuffer(3)
seq.push(1)
seq.push(2)
seq.front()                    # 1
seq.pop()
seq.front()                    # 2
seq.pop()
seq.front()                    # 1, the cursor wraps around

data = [1, 2, 3, 4, 5]
view = make_span(data).subspan(1, 3)
view.tolist()                  # [2, 3, 4]
view[0] = 20                   # writes through: data[1] == 20
view.at(10)                    # None
```

## Status codes

```python
from ringkit.status import Status, is_error

is_error(Status.ERROR_TIMEOUT)  # True
```

## What the package does not do

ringkit is a library of in-memory containers only. It does no device or
serial I/O, and none of its containers take locks: share one between
threads only with your own synchronisation.