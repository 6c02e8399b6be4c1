import struct
from collections import deque

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ringkit.ring_base import REG_MASK, next_power_of_2
from ringkit.ring_buffer import RingBuffer


def test_default_ring_has_no_storage():
    ring = RingBuffer()
    assert ring.has_buffer() is False
    assert ring.put(b"abc") == 0
    assert ring.get(3) == b""
    assert ring.getc() is None
    assert ring.peekc() is None
    assert ring.putc(1) is False
    assert len(ring.front()) == 0
    assert len(ring.claim()) == 0


def test_internal_capacity_rounds_up():
    ring = RingBuffer(5)
    assert ring.capacity() == next_power_of_2(5)
    assert len(ring.data()) == ring.capacity()
    assert ring.has_buffer() is True


def test_external_buffer_requires_power_of_two():
    ring = RingBuffer()
    with pytest.raises(ValueError):
        ring.init(6, bytearray(6))
    assert ring.has_buffer() is False


def test_external_buffer_too_small():
    with pytest.raises(ValueError):
        RingBuffer(8, bytearray(4))


def test_put_get_round_trip():
    ring = RingBuffer(16)
    assert ring.put(b"hello") == 5
    assert len(ring) == 5
    assert ring.get(5) == b"hello"
    assert ring.is_empty()


def test_put_constrained_to_free_space():
    ring = RingBuffer(16)
    data = bytes(range(20))
    assert ring.put(data) == ring.capacity()
    assert ring.is_full()
    assert ring.put(b"x") == 0
    assert ring.get(100) == data[: ring.capacity()]


def test_wraparound_contents_and_chunks():
    ring = RingBuffer(8)
    first = b"ABCDEF"
    ring.put(first)
    assert ring.get(4) == first[:4]
    second = b"ghijkl"
    assert ring.put(second) == len(second)
    expected = first[4:] + second
    assert ring.contents() == expected
    parts = [bytes(c) for c in ring.chunks()]
    assert len(parts) == 2
    assert b"".join(parts) == expected
    assert ring.peek(100) == expected
    assert ring.get(100) == expected


def test_front_and_pop():
    ring = RingBuffer(8)
    ring.put(b"abcdef")
    ring.pop(5)
    ring.put(b"uvwxyz")
    view = ring.front()
    assert bytes(view) == ring.contents()[: len(view)]
    assert len(view) == ring.read_to_end()
    ring.pop(len(view))
    assert bytes(ring.front()) == ring.contents()


def test_pop_more_than_length_empties():
    ring = RingBuffer(8)
    ring.put(b"abc")
    ring.pop(100)
    assert ring.is_empty()
    ring.pop(0)
    assert ring.is_empty()


def test_claim_publish():
    ring = RingBuffer(8)
    view = ring.claim()
    assert len(view) == ring.capacity()
    view[:3] = b"xyz"
    ring.publish(3)
    assert ring.get(3) == b"xyz"


def test_publish_too_large_ignored():
    ring = RingBuffer(8)
    ring.put(b"abcdef")
    ring.publish(ring.free_space() + 1)
    assert len(ring) == 6
    ring.publish(0)
    assert len(ring) == 6


def test_peek_does_not_consume():
    ring = RingBuffer(8)
    ring.put(b"data")
    assert ring.peek(2) == b"da"
    assert ring.peekc() == ord("d")
    assert len(ring) == 4
    assert ring.getc() == ord("d")
    assert len(ring) == 3


def test_putc_until_full():
    ring = RingBuffer(4)
    results = [ring.putc(v) for v in range(ring.capacity() + 1)]
    assert results[:-1] == [True] * ring.capacity()
    assert results[-1] is False
    assert ring.get(10) == bytes(range(ring.capacity()))


def test_value_round_trip():
    ring = RingBuffer(16)
    assert ring.put_value("<I", 0x12345678) is True
    assert ring.peek(4) == struct.pack("<I", 0x12345678)
    assert ring.peek_value("<I") == 0x12345678
    assert ring.get_value("<I") == 0x12345678
    assert ring.is_empty()


def test_multi_field_value():
    ring = RingBuffer(16)
    assert ring.put_value("<Hh", (7, -3)) is True
    assert ring.get_value("<Hh") == (7, -3)


def test_short_get_value_consumes_and_returns_none():
    ring = RingBuffer(8)
    ring.put(b"ab")
    assert ring.peek_value("<I") is None
    assert len(ring) == 2
    assert ring.get_value("<I") is None
    assert ring.is_empty()


def test_put_value_partial():
    ring = RingBuffer(4)
    ring.put(b"ab")
    assert ring.put_value("<I", 1) is False
    assert ring.is_full()


def test_install_external_with_counters():
    storage = bytearray(b"abcdefgh")
    ring = RingBuffer()
    ring.install_buffer(storage, 8, tail=2, head=5)
    assert ring.data() is storage
    assert ring.contents() == bytes(storage[2:5])


def test_install_counters_out_of_range_clears():
    storage = bytearray(8)
    ring = RingBuffer()
    ring.install_buffer(storage, 8, tail=0, head=9)
    assert ring.is_empty()
    assert ring.head() == 0 and ring.tail() == 0


def test_install_same_buffer_keeps_storage():
    storage = bytearray(8)
    ring = RingBuffer(8, storage)
    ring.put(b"abcd")
    ring.install_buffer(storage, 8, tail=1, head=3)
    assert ring.data() is storage
    assert ring.contents() == b"bc"


def test_install_internal_reuses_owned_storage():
    ring = RingBuffer(8)
    original = ring.data()
    ring.install_buffer(None, 8, tail=0, head=2)
    assert ring.data() is original
    assert len(ring) == 2


def test_install_internal_zero_capacity_raises():
    ring = RingBuffer(8, bytearray(8))
    with pytest.raises(ValueError):
        ring.install_buffer(None, 0)
    assert ring.has_buffer() is False


def test_install_external_bad_capacity_raises():
    ring = RingBuffer(8)
    with pytest.raises(ValueError):
        ring.install_buffer(bytearray(12), 12)
    assert ring.data() is None


def test_shared_external_storage():
    storage = bytearray(8)
    writer = RingBuffer(8, storage)
    writer.put(b"shared")
    reader = RingBuffer()
    reader.install_buffer(storage, 8, writer.tail(), writer.head())
    assert reader.get(6) == b"shared"


def test_counters_wrap_around_register():
    ring = RingBuffer()
    start = REG_MASK - 1
    ring.install_buffer(bytearray(8), 8, tail=start, head=start)
    payload = b"wrap"
    assert ring.put(payload) == len(payload)
    assert ring.head() < ring.tail()
    assert len(ring) == len(payload)
    assert ring.get(10) == payload
    assert ring.is_empty()


ops = st.lists(
    st.one_of(
        st.tuples(st.just("put"), st.binary(max_size=12)),
        st.tuples(st.just("get"), st.integers(min_value=0, max_value=12)),
        st.tuples(st.just("pop"), st.integers(min_value=0, max_value=12)),
    ),
    max_size=40,
)


@settings(max_examples=200)
@given(ops)
def test_matches_fifo_model(operations):
    ring = RingBuffer(8)
    model: deque[int] = deque()
    for op, arg in operations:
        if op == "put":
            written = ring.put(arg)
            expected = min(len(arg), ring.capacity() - len(model))
            assert written == expected
            model.extend(arg[:written])
        elif op == "get":
            out = ring.get(arg)
            expected = bytes(model.popleft() for _ in range(min(arg, len(model))))
            assert out == expected
        else:
            ring.pop(arg)
            for _ in range(min(arg, len(model))):
                model.popleft()
        assert len(ring) == len(model)
        assert ring.contents() == bytes(model)
        assert ring.free_space() == ring.capacity() - len(model)