import pytest
from hypothesis import given, strategies as st

from minnowtcp.byte_stream import ByteStream, read


def make(capacity=15):
    stream = ByteStream(capacity)
    return stream, stream.writer(), stream.reader()


def test_push_then_read_everything():
    _, writer, reader = make()
    writer.push("hello")
    assert writer.bytes_pushed() == len("hello")
    assert reader.bytes_buffered() == len("hello")
    assert read(reader, 100) == "hello"
    assert reader.bytes_popped() == len("hello")
    assert reader.bytes_buffered() == 0


def test_push_truncated_to_capacity():
    _, writer, reader = make(3)
    data = "abcdef"
    writer.push(data)
    assert writer.available_capacity() == 0
    assert writer.bytes_pushed() == 3
    assert reader.peek() == data[:3]


def test_push_when_full_is_ignored():
    _, writer, reader = make(2)
    writer.push("xy")
    writer.push("z")
    assert writer.bytes_pushed() == 2
    assert read(reader, 10) == "xy"


def test_empty_push_is_ignored():
    _, writer, reader = make()
    writer.push("")
    assert writer.bytes_pushed() == 0
    assert reader.peek() == ""


def test_pop_across_chunks():
    _, writer, reader = make()
    writer.push("abc")
    writer.push("defg")
    reader.pop(4)
    assert reader.peek() == "defg"[1:]
    assert reader.bytes_popped() == 4
    assert reader.bytes_buffered() == len("abcdefg") - 4


def test_pop_more_than_buffered_empties_stream():
    _, writer, reader = make()
    writer.push("abc")
    reader.pop(50)
    assert reader.bytes_buffered() == 0
    assert reader.bytes_popped() == 3


def test_capacity_recovers_after_pop():
    _, writer, reader = make(4)
    writer.push("abcd")
    reader.pop(2)
    assert writer.available_capacity() == 2
    writer.push("efgh")
    assert read(reader, 10) == "cdef"


def test_close_and_finish():
    _, writer, reader = make()
    writer.push("ab")
    writer.close()
    assert writer.is_closed()
    assert not reader.is_finished()
    reader.pop(2)
    assert reader.is_finished()


def test_not_finished_until_closed():
    _, writer, reader = make()
    writer.push("ab")
    reader.pop(2)
    assert not reader.is_finished()


def test_error_flag_is_shared():
    stream, writer, reader = make()
    assert not stream.has_error()
    reader.set_error()
    assert writer.has_error()
    assert stream.has_error()


def test_read_respects_max_len():
    _, writer, reader = make()
    writer.push("hello")
    writer.push("world")
    assert read(reader, 7) == "hellowo"
    assert read(reader, 0) == ""
    assert read(reader, 7) == "rld"


@pytest.mark.parametrize("capacity", [1, 5, 64])
def test_views_are_stable(capacity):
    stream = ByteStream(capacity)
    assert stream.writer() is stream.writer()
    assert stream.reader() is stream.reader()
    assert stream.writer().available_capacity() == capacity


@given(
    st.integers(1, 50),
    st.lists(st.text(min_size=0, max_size=20), max_size=20),
)
def test_counters_stay_consistent(capacity, chunks):
    stream = ByteStream(capacity)
    writer, reader = stream.writer(), stream.reader()
    collected = []
    for chunk in chunks:
        writer.push(chunk)
        assert reader.bytes_buffered() + writer.available_capacity() == capacity
        collected.append(read(reader, 3))
        assert writer.bytes_pushed() == reader.bytes_popped() + reader.bytes_buffered()
    collected.append(read(reader, capacity))
    assert len("".join(collected)) == writer.bytes_pushed()
    assert reader.bytes_buffered() == 0