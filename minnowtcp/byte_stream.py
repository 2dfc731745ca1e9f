"""A bounded in-memory byte stream with separate writer and reader views."""

from __future__ import annotations

from collections import deque


class ByteStream:
    """Shared state of a stream with a fixed buffering capacity."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._buffer: deque[str] = deque()
        self._size = 0
        self._pushed = 0
        self._popped = 0
        self._closed = False
        self._error = False
        self._reader = Reader(self)
        self._writer = Writer(self)

    def reader(self) -> Reader:
        """The reading side of the stream."""
        return self._reader

    def writer(self) -> Writer:
        """The writing side of the stream."""
        return self._writer

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._error = True

    def has_error(self) -> bool:
        """Whether the stream has had an error."""
        return self._error


class Writer:
    """Writing interface of a ByteStream."""

    __slots__ = ("_stream",)

    def __init__(self, stream: ByteStream) -> None:
        self._stream = stream

    def push(self, data: str) -> None:
        """Append as much of ``data`` as the available capacity allows."""
        available = self.available_capacity()
        if not data or available == 0:
            return
        chunk = data if len(data) <= available else data[:available]
        stream = self._stream
        stream._buffer.append(chunk)
        stream._pushed += len(chunk)
        stream._size += len(chunk)

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._stream._closed = True

    def is_closed(self) -> bool:
        """Whether the stream has been closed."""
        return self._stream._closed

    def available_capacity(self) -> int:
        """How many bytes can be pushed right now."""
        return self._stream.capacity - self._stream._size

    def bytes_pushed(self) -> int:
        """Total number of bytes pushed so far."""
        return self._stream._pushed

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._stream.set_error()

    def has_error(self) -> bool:
        """Whether the stream has had an error."""
        return self._stream.has_error()


class Reader:
    """Reading interface of a ByteStream."""

    __slots__ = ("_stream",)

    def __init__(self, stream: ByteStream) -> None:
        self._stream = stream

    def peek(self) -> str:
        """The next buffered bytes, or an empty string if nothing is buffered."""
        buffer = self._stream._buffer
        return buffer[0] if buffer else ""

    def pop(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        stream = self._stream
        buffer = stream._buffer
        while buffer and length > 0:
            front = buffer[0]
            if length < len(front):
                buffer[0] = front[length:]
                stream._popped += length
                stream._size -= length
                break
            length -= len(front)
            stream._popped += len(front)
            stream._size -= len(front)
            buffer.popleft()

    def is_finished(self) -> bool:
        """Whether the stream is closed and fully popped."""
        return not self._stream._buffer and self._stream._closed

    def bytes_buffered(self) -> int:
        """Number of bytes pushed and not yet popped."""
        return self._stream._size

    def bytes_popped(self) -> int:
        """Total number of bytes popped so far."""
        return self._stream._popped

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._stream.set_error()

    def has_error(self) -> bool:
        """Whether the stream has had an error."""
        return self._stream.has_error()


def read(reader: Reader, max_len: int) -> str:
    """Peek and pop up to ``max_len`` bytes from ``reader``."""
    parts: list[str] = []
    taken = 0
    while reader.bytes_buffered() and taken < max_len:
        view = reader.peek()
        if not view:
            raise RuntimeError("Reader.peek() returned an empty string")
        view = view[: max_len - taken]
        parts.append(view)
        taken += len(view)
        reader.pop(len(view))
    return "".join(parts)