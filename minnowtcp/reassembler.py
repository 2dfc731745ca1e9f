"""Reassembly of indexed, possibly overlapping substrings into a ByteStream."""

from __future__ import annotations

from bisect import bisect_left, bisect_right, insort

from .byte_stream import ByteStream, Reader, Writer


class Reassembler:
    """Put out-of-order substrings back together and write them to a ByteStream."""

    def __init__(self, output: ByteStream) -> None:
        self._output = output
        self._starts: list[int] = []
        self._segments: dict[int, str] = {}
        self._next_index = 0
        self._end_index: int | None = None

    def insert(self, first_index: int, data: str, is_last_substring: bool) -> None:
        """Insert ``data`` whose first byte sits at ``first_index`` in the stream.

        Bytes beyond the output's available capacity are discarded, bytes that
        cannot be written yet are held until the gap before them is filled, and
        the output is closed once the last byte has been written.
        """
        if is_last_substring:
            self._end_index = first_index + len(data)

        truncated = self._truncate(first_index, data)
        if truncated is None:
            return
        offset, data = truncated
        self._coalesce(first_index + offset, data)
        self._flush()

    def count_bytes_pending(self) -> int:
        """How many bytes are held inside the reassembler."""
        return sum(len(segment) for segment in self._segments.values())

    def reader(self) -> Reader:
        """The reading side of the output stream."""
        return self._output.reader()

    def writer(self) -> Writer:
        """The writing side of the output stream."""
        return self._output.writer()

    def _truncate(self, first_index: int, data: str) -> tuple[int, str] | None:
        """Trim bytes already written and bytes beyond capacity; None if nothing fits."""
        offset = self._next_index - first_index if self._next_index > first_index else 0
        if not data:
            return offset, data
        if offset > len(data):
            return None
        if offset:
            data = data[offset:]

        capacity = self.writer().available_capacity()
        segment_size = first_index + offset + len(data) - self._next_index
        if segment_size > capacity:
            excess = segment_size - capacity
            if excess > len(data):
                return None
            data = data[: len(data) - excess]
        return offset, data

    def _store(self, index: int, data: str) -> bool:
        """Keep ``data`` at ``index`` unless an equal or longer segment is already there."""
        existing = self._segments.get(index)
        if existing is not None:
            if len(existing) >= len(data):
                return False
        else:
            insort(self._starts, index)
        self._segments[index] = data
        return True

    def _discard(self, index: int) -> None:
        del self._starts[bisect_left(self._starts, index)]
        del self._segments[index]

    def _coalesce(self, start: int, data: str) -> None:
        """Store a segment so that no two held segments overlap."""
        end = start + len(data)
        if not self._store(start, data):
            return

        pos = bisect_left(self._starts, start)
        if pos > 0:
            prev_index = self._starts[pos - 1]
            prev = self._segments[prev_index]
            prev_end = prev_index + len(prev)
            if prev_end > start:
                if prev_end >= end:
                    self._discard(start)
                    return
                self._segments[prev_index] = prev[: start - prev_index]

        pos = bisect_right(self._starts, start)
        while pos < len(self._starts):
            index = self._starts[pos]
            if end <= index:
                break
            segment = self._segments[index]
            del self._starts[pos]
            del self._segments[index]
            if end < index + len(segment):
                self._store(end, segment[end - index :])
                break

    def _flush(self) -> None:
        """Write every held segment that continues the stream."""
        writer = self.writer()
        while self._starts:
            index = self._starts[0]
            if index < self._next_index:
                raise ValueError("held segment starts before the next expected index")
            if index != self._next_index:
                break
            segment = self._segments.pop(index)
            self._starts.pop(0)
            self._next_index += len(segment)
            writer.push(segment)
            if index + len(segment) == self._end_index:
                writer.close()