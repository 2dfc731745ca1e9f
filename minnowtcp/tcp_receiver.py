"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field

from .byte_stream import Reader, Writer
from .reassembler import Reassembler
from .wrapping_integers import Wrap32

_SEQUENCE_SPACE = 1 << 32
_MASK64 = (1 << 64) - 1
_MAX_WINDOW = (1 << 16) - 1


@dataclass
class TCPSenderMessage:
    """A segment travelling from a sender to a receiver."""

    seqno: Wrap32 = field(default_factory=lambda: Wrap32(0))
    syn: bool = False
    payload: str = ""
    fin: bool = False
    rst: bool = False

    def sequence_length(self) -> int:
        """Sequence numbers occupied by the segment, flags included."""
        return int(self.syn) + len(self.payload) + int(self.fin)


@dataclass
class TCPReceiverMessage:
    """Acknowledgement and window advertised by a receiver."""

    ackno: Wrap32 | None = None
    window_size: int = 0
    rst: bool = False


class TCPReceiver:
    """Feed incoming segments into a Reassembler and report acknowledgements."""

    def __init__(self, reassembler: Reassembler) -> None:
        self._reassembler = reassembler
        self._zero_point = Wrap32(0)
        self._checkpoint = 0
        self._started = False
        self._ended = False

    def receive(self, message: TCPSenderMessage) -> None:
        """Insert the payload of ``message`` at its place in the stream."""
        if message.syn:
            self._zero_point = Wrap32.wrap(0, message.seqno)
            self._started = True
            self._ended = False
        if message.rst:
            self._reassembler.reader().set_error()
            return
        if message.fin:
            self._ended = True
        if not self._started:
            return

        index = message.seqno.unwrap(self._zero_point, self._checkpoint)
        if not message.syn:
            if index == 0:
                return
            index -= 1
        if (index - self._checkpoint) & _MASK64 >= _SEQUENCE_SPACE:
            self._checkpoint += _SEQUENCE_SPACE
        self._reassembler.insert(index, message.payload, message.fin)

    def send(self) -> TCPReceiverMessage:
        """The acknowledgement and window to report to the peer's sender."""
        writer = self._reassembler.writer()
        if writer.has_error():
            return TCPReceiverMessage(rst=True)

        response = TCPReceiverMessage()
        if self._started:
            ackno = writer.bytes_pushed() + 1
            if self._ended and self._reassembler.count_bytes_pending() == 0:
                ackno += 1
            response.ackno = Wrap32.wrap(ackno, self._zero_point)
        response.window_size = min(writer.available_capacity(), _MAX_WINDOW)
        return response

    def reassembler(self) -> Reassembler:
        """The reassembler the receiver writes into."""
        return self._reassembler

    def reader(self) -> Reader:
        """The reading side of the received stream."""
        return self._reassembler.reader()

    def writer(self) -> Writer:
        """The writing side of the received stream."""
        return self._reassembler.writer()