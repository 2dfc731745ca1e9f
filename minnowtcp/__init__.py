"""Receiving side of TCP: wrapping sequence numbers, byte streams, reassembly and the receiver."""

__version__ = "0.1.0"
__all__ = ["byte_stream", "reassembler", "tcp_receiver", "wrapping_integers"]