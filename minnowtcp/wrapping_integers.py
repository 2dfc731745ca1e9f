"""32-bit sequence numbers that wrap around from an arbitrary zero point."""

from __future__ import annotations

_SPAN32 = 1 << 32
_MASK32 = _SPAN32 - 1
_MASK64 = (1 << 64) - 1


class Wrap32:
    """A 32-bit unsigned integer that wraps back to zero after 2**32 - 1."""

    __slots__ = ("_raw",)

    def __init__(self, raw_value: int) -> None:
        self._raw = raw_value & _MASK32

    @property
    def raw_value(self) -> int:
        """The underlying 32-bit value."""
        return self._raw

    @staticmethod
    def wrap(n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return zero_point + n

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number closest to ``checkpoint`` that wraps to this value."""
        value = (self._raw - zero_point._raw) & _MASK32
        if value < checkpoint:
            distance = checkpoint - value
            below = value + (distance // _SPAN32) * _SPAN32
            above = (value + ((distance - 1) // _SPAN32 + 1) * _SPAN32) & _MASK64
            if checkpoint - below < (above - checkpoint) & _MASK64:
                value = below
            else:
                value = above
        return value

    def __add__(self, n: int) -> Wrap32:
        return Wrap32(self._raw + (n & _MASK32))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wrap32):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Wrap32({self._raw})"