"""Fixed-width integer kinds that ORC integer streams decode into."""

from __future__ import annotations

from enum import Enum


class IntKind(Enum):
    """An integer type of fixed width, signed or unsigned."""

    I16 = (2, True)
    I32 = (4, True)
    I64 = (8, True)
    U64 = (8, False)

    def __init__(self, byte_size: int, signed: bool) -> None:
        self.byte_size = byte_size
        self.signed = signed

    @property
    def bits(self) -> int:
        return self.byte_size * 8

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else self.mask

    def wrap(self, value: int) -> int:
        """Truncate to this width, reinterpreting as two's complement if signed."""
        value &= self.mask
        if self.signed and value >> (self.bits - 1):
            value -= 1 << self.bits
        return value

    def from_be_bytes(self, data: bytes) -> int:
        """Decode big-endian bytes; shorter input is treated as zero-extended."""
        data = bytes(data)
        if len(data) > self.byte_size:
            raise ValueError(
                f"{len(data)} bytes do not fit in a {self.byte_size} byte integer"
            )
        return self.wrap(int.from_bytes(data, "big"))

    def zigzag_decode(self, value: int) -> int:
        """Undo zigzag encoding; unsigned kinds return the value unchanged."""
        if not self.signed:
            return value
        unsigned = value & self.mask
        return self.wrap((unsigned >> 1) ^ -(unsigned & 1))

    def decode_signed_from_msb(self, value: int, encoded_byte_size: int) -> int:
        """Treat the top bit of an encoded_byte_size value as a sign flag."""
        if not self.signed:
            return value
        if not 1 <= encoded_byte_size <= self.byte_size:
            raise ValueError(
                f"encoded byte size {encoded_byte_size} out of range for {self.name}"
            )
        msb = 1 << (encoded_byte_size * 8 - 1)
        unsigned = value & self.mask
        cleaned = unsigned & ~msb
        if unsigned & msb:
            return self.wrap(-cleaned)
        return self.wrap(cleaned)

    def _checked(self, result: int) -> int:
        if not self.min_value <= result <= self.max_value:
            raise OverflowError(f"{result} does not fit in {self.name}")
        return result

    def checked_add(self, a: int, b: int) -> int:
        """Add, raising OverflowError if the sum leaves this kind's range."""
        return self._checked(a + b)

    def checked_sub(self, a: int, b: int) -> int:
        """Subtract, raising OverflowError if the result leaves this kind's range."""
        return self._checked(a - b)