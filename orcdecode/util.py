"""Low-level helpers shared by the ORC integer decoders."""

from __future__ import annotations

from typing import BinaryIO

from .errors import OutOfSpecError, ReadError, VarintTooLargeError
from .integers import IntKind


def read_exact(reader: BinaryIO, size: int) -> bytes:
    """Read exactly size bytes, raising ReadError if the stream ends first."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            raise ReadError()
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_u8(reader: BinaryIO) -> int:
    """Read a single byte."""
    return read_exact(reader, 1)[0]


def try_read_u8(reader: BinaryIO) -> int | None:
    """Read a single byte, or return None at end of stream."""
    data = reader.read(1)
    if not data:
        return None
    return data[0]


def extract_run_length_from_header(first_byte: int, second_byte: int) -> int:
    """Run length from the two header bytes, mapped from [0, 511] to [1, 512]."""
    return (((first_byte & 0x01) << 8) | second_byte) + 1


def read_ints(
    expected_count: int, bit_size: int, reader: BinaryIO, kind: IntKind
) -> list[int]:
    """Read expected_count big-endian bit-packed integers of bit_size bits each."""
    if not 1 <= bit_size <= 64:
        raise ValueError("bit_size must be in range [1, 64]")
    if expected_count <= 0:
        return []
    total_bits = expected_count * bit_size
    byte_count = (total_bits + 7) // 8
    packed = int.from_bytes(read_exact(reader, byte_count), "big")
    padding = byte_count * 8 - total_bits
    mask = (1 << bit_size) - 1
    return [
        kind.wrap((packed >> (total_bits - (i + 1) * bit_size + padding)) & mask)
        for i in range(expected_count)
    ]


_WIDE_BIT_WIDTHS = {27: 32, 28: 40, 29: 48, 30: 56, 31: 64}


def rle_v2_decode_bit_width(encoded: int) -> int:
    """Map a 5-bit encoded width to a bit width (0 maps to 1)."""
    if 0 <= encoded <= 23:
        return encoded + 1
    try:
        return _WIDE_BIT_WIDTHS[encoded]
    except KeyError:
        raise OutOfSpecError(f"invalid encoded bit width: {encoded}") from None


def read_varint(reader: BinaryIO, kind: IntKind) -> int:
    """Decode a base 128 varint into kind."""
    unsigned = 0
    offset = 0
    while True:
        byte = read_u8(reader)
        if offset >= kind.bits:
            raise VarintTooLargeError()
        unsigned |= ((byte & 0x7F) << offset) & kind.mask
        offset += 7
        if not byte & 0x80:
            break
    return kind.wrap(unsigned)


def read_varint_zigzagged(reader: BinaryIO, kind: IntKind) -> int:
    """Decode a varint and undo zigzag encoding when kind is signed."""
    return kind.zigzag_decode(read_varint(reader, kind))


def read_abs_varint(reader: BinaryIO, kind: IntKind) -> tuple[bool, int]:
    """Decode a zigzagged varint as (is_negative, magnitude)."""
    unsigned = read_varint(reader, kind) & kind.mask
    negative = bool(unsigned & 1)
    magnitude = unsigned >> 1
    if negative:
        magnitude += 1
    return negative, kind.wrap(magnitude)


def signed_zigzag_decode(encoded: int, kind: IntKind = IntKind.I64) -> int:
    """Zigzag decode for a signed kind: the sign lives in the lowest bit."""
    if not kind.signed:
        raise ValueError(f"{kind.name} is not a signed integer kind")
    return kind.zigzag_decode(encoded)


def signed_msb_decode(
    encoded: int, encoded_byte_size: int, kind: IntKind = IntKind.I64
) -> int:
    """Decode a value whose top bit at encoded_byte_size marks it negative."""
    if not kind.signed:
        raise ValueError(f"{kind.name} is not a signed integer kind")
    return kind.decode_signed_from_msb(encoded, encoded_byte_size)