import io

import pytest

from orcdecode.errors import OutOfSpecError, ReadError, VarintTooLargeError
from orcdecode.integers import IntKind
from orcdecode.util import (
    extract_run_length_from_header,
    read_abs_varint,
    read_exact,
    read_ints,
    read_u8,
    read_varint,
    read_varint_zigzagged,
    rle_v2_decode_bit_width,
    signed_msb_decode,
    signed_zigzag_decode,
    try_read_u8,
)


@pytest.mark.parametrize(
    "encoded, expected",
    [(0, 0), (1, -1), (2, 1), (3, -2), (4, 2), (5, -3), (6, 3), (7, -4), (8, 4), (9, -5)],
)
def test_zigzag_decode(encoded, expected):
    assert signed_zigzag_decode(encoded, IntKind.I32) == expected
    assert signed_zigzag_decode(encoded) == expected


def test_zigzag_decode_extremes():
    assert signed_zigzag_decode(-2, IntKind.I64) == 9_223_372_036_854_775_807
    assert signed_zigzag_decode(-1, IntKind.I64) == -9_223_372_036_854_775_808


def test_zigzag_requires_signed():
    with pytest.raises(ValueError):
        signed_zigzag_decode(1, IntKind.U64)


@pytest.mark.parametrize(
    "serialized, expected",
    [
        (b"\x00", 0),
        (b"\x01", 1),
        (b"\x7f", 127),
        (b"\x80\x01", 128),
        (b"\x81\x01", 129),
        (b"\xff\x7f", 16_383),
        (b"\x80\x80\x01", 16_384),
        (b"\x81\x80\x01", 16_385),
        (b"\xff" * 9 + b"\x01", 2**64 - 1),
    ],
)
def test_read_vulong(serialized, expected):
    assert read_varint_zigzagged(io.BytesIO(serialized), IntKind.U64) == expected


def test_read_varint_too_large():
    with pytest.raises(VarintTooLargeError) as info:
        read_varint_zigzagged(io.BytesIO(b"\xff" * 10 + b"\x01"), IntKind.U64)
    assert str(info.value) == "Varint being decoded is too large"


def test_read_varint_unexpected_end():
    with pytest.raises(ReadError) as info:
        read_varint_zigzagged(io.BytesIO(b"\x80\x80"), IntKind.U64)
    assert str(info.value) == "Failed to read, source: failed to fill whole buffer"


def test_read_varint_signed_zigzag():
    assert read_varint_zigzagged(io.BytesIO(b"\x03"), IntKind.I64) == -2
    assert read_varint(io.BytesIO(b"\x03"), IntKind.I64) == 3


@pytest.mark.parametrize("value", [0, 1, -1, 1000, -1000, 2**40, -(2**40)])
def test_read_abs_varint_round_trip(value):
    zigzag = (value << 1) ^ (value >> 63)
    zigzag &= 2**64 - 1
    data = bytearray()
    while True:
        low = zigzag & 0x7F
        zigzag >>= 7
        if zigzag:
            data.append(low | 0x80)
        else:
            data.append(low)
            break
    negative, magnitude = read_abs_varint(io.BytesIO(bytes(data)), IntKind.U64)
    assert negative == (value < 0)
    assert magnitude == abs(value)


def test_read_u8_and_try_read_u8():
    reader = io.BytesIO(b"\x2a")
    assert read_u8(reader) == 0x2A
    assert try_read_u8(reader) is None
    with pytest.raises(ReadError):
        read_u8(reader)


def test_read_exact():
    reader = io.BytesIO(b"abcdef")
    assert read_exact(reader, 4) == b"abcd"
    with pytest.raises(ReadError):
        read_exact(reader, 3)


def test_extract_run_length_bounds():
    assert extract_run_length_from_header(0x00, 0x00) == 1
    assert extract_run_length_from_header(0x01, 0xFF) == 512
    assert extract_run_length_from_header(0xFE, 0x09) == 10


@pytest.mark.parametrize(
    "encoded, expected",
    [(0, 1), (23, 24), (27, 32), (28, 40), (29, 48), (30, 56), (31, 64)],
)
def test_rle_v2_decode_bit_width(encoded, expected):
    assert rle_v2_decode_bit_width(encoded) == expected


@pytest.mark.parametrize("encoded", [24, 25, 26, 32])
def test_rle_v2_decode_bit_width_invalid(encoded):
    with pytest.raises(OutOfSpecError):
        rle_v2_decode_bit_width(encoded)


def _pack(values, bit_size):
    packed = 0
    for value in values:
        packed = (packed << bit_size) | value
    total = len(values) * bit_size
    padding = (-total) % 8
    return (packed << padding).to_bytes((total + padding) // 8, "big")


@pytest.mark.parametrize("bit_size", [1, 2, 3, 4, 5, 7, 8, 11, 16, 23, 24, 32, 40, 56])
def test_read_ints_round_trip(bit_size):
    values = [(i * 2654435761) % (1 << bit_size) for i in range(13)]
    reader = io.BytesIO(_pack(values, bit_size) + b"tail")
    assert read_ints(len(values), bit_size, reader, IntKind.U64) == values
    assert reader.read() == b"tail"


def test_read_ints_single_bits():
    assert read_ints(8, 1, io.BytesIO(b"\xa5"), IntKind.U64) == [1, 0, 1, 0, 0, 1, 0, 1]


def test_read_ints_64_bits_signed_wraps():
    data = b"\xff" * 8
    assert read_ints(1, 64, io.BytesIO(data), IntKind.I64) == [-1]
    assert read_ints(1, 64, io.BytesIO(data), IntKind.U64) == [2**64 - 1]


def test_read_ints_short_stream():
    with pytest.raises(ReadError):
        read_ints(3, 8, io.BytesIO(b"\x01\x02"), IntKind.U64)


def test_read_ints_bad_bit_size():
    with pytest.raises(ValueError):
        read_ints(1, 65, io.BytesIO(b"\x00" * 9), IntKind.U64)


def test_signed_msb_decode():
    assert signed_msb_decode(0x81, 1) == -1
    assert signed_msb_decode(0x01, 1) == 1
    with pytest.raises(ValueError):
        signed_msb_decode(0x81, 1, IntKind.U64)