import io

import pytest

from orcdecode.errors import OutOfSpecError, ReadError
from orcdecode.integers import IntKind
from orcdecode.rle_v1 import RleReaderV1


def _decode(data, kind=IntKind.U64):
    return list(RleReaderV1(io.BytesIO(bytes(data)), kind))


def test_run():
    assert _decode([0x61, 0x00, 0x07]) == [7] * 100


def test_run_with_negative_delta():
    assert _decode([0x61, 0xFF, 0x64]) == list(range(100, 0, -1))


def test_literal():
    assert _decode([0xFB, 0x02, 0x03, 0x06, 0x07, 0x0B]) == [2, 3, 6, 7, 11]


def test_literal_signed_is_zigzag_decoded():
    assert _decode([0xFE, 0x03, 0x04], IntKind.I64) == [-2, 2]


def test_run_followed_by_literal():
    data = [0x00, 0x01, 0x02, 0xFF, 0x09]
    assert _decode(data) == [2, 3, 4, 9]


def test_empty_stream():
    assert _decode([]) == []


def test_underflow_is_out_of_spec():
    with pytest.raises(OutOfSpecError, match="over/underflow"):
        _decode([0x00, 0xFF, 0x00])


def test_truncated_literal_raises_read_error():
    with pytest.raises(ReadError):
        _decode([0xFB, 0x02, 0x03])