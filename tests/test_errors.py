import pytest

from orcdecode.errors import (
    DecodeFloatError,
    DecompressionError,
    OrcError,
    OutOfSpecError,
    ReadError,
    SchemaError,
    VarintTooLargeError,
)


@pytest.mark.parametrize(
    "error, pattern",
    [
        (ReadError(), "failed to fill whole buffer"),
        (OutOfSpecError("bad"), "bad"),
        (VarintTooLargeError(), "Varint being decoded is too large"),
        (DecodeFloatError(), "failed to fill whole buffer"),
        (DecompressionError("broken"), "broken"),
        (SchemaError("broken"), "broken"),
    ],
)
def test_all_errors_share_base(error, pattern):
    with pytest.raises(OrcError, match=pattern) as excinfo:
        raise error
    assert excinfo.value is error


def test_read_error_default_message():
    assert str(ReadError()) == "Failed to read, source: failed to fill whole buffer"


def test_read_error_keeps_source():
    err = ReadError("disk gone")
    assert err.source == "disk gone"
    assert "disk gone" in str(err)


def test_varint_too_large_message():
    assert str(VarintTooLargeError()) == "Varint being decoded is too large"


def test_out_of_spec_keeps_message():
    err = OutOfSpecError("over/underflow when decoding delta integer")
    assert err.msg == "over/underflow when decoding delta integer"
    assert str(err) == "over/underflow when decoding delta integer"


def test_decode_float_error_mentions_source():
    assert "failed to fill whole buffer" in str(DecodeFloatError())