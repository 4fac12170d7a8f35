import pytest

from orcdecode.codecs import lzo_decompress, snappy_decompress
from orcdecode.errors import DecompressionError


def test_snappy_literal():
    assert snappy_decompress(b"\x05\x10hello") == b"hello"


def test_snappy_long_literal():
    payload = bytes(range(100))
    assert snappy_decompress(b"\x64\xf0\x63" + payload) == payload


def test_snappy_copy_forms_agree():
    one_byte = snappy_decompress(b"\x09\x08abc\x09\x03")
    two_byte = snappy_decompress(b"\x09\x08abc\x16\x03\x00")
    four_byte = snappy_decompress(b"\x09\x08abc\x17\x03\x00\x00\x00")
    assert one_byte == two_byte == four_byte == b"abcabcabc"


def test_snappy_empty():
    assert snappy_decompress(b"\x00") == b""


def test_snappy_length_mismatch():
    with pytest.raises(DecompressionError):
        snappy_decompress(b"\x06\x10hello")


def test_snappy_bad_offset():
    with pytest.raises(DecompressionError):
        snappy_decompress(b"\x09\x08abc\x09\x05")


def test_snappy_truncated_literal():
    with pytest.raises(DecompressionError):
        snappy_decompress(b"\x05\x10hel")


def test_lzo_literal_only():
    assert lzo_decompress(b"\x16hello\x11\x00\x00") == b"hello"


def test_lzo_short_copy():
    assert lzo_decompress(b"\x14abc\x48\x00\x11\x00\x00") == b"abcabc"


def test_lzo_matches_snappy():
    assert lzo_decompress(b"\x16hello\x11\x00\x00") == snappy_decompress(b"\x05\x10hello")


def test_lzo_missing_end_marker():
    with pytest.raises(DecompressionError):
        lzo_decompress(b"\x16hello")


def test_lzo_trailing_input():
    with pytest.raises(DecompressionError):
        lzo_decompress(b"\x16hello\x11\x00\x00\x00")


def test_lzo_lookbehind_overrun():
    with pytest.raises(DecompressionError):
        lzo_decompress(b"\x14abc\x48\x01\x11\x00\x00")


def test_lzo_empty():
    with pytest.raises(DecompressionError):
        lzo_decompress(b"")