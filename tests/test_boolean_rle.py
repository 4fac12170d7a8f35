import io

from orcdecode.boolean_rle import iter_booleans


def _decode(data):
    return list(iter_booleans(io.BytesIO(bytes(data))))


def test_basic():
    assert _decode([0x61, 0x00]) == [False] * 800


def test_literals():
    assert _decode([0xFE, 0b01000100, 0b01000101]) == [
        False, True, False, False, False, True, False, False,
        False, True, False, False, False, True, False, True,
    ]


def test_another():
    assert _decode([0xFF, 0x80]) == [True] + [False] * 7


def test_empty():
    assert _decode([]) == []


def test_count_is_multiple_of_eight():
    values = _decode([0x01, 0xFF])
    assert len(values) == 32
    assert all(values)