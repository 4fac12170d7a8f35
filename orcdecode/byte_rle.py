"""Decoder for ORC byte run length encoding."""

from __future__ import annotations

from itertools import repeat
from typing import BinaryIO, Iterator

from .errors import ReadError
from .util import read_exact, read_u8

MIN_REPEAT_SIZE = 3


def iter_byte_rle(reader: BinaryIO) -> Iterator[int]:
    """Yield bytes from a byte-RLE stream, stopping quietly when it runs out."""
    while True:
        try:
            control = read_u8(reader)
            if control < 0x80:
                value = read_u8(reader)
                run = repeat(value, control + MIN_REPEAT_SIZE)
            else:
                run = read_exact(reader, 0x100 - control)
        except ReadError:
            return
        yield from run