"""Decoder for ORC float and double columns."""

from __future__ import annotations

import struct
from typing import BinaryIO

from .errors import DecodeFloatError, ReadError
from .util import read_exact

_FORMATS = {4: struct.Struct("<f"), 8: struct.Struct("<d")}


class FloatIter:
    """Iterate over length little-endian IEEE 754 values of width bytes each."""

    def __init__(self, reader: BinaryIO, length: int, width: int = 8) -> None:
        try:
            self._format = _FORMATS[width]
        except KeyError:
            raise ValueError(f"float width must be 4 or 8 bytes, not {width}") from None
        self._reader = reader
        self._remaining = length

    def __len__(self) -> int:
        return self._remaining

    def __iter__(self) -> FloatIter:
        return self

    def __next__(self) -> float:
        if self._remaining == 0:
            raise StopIteration
        try:
            data = read_exact(self._reader, self._format.size)
        except ReadError as err:
            raise DecodeFloatError(err.source) from err
        self._remaining -= 1
        return self._format.unpack(data)[0]