"""Selection of the integer RLE decoder from a column's encoding."""

from __future__ import annotations

from enum import Enum
from typing import BinaryIO, Iterator

from .integers import IntKind
from .rle_v1 import RleReaderV1
from .rle_v2 import RleReaderV2


class ColumnEncodingKind(Enum):
    """How a column's streams are encoded."""

    DIRECT = 0
    DICTIONARY = 1
    DIRECT_V2 = 2
    DICTIONARY_V2 = 3


class RleVersion(Enum):
    """Version of integer run length encoding used by a column."""

    V1 = 1
    V2 = 2

    @staticmethod
    def from_encoding_kind(kind: ColumnEncodingKind) -> RleVersion:
        """Version of RLE implied by a column encoding kind."""
        if kind in (ColumnEncodingKind.DIRECT, ColumnEncodingKind.DICTIONARY):
            return RleVersion.V1
        return RleVersion.V2

    def reader(self, reader: BinaryIO, kind: IntKind) -> Iterator[int]:
        """Decoder of this version yielding integers of kind."""
        if self is RleVersion.V1:
            return RleReaderV1(reader, kind)
        return RleReaderV2(reader, kind)

    def unsigned_reader(self, reader: BinaryIO) -> Iterator[int]:
        """Decoder of this version yielding unsigned 64-bit integers."""
        return self.reader(reader, IntKind.U64)