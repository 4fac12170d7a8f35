"""Decoder for ORC integer run length encoding, version 1."""

from __future__ import annotations

from typing import BinaryIO, Iterator

from .errors import OutOfSpecError
from .integers import IntKind
from .util import read_u8, read_varint_zigzagged, try_read_u8

# A run header stores the run length minus three; the base value is one of them.
_RUN_LENGTH_OFFSET = 2

_OVERFLOW = "over/underflow when decoding patched base integer"


class RleReaderV1:
    """Iterate over the integers of an RLEv1 stream, decoded as kind."""

    def __init__(self, reader: BinaryIO, kind: IntKind) -> None:
        self._reader = reader
        self._kind = kind
        self._batch: Iterator[int] = iter(())

    def __iter__(self) -> RleReaderV1:
        return self

    def __next__(self) -> int:
        while True:
            for value in self._batch:
                return value
            header = try_read_u8(self._reader)
            if header is None:
                raise StopIteration
            self._batch = iter(self._decode_batch(header))

    def _decode_batch(self, header: int) -> list[int]:
        # Literals start with a negative header byte, runs with a positive one.
        if header >= 0x80:
            count = 0x100 - header
            return [read_varint_zigzagged(self._reader, self._kind) for _ in range(count)]
        return self._decode_run(header + _RUN_LENGTH_OFFSET)

    def _decode_run(self, length: int) -> list[int]:
        kind = self._kind
        delta = read_u8(self._reader)
        if delta >= 0x80:
            delta -= 0x100
        current = read_varint_zigzagged(self._reader, kind)
        step = kind.checked_sub if delta < 0 else kind.checked_add
        magnitude = abs(delta)
        decoded = [current]
        try:
            for _ in range(length):
                current = step(current, magnitude)
                decoded.append(current)
        except OverflowError:
            raise OutOfSpecError(_OVERFLOW) from None
        return decoded