"""Decoder for ORC boolean run length encoding."""

from __future__ import annotations

from typing import BinaryIO, Iterator

from .byte_rle import iter_byte_rle


def iter_booleans(reader: BinaryIO) -> Iterator[bool]:
    """Yield booleans packed most significant bit first into byte-RLE bytes."""
    for byte in iter_byte_rle(reader):
        for shift in range(7, -1, -1):
            yield bool((byte >> shift) & 1)