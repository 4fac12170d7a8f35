"""Reader for variable length byte values such as strings and binaries."""

from __future__ import annotations

from typing import BinaryIO


class Values:
    """Read consecutive values of given lengths from a data stream."""

    def __init__(self, reader: BinaryIO) -> None:
        self._reader = reader

    def read(self, length: int) -> bytes:
        """Read up to length bytes; fewer are returned if the stream ends."""
        chunks = []
        remaining = length
        while remaining > 0:
            chunk = self._reader.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)