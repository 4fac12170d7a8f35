"""Reading of ORC streams that are split into optionally compressed blocks."""

from __future__ import annotations

import io
import zlib
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import lz4.block
import zstandard

from .codecs import lzo_decompress, snappy_decompress
from .errors import DecompressionError, OutOfSpecError

# The specification's default compression block size.
DEFAULT_COMPRESSION_BLOCK_SIZE = 256 * 1024

_HEADER_SIZE = 3


class CompressionKind(Enum):
    """Compression named in a file's postscript."""

    NONE = 0
    ZLIB = 1
    SNAPPY = 2
    LZO = 3
    LZ4 = 4
    ZSTD = 5


class CompressionType(Enum):
    """Codec used for compressed blocks."""

    ZLIB = "zlib"
    SNAPPY = "snappy"
    LZO = "lzo"
    LZ4 = "lz4"
    ZSTD = "zstd"


_TYPE_FOR_KIND = {
    CompressionKind.ZLIB: CompressionType.ZLIB,
    CompressionKind.SNAPPY: CompressionType.SNAPPY,
    CompressionKind.LZO: CompressionType.LZO,
    CompressionKind.LZ4: CompressionType.LZ4,
    CompressionKind.ZSTD: CompressionType.ZSTD,
}


@dataclass(frozen=True)
class Compression:
    """A codec and the largest size any block decompresses to."""

    compression_type: CompressionType
    max_decompressed_block_size: int = DEFAULT_COMPRESSION_BLOCK_SIZE

    @staticmethod
    def from_kind(kind: CompressionKind, block_size: int | None = None) -> Compression | None:
        """Compression for kind, or None when the data is not compressed."""
        if kind is CompressionKind.NONE:
            return None
        size = DEFAULT_COMPRESSION_BLOCK_SIZE if block_size is None else block_size
        return Compression(_TYPE_FOR_KIND[kind], size)


@dataclass(frozen=True)
class CompressionHeader:
    """Length of a block and whether it is stored uncompressed."""

    length: int
    original: bool


def decode_header(data: bytes) -> CompressionHeader:
    """Decode the 3 byte little-endian header at the start of each block."""
    if len(data) != _HEADER_SIZE:
        raise ValueError(f"compression header must be {_HEADER_SIZE} bytes")
    value = int.from_bytes(bytes(data), "little")
    return CompressionHeader(length=value >> 1, original=bool(value & 1))


def decompress_block(compression: Compression, data: bytes) -> bytes:
    """Decompress one block with the given codec."""
    codec = compression.compression_type
    try:
        if codec is CompressionType.ZLIB:
            inflater = zlib.decompressobj(-zlib.MAX_WBITS)
            return inflater.decompress(data) + inflater.flush()
        if codec is CompressionType.ZSTD:
            return zstandard.ZstdDecompressor().decompressobj().decompress(data)
        if codec is CompressionType.SNAPPY:
            return snappy_decompress(data)
        if codec is CompressionType.LZO:
            return lzo_decompress(data)
        return lz4.block.decompress(
            data, uncompressed_size=compression.max_decompressed_block_size
        )
    except (zlib.error, zstandard.ZstdError, lz4.block.LZ4BlockError) as err:
        raise DecompressionError(f"{codec.value}: {err}") from err


def iter_blocks(stream: bytes, compression: Compression | None) -> Iterator[bytes]:
    """Yield the decompressed contents of each block of stream."""
    stream = bytes(stream)
    if compression is None:
        if stream:
            yield stream
        return
    pos = 0
    while pos < len(stream):
        if pos + _HEADER_SIZE > len(stream):
            raise OutOfSpecError("stream ended inside a compression header")
        header = decode_header(stream[pos:pos + _HEADER_SIZE])
        pos += _HEADER_SIZE
        end = pos + header.length
        if end > len(stream):
            raise OutOfSpecError("stream ended inside a compression block")
        chunk = stream[pos:end]
        pos = end
        yield chunk if header.original else decompress_block(compression, chunk)


class Decompressor(io.RawIOBase):
    """A readable binary stream over the decompressed contents of a stream."""

    def __init__(self, stream: bytes, compression: Compression | None) -> None:
        super().__init__()
        self._blocks = iter_blocks(stream, compression)
        self._current = b""
        self._offset = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        while self._offset >= len(self._current):
            block = next(self._blocks, None)
            if block is None:
                return 0
            self._current = block
            self._offset = 0
        count = min(len(view), len(self._current) - self._offset)
        view[:count] = self._current[self._offset:self._offset + count]
        self._offset += count
        return count