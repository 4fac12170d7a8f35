"""Block decompressors for the Snappy and LZO formats."""

from __future__ import annotations

from .errors import DecompressionError


def _copy_back(out: bytearray, distance: int, length: int) -> None:
    """Append length bytes copied from distance back, allowing overlap."""
    start = len(out) - distance
    if distance >= length:
        out += out[start:start + length]
        return
    pattern = bytes(out[start:])
    out += (pattern * (length // distance + 1))[:length]


def _read_uvarint(data: bytes, pos: int) -> tuple[int, int]:
    value = 0
    for shift in range(0, 35, 7):
        if pos >= len(data):
            raise DecompressionError("snappy: truncated length preamble")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, pos
    raise DecompressionError("snappy: length preamble too long")


def snappy_decompress(data: bytes) -> bytes:
    """Decompress a raw (unframed) Snappy block."""
    src = bytes(data)
    end = len(src)
    expected, pos = _read_uvarint(src, 0)
    out = bytearray()
    while pos < end:
        tag = src[pos]
        pos += 1
        element = tag & 0x03
        if element == 0:
            length = tag >> 2
            if length >= 60:
                extra = length - 59
                if pos + extra > end:
                    raise DecompressionError("snappy: truncated literal length")
                length = int.from_bytes(src[pos:pos + extra], "little")
                pos += extra
            length += 1
            if pos + length > end:
                raise DecompressionError("snappy: truncated literal")
            out += src[pos:pos + length]
            pos += length
        else:
            if element == 1:
                if pos >= end:
                    raise DecompressionError("snappy: truncated copy")
                length = 4 + ((tag >> 2) & 0x07)
                offset = ((tag >> 5) << 8) | src[pos]
                pos += 1
            else:
                width = 2 if element == 2 else 4
                if pos + width > end:
                    raise DecompressionError("snappy: truncated copy")
                length = (tag >> 2) + 1
                offset = int.from_bytes(src[pos:pos + width], "little")
                pos += width
            if offset == 0 or offset > len(out):
                raise DecompressionError("snappy: invalid copy offset")
            _copy_back(out, offset, length)
        if len(out) > expected:
            raise DecompressionError("snappy: output exceeds declared length")
    if len(out) != expected:
        raise DecompressionError("snappy: output shorter than declared length")
    return bytes(out)


class _Input:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, count: int) -> bytes:
        if self.pos + count > len(self.data):
            raise DecompressionError("lzo: input overrun")
        chunk = self.data[self.pos:self.pos + count]
        self.pos += count
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def le16(self) -> int:
        return int.from_bytes(self.take(2), "little")

    def extended_length(self, base: int) -> int:
        total = base
        while True:
            byte = self.byte()
            if byte:
                return total + byte
            total += 255


def lzo_decompress(data: bytes) -> bytes:
    """Decompress an LZO1X block that ends with the end-of-stream marker."""
    src = _Input(bytes(data))
    if not src.data:
        raise DecompressionError("lzo: empty input")
    out = bytearray()
    state = 0

    first = src.data[0]
    if first >= 22:
        src.pos = 1
        out += src.take(first - 17)
        state = 4
    elif first >= 18:
        src.pos = 1
        state = first - 17
        out += src.take(state)

    while True:
        inst = src.byte()
        if inst & 0xC0:
            distance = (src.byte() << 3) + ((inst >> 2) & 0x07) + 1
            length = (inst >> 5) + 1
            next_state = inst & 0x03
        elif inst & 0x20:
            length = (inst & 0x1F) + 2
            if length == 2:
                length = src.extended_length(33)
            word = src.le16()
            next_state = word & 0x03
            distance = (word >> 2) + 1
        elif inst & 0x10:
            length = (inst & 0x07) + 2
            if length == 2:
                length = src.extended_length(9)
            word = src.le16()
            next_state = word & 0x03
            distance = ((inst & 0x08) << 11) + (word >> 2)
            if distance == 0:
                if length != 3:
                    raise DecompressionError("lzo: malformed end of stream marker")
                break
            distance += 16384
        elif state == 0:
            length = inst + 3
            if length == 3:
                length = src.extended_length(18)
            out += src.take(length)
            state = 4
            continue
        elif state != 4:
            next_state = inst & 0x03
            distance = (inst >> 2) + (src.byte() << 2) + 1
            length = 2
        else:
            next_state = inst & 0x03
            distance = (inst >> 2) + (src.byte() << 2) + 2049
            length = 3

        if distance > len(out):
            raise DecompressionError("lzo: lookbehind overrun")
        _copy_back(out, distance, length)
        state = next_state
        out += src.take(next_state)

    if src.pos != len(src.data):
        raise DecompressionError("lzo: input not consumed")
    return bytes(out)