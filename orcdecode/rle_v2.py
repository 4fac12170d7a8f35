"""Decoder for ORC integer run length encoding, version 2."""

from __future__ import annotations

from enum import Enum
from itertools import repeat
from typing import BinaryIO, Callable, Iterable, Iterator

from .errors import OutOfSpecError
from .integers import IntKind
from .util import (
    extract_run_length_from_header,
    read_abs_varint,
    read_exact,
    read_ints,
    read_u8,
    read_varint_zigzagged,
    rle_v2_decode_bit_width,
    try_read_u8,
)

# Minimum number of repeated values for the short repeat sub-encoding.
MIN_REPEAT_SIZE = 3

_DELTA_OVERFLOW = "over/underflow when decoding delta integer"
_PATCHED_OVERFLOW = "over/underflow when decoding patched base integer"


class EncodingType(Enum):
    """The four RLEv2 sub-encodings, chosen by the top two header bits."""

    SHORT_REPEAT = 0b00
    DIRECT = 0b01
    PATCHED_BASE = 0b10
    DELTA = 0b11

    @staticmethod
    def from_header(header: int) -> EncodingType:
        """Sub-encoding named by the two highest bits of a header byte."""
        return EncodingType((header >> 6) & 0b11)


def _closest_fixed_bits(width: int) -> int:
    """Round a patch width up to one of the widths the writer actually uses."""
    if 1 <= width <= 24:
        return width
    for limit in (26, 28, 30, 32, 40, 48, 56, 64):
        if width <= limit:
            return limit
    raise OutOfSpecError(f"invalid patch width: {width}")


def _iter_patches(entries: Iterable[int], patch_bit_width: int) -> Iterator[tuple[int, int]]:
    """Yield (gap, patch) pairs, merging the 255-gap filler entries."""
    mask = (1 << patch_bit_width) - 1
    entries = iter(entries)
    for entry in entries:
        gap_total = 0
        gap, patch = entry >> patch_bit_width, entry & mask
        while gap == 255 and patch == 0:
            gap_total += 255
            entry = next(entries, None)
            if entry is None:
                raise OutOfSpecError("patch list ended inside a gap")
            gap, patch = entry >> patch_bit_width, entry & mask
        yield gap_total + gap, patch


class RleReaderV2:
    """Iterate over the integers of an RLEv2 stream, decoded as kind."""

    def __init__(self, reader: BinaryIO, kind: IntKind) -> None:
        self._reader = reader
        self._kind = kind
        self._batch: Iterator[int] = iter(())
        self._decoders: dict[EncodingType, Callable[[int], list[int]]] = {
            EncodingType.SHORT_REPEAT: self._read_short_repeat,
            EncodingType.DIRECT: self._read_direct,
            EncodingType.PATCHED_BASE: self._read_patched_base,
            EncodingType.DELTA: self._read_delta,
        }

    def __iter__(self) -> RleReaderV2:
        return self

    def __next__(self) -> int:
        while True:
            for value in self._batch:
                return value
            header = try_read_u8(self._reader)
            if header is None:
                raise StopIteration
            decode = self._decoders[EncodingType.from_header(header)]
            self._batch = iter(decode(header))

    def _read_short_repeat(self, header: int) -> list[int]:
        byte_width = ((header >> 3) & 0x07) + 1
        if self._kind.byte_size < byte_width:
            raise OutOfSpecError(
                "byte width of short repeat encoding exceeds byte size of "
                "integer being decoded to"
            )
        run_length = (header & 0x07) + MIN_REPEAT_SIZE
        raw = self._kind.from_be_bytes(read_exact(self._reader, byte_width))
        value = self._kind.zigzag_decode(raw)
        return list(repeat(value, run_length))

    def _read_direct(self, header: int) -> list[int]:
        bit_width = rle_v2_decode_bit_width((header >> 1) & 0x1F)
        if self._kind.bits < bit_width:
            raise OutOfSpecError(
                "byte width of direct encoding exceeds byte size of integer "
                "being decoded to"
            )
        length = extract_run_length_from_header(header, read_u8(self._reader))
        values = read_ints(length, bit_width, self._reader, self._kind)
        return [self._kind.zigzag_decode(value) for value in values]

    def _read_patched_base(self, header: int) -> list[int]:
        kind = self._kind
        value_bit_width = rle_v2_decode_bit_width((header >> 1) & 0x1F)
        length = extract_run_length_from_header(header, read_u8(self._reader))

        third_byte = read_u8(self._reader)
        fourth_byte = read_u8(self._reader)

        base_byte_width = ((third_byte >> 5) & 0x07) + 1
        patch_bit_width = rle_v2_decode_bit_width(third_byte & 0x1F)
        patch_gap_bit_width = ((fourth_byte >> 5) & 0x07) + 1

        patch_total_bit_width = patch_bit_width + patch_gap_bit_width
        if patch_total_bit_width > 64:
            raise OutOfSpecError(
                "combined patch width and patch gap width cannot be greater "
                "than 64 bits"
            )
        if patch_bit_width + value_bit_width > kind.bits:
            raise OutOfSpecError(
                "combined patch width and value width cannot exceed the size "
                "of the integer type being decoded"
            )
        if base_byte_width > kind.byte_size:
            raise OutOfSpecError(
                "base width of patched base encoding exceeds byte size of "
                "integer being decoded to"
            )

        patch_list_length = fourth_byte & 0x1F

        raw_base = kind.from_be_bytes(read_exact(self._reader, base_byte_width))
        base = kind.decode_signed_from_msb(raw_base, base_byte_width)

        values = read_ints(length, value_bit_width, self._reader, kind)
        entries = read_ints(
            patch_list_length,
            _closest_fixed_bits(patch_total_bit_width),
            self._reader,
            IntKind.U64,
        )

        patches = _iter_patches(entries, patch_bit_width)
        first = next(patches, None)
        if first is None:
            raise OutOfSpecError("patched base encoding has an empty patch list")
        target, patch = first

        decoded = []
        for idx, value in enumerate(values):
            if idx == target:
                value = kind.wrap(value | kind.wrap(patch << value_bit_width))
                following = next(patches, None)
                if following is not None:
                    gap, patch = following
                    target = gap + idx
            try:
                decoded.append(kind.checked_add(value, base))
            except OverflowError:
                raise OutOfSpecError(_PATCHED_OVERFLOW) from None
        return decoded

    def _read_delta(self, header: int) -> list[int]:
        kind = self._kind
        encoded_width = (header >> 1) & 0x1F
        # Zero means a fixed delta here, not a width of one.
        delta_bit_width = 0 if encoded_width == 0 else rle_v2_decode_bit_width(encoded_width)

        length = extract_run_length_from_header(header, read_u8(self._reader))
        base = read_varint_zigzagged(self._reader, kind)
        negative, delta = read_abs_varint(self._reader, kind)
        step = kind.checked_sub if negative else kind.checked_add

        decoded = [base]
        try:
            if delta_bit_width == 0:
                current = base
                for _ in range(1, length):
                    current = step(current, delta)
                    decoded.append(current)
                return decoded

            if length < 2:
                raise OutOfSpecError(
                    "delta encoding with varying deltas needs at least 2 values"
                )
            current = step(base, delta)
            decoded.append(current)
            for item in read_ints(length - 2, delta_bit_width, self._reader, kind):
                current = step(current, item)
                decoded.append(current)
        except OverflowError:
            raise OutOfSpecError(_DELTA_OVERFLOW) from None
        return decoded