"""Decoders for ORC column data: integer, byte and boolean RLE, floats, binary values, compressed blocks and schema types."""

__version__ = "0.1.0"