# orcdecode

Low-level decoders for the pieces that ORC column data is made of.

| Module | What it decodes |
| --- | --- |
| `orcdecode.rle_v1` | integer run-length encoding version 1 (`RleReaderV1`) |
| `orcdecode.rle_v2` | integer run-length encoding version 2 (`RleReaderV2`): short repeat, direct, patched base and delta |
| `orcdecode.rle_version` | picks the v1 or v2 reader from a column encoding (`ColumnEncodingKind`, `RleVersion`) |
| `orcdecode.byte_rle` | byte run-length encoding (`iter_byte_rle`) |
| `orcdecode.boolean_rle` | boolean bit streams packed into byte RLE (`iter_booleans`) |
| `orcdecode.floats` | little-endian float and double values (`FloatIter`) |
| `orcdecode.variable_length` | variable-length binary and string values (`Values`) |
| `orcdecode.decompress` | streams split into compressed blocks with 3-byte headers (`Decompressor`) |
| `orcdecode.codecs` | pure-Python Snappy and LZO1X block decompression |
| `orcdecode.schema` | the type tree of a file (`RootDataType`, `DataType`) |
| `orcdecode.integers` | the fixed-width integer kinds values decode into (`IntKind`) |
| `orcdecode.util` | varints, zigzag, bit-packed integers and other shared helpers |

## Installation

```
pip install orcdecode
```

Python 3.10 or later is required. zstd and lz4 blocks are decoded with the `zstandard` and
`lz4` packages; zlib uses the standard library; snappy and lzo are decoded in pure Python.

## Decoding integers

The integer readers take a binary file-like object and an `IntKind` (`I16`, `I32`, `I64`
or `U64`) that says which type the values are decoded into. They are iterators.

```python
import io

from orcdecode.integers import IntKind
from orcdecode.rle_v2 import RleReaderV2

data = bytes([0x0A, 0x27, 0x10])  # short repeat
assert list(RleReaderV2(io.BytesIO(data), IntKind.U64)) == [10000] * 5
```

Signed kinds apply zigzag decoding:

```python
data = bytes([110, 3, 0, 185, 66, 1, 86, 60, 1, 189, 90, 1, 125, 222])
assert list(RleReaderV2(io.BytesIO(data), IntKind.I64)) == [23713, 43806, 57005, 48879]
```

Version 1 works the same way:

```python
from orcdecode.rle_v1 import RleReaderV1

assert list(RleReaderV1(io.BytesIO(bytes([0x61, 0x00, 0x07])), IntKind.U64)) == [7] * 100
```

To choose the reader from a column's encoding kind, use `RleVersion`:

```python
from orcdecode.rle_version import ColumnEncodingKind, RleVersion

version = RleVersion.from_encoding_kind(ColumnEncodingKind.DIRECT_V2)  # RleVersion.V2
reader = version.reader(io.BytesIO(data), IntKind.I64)
lengths = version.unsigned_reader(io.BytesIO(bytes([0x0A, 0x27, 0x10])))
```

A value that does not fit the chosen kind, or arithmetic that overflows it, raises
`OutOfSpecError`.

## Bytes, booleans, floats and binary values

```python
from orcdecode.boolean_rle import iter_booleans
from orcdecode.byte_rle import iter_byte_rle
from orcdecode.floats import FloatIter
from orcdecode.variable_length import Values

assert list(iter_byte_rle(io.BytesIO(bytes([0x01, 0x01])))) == [1, 1, 1, 1]
assert list(iter_booleans(io.BytesIO(bytes([0xFF, 0x80])))) == [True] + [False] * 7

doubles = FloatIter(io.BytesIO(b"\x00" * 16), length=2, width=8)  # width 4 for floats
assert len(doubles) == 2 and list(doubles) == [0.0, 0.0]

values = Values(io.BytesIO(b"helloworld"))
assert values.read(5) == b"hello" and values.read(5) == b"world"
```

`iter_byte_rle` and `iter_booleans` stop quietly when the input runs out. `FloatIter`
raises `DecodeFloatError` if fewer values are present than asked for. `Values.read`
returns fewer bytes than asked for at the end of the stream.

## Compressed streams

`Decompressor` is a readable binary stream (an `io.RawIOBase`) over the blocks of a
stream, so it can be handed to any of the readers above:

```python
from orcdecode.decompress import Compression, CompressionKind, Decompressor

compression = Compression.from_kind(CompressionKind.ZLIB, None)  # default 256 KiB blocks
with Decompressor(raw_stream_bytes, compression) as stream:
    payload = stream.read()
```

`Compression.from_kind(CompressionKind.NONE, ...)` returns `None`, and a `None`
compression reads the stream unchanged. The lower-level pieces are available too:
`decode_header` for the 3-byte block header, `decompress_block` for one block, and
`iter_blocks` to iterate over the decompressed blocks of a stream.

## Schema

`TypeDescription` entries stand for the flattened type list of a file; `RootDataType`
resolves them into a tree.

```python
from orcdecode.schema import RootDataType, TypeDescription, TypeKind

types = [
    TypeDescription(TypeKind.STRUCT, subtypes=(1, 2), field_names=("id", "tags")),
    TypeDescription(TypeKind.LONG),
    TypeDescription(TypeKind.LIST, subtypes=(3,)),
    TypeDescription(TypeKind.STRING),
]
root = RootDataType.from_types(types)
print(root)
# ROOT
#   id LONG
#   tags LIST
#   STRING

tags = root.children[1].data_type
assert tags.all_indices() == [2, 3]
assert [col.name for col in root.project([2]).children] == ["tags"]
```

Malformed type lists raise `SchemaError`.

## Errors

Decoding failures raise a subclass of `orcdecode.errors.OrcError`: `ReadError` when the
input ends early, `OutOfSpecError` for malformed encodings, `VarintTooLargeError`,
`DecodeFloatError`, `DecompressionError` and `SchemaError`.

## What this package does not do

orcdecode does not open ORC files. It does not parse the postscript, footer or metadata
sections, stripe footers or column statistics, and has no protobuf decoding: the schema
types are built from `TypeDescription` values you supply, and the stream bytes handed to
the decoders must already have been located by the caller. There is no conversion to
Arrow or other table formats, and no command-line tool.