"""Exceptions raised while decoding ORC data."""


class OrcError(Exception):
    """Base class for every error raised by this package."""


class ReadError(OrcError):
    """The underlying reader failed or ran out of bytes."""

    def __init__(self, source: str = "failed to fill whole buffer") -> None:
        super().__init__(f"Failed to read, source: {source}")
        self.source = source


class OutOfSpecError(OrcError):
    """The data does not follow the ORC specification."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class VarintTooLargeError(OrcError):
    """A varint had more bits than the target integer can hold."""

    def __init__(self) -> None:
        super().__init__("Varint being decoded is too large")


class DecodeFloatError(OrcError):
    """A floating point value could not be read."""

    def __init__(self, source: str = "failed to fill whole buffer") -> None:
        super().__init__(f"Failed to decode float, source: {source}")
        self.source = source


class DecompressionError(OrcError):
    """A compressed block could not be decompressed."""


class SchemaError(OrcError):
    """The type description of a file is malformed."""