"""Column types of an ORC file, built from the footer's flattened type list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .errors import SchemaError

# A union's tag is a single byte, so it can name at most this many variants.
MAX_UNION_VARIANTS = 256


class TypeKind(Enum):
    """Kind of a type entry in the file footer."""

    BOOLEAN = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    STRING = 7
    BINARY = 8
    TIMESTAMP = 9
    LIST = 10
    MAP = 11
    STRUCT = 12
    UNION = 13
    DECIMAL = 14
    DATE = 15
    VARCHAR = 16
    CHAR = 17
    TIMESTAMP_INSTANT = 18


@dataclass(frozen=True)
class TypeDescription:
    """One entry of the footer's type list; subtypes refer to other entries."""

    kind: TypeKind
    subtypes: tuple[int, ...] = ()
    field_names: tuple[str, ...] = ()
    maximum_length: int = 0
    precision: int = 0
    scale: int = 0


_SIMPLE_NAMES = {
    TypeKind.BOOLEAN: "BOOLEAN",
    TypeKind.BYTE: "BYTE",
    TypeKind.SHORT: "SHORT",
    TypeKind.INT: "INTEGER",
    TypeKind.LONG: "LONG",
    TypeKind.FLOAT: "FLOAT",
    TypeKind.DOUBLE: "DOUBLE",
    TypeKind.STRING: "STRING",
    TypeKind.BINARY: "BINARY",
    TypeKind.TIMESTAMP: "TIMESTAMP",
    TypeKind.TIMESTAMP_INSTANT: "TIMESTAMP INSTANT",
    TypeKind.DATE: "DATE",
}


@dataclass(frozen=True)
class NamedColumn:
    """A named child of a struct (or of the root type)."""

    name: str
    data_type: DataType

    def __str__(self) -> str:
        return f"{self.name} {self.data_type}"


def _lookup(types: Sequence[TypeDescription], column_index: int) -> TypeDescription:
    if not 0 <= column_index < len(types):
        raise SchemaError(f"Column index out of bounds: {column_index}")
    return types[column_index]


def _struct_children(
    types: Sequence[TypeDescription], column_index: int
) -> tuple[NamedColumn, ...]:
    ty = _lookup(types, column_index)
    if ty.kind is not TypeKind.STRUCT:
        raise SchemaError(
            f"Type for column index {column_index} must be a struct, found {ty.kind.name}"
        )
    if len(ty.subtypes) != len(ty.field_names):
        raise SchemaError(
            f"Struct type for column index {column_index} must have matching "
            "lengths for subtypes and field names lists"
        )
    return tuple(
        NamedColumn(name, DataType.from_types(types, index))
        for index, name in zip(ty.subtypes, ty.field_names)
    )


@dataclass(frozen=True)
class DataType:
    """A column type together with the column index it occupies in the file."""

    kind: TypeKind
    column_index: int
    children: tuple[NamedColumn, ...] = ()
    subtypes: tuple[DataType, ...] = ()
    max_length: int | None = None
    precision: int | None = None
    scale: int | None = None

    @property
    def child(self) -> DataType:
        """Element type of a list."""
        if self.kind is not TypeKind.LIST:
            raise TypeError(f"{self.kind.name} has no list element type")
        return self.subtypes[0]

    @property
    def key(self) -> DataType:
        """Key type of a map."""
        if self.kind is not TypeKind.MAP:
            raise TypeError(f"{self.kind.name} has no map key type")
        return self.subtypes[0]

    @property
    def value(self) -> DataType:
        """Value type of a map."""
        if self.kind is not TypeKind.MAP:
            raise TypeError(f"{self.kind.name} has no map value type")
        return self.subtypes[1]

    @property
    def variants(self) -> tuple[DataType, ...]:
        """Possible types of a union."""
        if self.kind is not TypeKind.UNION:
            raise TypeError(f"{self.kind.name} has no union variants")
        return self.subtypes

    @staticmethod
    def from_types(types: Sequence[TypeDescription], column_index: int) -> DataType:
        """Build the type at column_index, resolving its subtypes recursively."""
        ty = _lookup(types, column_index)
        kind = ty.kind
        count = len(ty.subtypes)

        if kind is TypeKind.LIST:
            if count != 1:
                raise SchemaError(
                    f"List type for column index {column_index} must have 1 sub type, "
                    f"found {count}"
                )
            return DataType(
                kind, column_index, subtypes=(DataType.from_types(types, ty.subtypes[0]),)
            )
        if kind is TypeKind.MAP:
            if count != 2:
                raise SchemaError(
                    f"Map type for column index {column_index} must have 2 sub types, "
                    f"found {count}"
                )
            return DataType(
                kind,
                column_index,
                subtypes=tuple(DataType.from_types(types, i) for i in ty.subtypes),
            )
        if kind is TypeKind.STRUCT:
            return DataType(kind, column_index, children=_struct_children(types, column_index))
        if kind is TypeKind.UNION:
            if count > MAX_UNION_VARIANTS:
                raise SchemaError(
                    f"Union type for column index {column_index} cannot exceed "
                    f"{MAX_UNION_VARIANTS} variants, found {count}"
                )
            return DataType(
                kind,
                column_index,
                subtypes=tuple(DataType.from_types(types, i) for i in ty.subtypes),
            )
        if kind is TypeKind.DECIMAL:
            return DataType(kind, column_index, precision=ty.precision, scale=ty.scale)
        if kind in (TypeKind.VARCHAR, TypeKind.CHAR):
            return DataType(kind, column_index, max_length=ty.maximum_length)
        return DataType(kind, column_index)

    def children_indices(self) -> list[int]:
        """Column indices of the nested types below this one."""
        kind = self.kind
        if kind is TypeKind.STRUCT:
            return [i for col in self.children for i in col.data_type.children_indices()]
        if kind is TypeKind.LIST:
            return self.child.all_indices()
        if kind is TypeKind.MAP:
            return self.key.children_indices() + self.value.children_indices()
        if kind is TypeKind.UNION:
            return [i for variant in self.subtypes for i in variant.children_indices()]
        return []

    def all_indices(self) -> list[int]:
        """This type's column index followed by its children's."""
        return [self.column_index, *self.children_indices()]

    def __str__(self) -> str:
        kind = self.kind
        if kind in _SIMPLE_NAMES:
            return _SIMPLE_NAMES[kind]
        if kind is TypeKind.VARCHAR:
            return f"VARCHAR({self.max_length})"
        if kind is TypeKind.CHAR:
            return f"CHAR({self.max_length})"
        if kind is TypeKind.DECIMAL:
            return f"DECIMAL({self.precision}, {self.scale})"
        if kind is TypeKind.STRUCT:
            return "STRUCT" + "".join(f"\n  {child}" for child in self.children)
        if kind is TypeKind.LIST:
            return f"LIST\n  {self.child}"
        if kind is TypeKind.MAP:
            return f"MAP\n  {self.key}\n  {self.value}"
        return "UNION" + "".join(f"\n  {variant}" for variant in self.subtypes)


@dataclass(frozen=True)
class RootDataType:
    """The file's root struct: its named children are the top-level columns."""

    children: tuple[NamedColumn, ...]

    @property
    def column_index(self) -> int:
        """The root always occupies column 0."""
        return 0

    @staticmethod
    def from_types(types: Sequence[TypeDescription]) -> RootDataType:
        """Build the root type from the footer's type list."""
        if not types:
            raise SchemaError("No types found")
        return RootDataType(_struct_children(types, 0))

    def project(self, indices: Iterable[int]) -> RootDataType:
        """Keep only the top-level columns whose index is in indices."""
        wanted = set(indices)
        return RootDataType(
            tuple(col for col in self.children if col.data_type.column_index in wanted)
        )

    def __str__(self) -> str:
        return "ROOT" + "".join(f"\n  {child}" for child in self.children)