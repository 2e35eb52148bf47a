"""Type-resolution engine: abstract column type + parameters -> SQL type string."""

from __future__ import annotations

from typing import Final

from ..shared.errors import UnsupportedCombination, UnsupportedMultiBitField
from ..shared.model import ColumnDeclaration
from .dialects import Dialect
from .mapping import DEFAULT_TYPE_MAPPINGS, BitFieldRule, DialectTypeMap, TypeMappingTable
from .registry import AbstractColumnType

T = AbstractColumnType

# Default length per length-bearing type, also used when a length of 0 is declared
LENGTH_DEFAULTS: Final[dict[AbstractColumnType, int]] = {
    T.VARCHAR: 255,
    T.VARBINARY: 255,
    T.CHAR: 1,
    T.BINARY: 1,
    T.BIT: 1,
}

# Default (precision, scale) per decimal-like type
DECIMAL_DEFAULTS: Final[dict[AbstractColumnType, tuple[int, int]]] = {
    T.DECIMAL: (10, 2),
    T.MONEY: (19, 4),
}


class TypeResolver:
    """Resolves column declarations against an immutable mapping table.

    The resolver holds no state beyond the table, so one instance can be
    shared freely between threads.
    """

    __slots__ = ("_mappings",)

    def __init__(self, mappings: TypeMappingTable = DEFAULT_TYPE_MAPPINGS) -> None:
        self._mappings = mappings

    @property
    def mappings(self) -> TypeMappingTable:
        return self._mappings

    def resolve(self, dialect: Dialect, column: ColumnDeclaration) -> str:
        """Return the dialect-specific SQL type for ``column``.

        Raises:
            UnsupportedCombination: If the dialect has no mapping for the type.
            UnsupportedMultiBitField: If a multi-bit field is requested on a
                dialect limited to single bits.
        """
        if column.explicit_type:
            return column.explicit_type

        abstract_type = column.abstract_type
        row = self._mappings.row(dialect)
        base = row.base_type(abstract_type) if row is not None else None
        if row is None or base is None:
            raise UnsupportedCombination(dialect, abstract_type, column.name)

        if abstract_type in LENGTH_DEFAULTS:
            return _resolve_sized(row, base, column)
        if abstract_type in DECIMAL_DEFAULTS:
            return _resolve_decimal(base, column)
        # UUID-like and all remaining types take no parameters
        return base


def _effective_length(column: ColumnDeclaration) -> int:
    default = LENGTH_DEFAULTS[column.abstract_type]
    length = column.length if column.length is not None else default
    return length or default


def _resolve_sized(row: DialectTypeMap, base: str, column: ColumnDeclaration) -> str:
    length = _effective_length(column)

    if column.abstract_type is T.BIT:
        if row.bit_rule is BitFieldRule.PARAMETERIZED:
            return f"{base}({length})"
        if row.bit_rule is BitFieldRule.VARIABLE_BIT:
            return f"{row.variable_bit_type}({length})"
        if length > 1:
            raise UnsupportedMultiBitField(row.dialect, length, column.name)
        return base

    if row.takes_length(column.abstract_type):
        return f"{base}({length})"
    return base


def _resolve_decimal(base: str, column: ColumnDeclaration) -> str:
    if "MONEY" in base.upper():
        return base

    default_precision, default_scale = DECIMAL_DEFAULTS[column.abstract_type]
    precision = column.precision if column.precision is not None else default_precision
    scale = column.scale if column.scale is not None else default_scale
    return f"{base}({precision},{scale})"


_DEFAULT_RESOLVER: Final[TypeResolver] = TypeResolver()


def resolve(
    dialect: Dialect,
    column: ColumnDeclaration,
    mappings: TypeMappingTable | None = None,
) -> str:
    """Resolve ``column`` for ``dialect`` using ``mappings`` or the built-in table."""
    if mappings is None:
        return _DEFAULT_RESOLVER.resolve(dialect, column)
    return TypeResolver(mappings).resolve(dialect, column)
