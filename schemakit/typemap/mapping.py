"""Per-dialect lookup from abstract column type to base SQL type.

Tables are immutable configuration data. They are validated once when
constructed, so a missing shared entry or an empty type name surfaces at
import time rather than on some later resolution call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, Iterable, Iterator, Mapping

from ..shared.errors import MappingTableError
from .dialects import Dialect
from .registry import SHARED_TYPES, AbstractColumnType, dialect_types

T = AbstractColumnType


class BitFieldRule(Enum):
    """How a dialect represents a BIT column with a length."""

    PARAMETERIZED = "parameterized"  # BIT(N)
    VARIABLE_BIT = "variable_bit"  # remapped base name, e.g. VARBIT(N)
    SINGLE_BIT = "single_bit"  # only BIT(1), rendered without a suffix


@dataclass(frozen=True, slots=True)
class DialectTypeMap:
    """One row of the mapping table: a dialect's base types and quirks."""

    dialect: Dialect
    base_types: Mapping[AbstractColumnType, str]
    sized_types: frozenset[AbstractColumnType] = frozenset()
    bit_rule: BitFieldRule = BitFieldRule.SINGLE_BIT
    variable_bit_type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_types", MappingProxyType(dict(self.base_types)))

    def base_type(self, column_type: AbstractColumnType) -> str | None:
        return self.base_types.get(column_type)

    def takes_length(self, column_type: AbstractColumnType) -> bool:
        return column_type in self.sized_types


@dataclass(frozen=True)
class TypeMappingTable:
    """Validated collection of :class:`DialectTypeMap` rows keyed by dialect."""

    rows: Mapping[Dialect, DialectTypeMap] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for dialect, row in self.rows.items():
            _validate_row(dialect, row)
        object.__setattr__(self, "rows", MappingProxyType(dict(self.rows)))

    @classmethod
    def from_rows(cls, rows: Iterable[DialectTypeMap]) -> TypeMappingTable:
        table: dict[Dialect, DialectTypeMap] = {}
        for row in rows:
            if row.dialect in table:
                raise MappingTableError(f"duplicate mapping row for dialect '{row.dialect}'")
            table[row.dialect] = row
        return cls(table)

    def row(self, dialect: Dialect) -> DialectTypeMap | None:
        return self.rows.get(dialect)

    def base_type(self, dialect: Dialect, column_type: AbstractColumnType) -> str | None:
        """Return the base SQL type, or None when the combination is unsupported."""
        row = self.rows.get(dialect)
        if row is None:
            return None
        return row.base_type(column_type)

    def dialects(self) -> Iterator[Dialect]:
        return iter(self.rows)


def _validate_row(dialect: Dialect, row: DialectTypeMap) -> None:
    if row.dialect is not dialect:
        raise MappingTableError(
            f"row for '{row.dialect}' registered under dialect '{dialect}'"
        )

    missing = [t.display_name for t in SHARED_TYPES if t not in row.base_types]
    if missing:
        raise MappingTableError(
            f"dialect '{dialect}' has no mapping for shared type(s): {', '.join(missing)}"
        )

    for column_type, base in row.base_types.items():
        if not isinstance(column_type, AbstractColumnType):
            raise MappingTableError(f"dialect '{dialect}' maps unknown type {column_type!r}")
        if column_type.dialect is not None and column_type.dialect is not dialect:
            raise MappingTableError(
                f"dialect '{dialect}' maps {column_type.name}, "
                f"which belongs to '{column_type.dialect}'"
            )
        if not base or not base.strip():
            raise MappingTableError(
                f"dialect '{dialect}' has an empty mapping for {column_type.name}"
            )

    if row.bit_rule is BitFieldRule.VARIABLE_BIT and not row.variable_bit_type:
        raise MappingTableError(
            f"dialect '{dialect}' uses variable bit fields without a type name"
        )


def _with_extensions(
    dialect: Dialect,
    shared: Mapping[AbstractColumnType, str],
) -> dict[AbstractColumnType, str]:
    """Combine shared entries with the dialect's own extension types."""
    merged = dict(shared)
    for column_type in dialect_types(dialect):
        merged.setdefault(column_type, column_type.display_name)
    return merged


_MYSQL: Final = DialectTypeMap(
    dialect=Dialect.MYSQL,
    base_types=_with_extensions(Dialect.MYSQL, {
        T.VARCHAR: "VARCHAR",
        T.CHAR: "CHAR",
        T.TEXT: "TEXT",
        T.TINYINT: "TINYINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INT",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BOOLEAN",
        T.REAL: "FLOAT",
        T.DOUBLE: "DOUBLE",
        T.DECIMAL: "DECIMAL",
        T.DATE: "DATE",
        T.TIME: "TIME",
        T.DATETIME: "DATETIME",
        T.TIMESTAMP: "TIMESTAMP",
        T.BLOB: "BLOB",
        T.JSON: "JSON",
        T.UUID: "CHAR(36)",
        T.BIT: "BIT",
        T.BINARY: "BINARY",
        T.VARBINARY: "VARBINARY",
        T.MONEY: "DECIMAL",
        T.XML: "TEXT",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR, T.BINARY, T.VARBINARY}),
    bit_rule=BitFieldRule.PARAMETERIZED,
)

_POSTGRESQL: Final = DialectTypeMap(
    dialect=Dialect.POSTGRESQL,
    base_types=_with_extensions(Dialect.POSTGRESQL, {
        T.VARCHAR: "VARCHAR",
        T.CHAR: "CHAR",
        T.TEXT: "TEXT",
        T.TINYINT: "SMALLINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INTEGER",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BOOLEAN",
        T.REAL: "REAL",
        T.DOUBLE: "DOUBLE PRECISION",
        T.DECIMAL: "NUMERIC",
        T.DATE: "DATE",
        T.TIME: "TIME",
        T.DATETIME: "TIMESTAMP",
        T.TIMESTAMP: "TIMESTAMP",
        T.BLOB: "BYTEA",
        T.JSON: "JSON",
        T.UUID: "UUID",
        T.BIT: "BIT",
        T.BINARY: "BYTEA",
        T.VARBINARY: "BYTEA",
        T.MONEY: "MONEY",
        T.XML: "XML",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR}),
    bit_rule=BitFieldRule.PARAMETERIZED,
)

_SQLITE: Final = DialectTypeMap(
    dialect=Dialect.SQLITE,
    base_types={
        T.VARCHAR: "TEXT",
        T.CHAR: "TEXT",
        T.TEXT: "TEXT",
        T.TINYINT: "INTEGER",
        T.SMALLINT: "INTEGER",
        T.INT: "INTEGER",
        T.BIGINT: "INTEGER",
        T.BOOLEAN: "INTEGER",
        T.REAL: "REAL",
        T.DOUBLE: "REAL",
        T.DECIMAL: "NUMERIC",
        T.DATE: "TEXT",
        T.TIME: "TEXT",
        T.DATETIME: "TEXT",
        T.TIMESTAMP: "TEXT",
        T.BLOB: "BLOB",
        T.JSON: "TEXT",
        T.UUID: "TEXT",
        T.BIT: "INTEGER",
        T.BINARY: "BLOB",
        T.VARBINARY: "BLOB",
        T.MONEY: "NUMERIC",
        T.XML: "TEXT",
    },
)

_SQLSERVER: Final = DialectTypeMap(
    dialect=Dialect.SQLSERVER,
    base_types=_with_extensions(Dialect.SQLSERVER, {
        T.VARCHAR: "VARCHAR",
        T.CHAR: "CHAR",
        T.TEXT: "NVARCHAR(MAX)",
        T.TINYINT: "TINYINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INT",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BIT",
        T.REAL: "REAL",
        T.DOUBLE: "FLOAT",
        T.DECIMAL: "DECIMAL",
        T.DATE: "DATE",
        T.TIME: "TIME",
        T.DATETIME: "DATETIME2",
        T.TIMESTAMP: "DATETIME2",
        T.BLOB: "VARBINARY(MAX)",
        T.JSON: "NVARCHAR(MAX)",
        T.UUID: "UNIQUEIDENTIFIER",
        T.BIT: "BIT",
        T.BINARY: "BINARY",
        T.VARBINARY: "VARBINARY",
        T.MONEY: "MONEY",
        T.XML: "XML",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR, T.BINARY, T.VARBINARY}),
    bit_rule=BitFieldRule.SINGLE_BIT,
)

_CQL: Final = DialectTypeMap(
    dialect=Dialect.CQL,
    base_types=_with_extensions(Dialect.CQL, {
        T.VARCHAR: "TEXT",
        T.CHAR: "TEXT",
        T.TEXT: "TEXT",
        T.TINYINT: "TINYINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INT",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BOOLEAN",
        T.REAL: "FLOAT",
        T.DOUBLE: "DOUBLE",
        T.DECIMAL: "DECIMAL",
        T.DATE: "DATE",
        T.TIME: "TIME",
        T.DATETIME: "TIMESTAMP",
        T.TIMESTAMP: "TIMESTAMP",
        T.BLOB: "BLOB",
        T.JSON: "TEXT",
        T.UUID: "UUID",
        T.BIT: "BOOLEAN",
        T.BINARY: "BLOB",
        T.VARBINARY: "BLOB",
        T.MONEY: "DECIMAL",
        T.XML: "TEXT",
    }),
)

_CLICKHOUSE: Final = DialectTypeMap(
    dialect=Dialect.CLICKHOUSE,
    base_types=_with_extensions(Dialect.CLICKHOUSE, {
        T.VARCHAR: "String",
        T.CHAR: "String",
        T.TEXT: "String",
        T.TINYINT: "Int8",
        T.SMALLINT: "Int16",
        T.INT: "Int32",
        T.BIGINT: "Int64",
        T.BOOLEAN: "Bool",
        T.REAL: "Float32",
        T.DOUBLE: "Float64",
        T.DECIMAL: "Decimal",
        T.DATE: "Date",
        T.TIME: "String",
        T.DATETIME: "DateTime",
        T.TIMESTAMP: "DateTime",
        T.BLOB: "String",
        T.JSON: "JSON",
        T.UUID: "UUID",
        T.BIT: "UInt8",
        T.BINARY: "String",
        T.VARBINARY: "String",
        T.MONEY: "Decimal",
        T.XML: "String",
    }),
)

_PRESTO: Final = DialectTypeMap(
    dialect=Dialect.PRESTO,
    base_types=_with_extensions(Dialect.PRESTO, {
        T.VARCHAR: "VARCHAR",
        T.CHAR: "CHAR",
        T.TEXT: "VARCHAR",
        T.TINYINT: "TINYINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INTEGER",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BOOLEAN",
        T.REAL: "REAL",
        T.DOUBLE: "DOUBLE",
        T.DECIMAL: "DECIMAL",
        T.DATE: "DATE",
        T.TIME: "TIME",
        T.DATETIME: "TIMESTAMP",
        T.TIMESTAMP: "TIMESTAMP",
        T.BLOB: "VARBINARY",
        T.JSON: "JSON",
        T.UUID: "UUID",
        T.BIT: "BOOLEAN",
        T.BINARY: "VARBINARY",
        T.VARBINARY: "VARBINARY",
        T.MONEY: "DECIMAL",
        T.XML: "VARCHAR",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR}),
    bit_rule=BitFieldRule.VARIABLE_BIT,
    variable_bit_type="VARBIT",
)

_ORACLE: Final = DialectTypeMap(
    dialect=Dialect.ORACLE,
    base_types=_with_extensions(Dialect.ORACLE, {
        T.VARCHAR: "VARCHAR2",
        T.CHAR: "CHAR",
        T.TEXT: "CLOB",
        T.TINYINT: "NUMBER(3)",
        T.SMALLINT: "NUMBER(5)",
        T.INT: "NUMBER(10)",
        T.BIGINT: "NUMBER(19)",
        T.BOOLEAN: "NUMBER(1)",
        T.REAL: "BINARY_FLOAT",
        T.DOUBLE: "BINARY_DOUBLE",
        T.DECIMAL: "NUMBER",
        T.DATE: "DATE",
        T.TIME: "TIMESTAMP",
        T.DATETIME: "TIMESTAMP",
        T.TIMESTAMP: "TIMESTAMP",
        T.BLOB: "BLOB",
        T.JSON: "CLOB",
        T.UUID: "RAW(16)",
        T.BIT: "NUMBER(1)",
        T.BINARY: "RAW",
        T.VARBINARY: "RAW",
        T.MONEY: "NUMBER",
        T.XML: "XMLTYPE",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR, T.BINARY, T.VARBINARY}),
)

_INFORMIX: Final = DialectTypeMap(
    dialect=Dialect.INFORMIX,
    base_types=_with_extensions(Dialect.INFORMIX, {
        T.VARCHAR: "VARCHAR",
        T.CHAR: "CHAR",
        T.TEXT: "TEXT",
        T.TINYINT: "SMALLINT",
        T.SMALLINT: "SMALLINT",
        T.INT: "INTEGER",
        T.BIGINT: "BIGINT",
        T.BOOLEAN: "BOOLEAN",
        T.REAL: "SMALLFLOAT",
        T.DOUBLE: "FLOAT",
        T.DECIMAL: "DECIMAL",
        T.DATE: "DATE",
        T.TIME: "DATETIME HOUR TO SECOND",
        T.DATETIME: "DATETIME YEAR TO SECOND",
        T.TIMESTAMP: "DATETIME YEAR TO FRACTION",
        T.BLOB: "BLOB",
        T.JSON: "JSON",
        T.UUID: "CHAR(36)",
        T.BIT: "BOOLEAN",
        T.BINARY: "BYTE",
        T.VARBINARY: "BYTE",
        T.MONEY: "MONEY",
        T.XML: "LVARCHAR",
    }),
    sized_types=frozenset({T.VARCHAR, T.CHAR}),
)

DEFAULT_TYPE_MAPPINGS: Final[TypeMappingTable] = TypeMappingTable.from_rows([
    _MYSQL,
    _POSTGRESQL,
    _SQLITE,
    _SQLSERVER,
    _CQL,
    _CLICKHOUSE,
    _PRESTO,
    _ORACLE,
    _INFORMIX,
])
