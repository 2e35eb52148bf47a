"""Table-definition helpers used inside schema files.

Schema files are ordinary Python modules::

    from schemakit import dsl

    UserSchema = dsl.Table(
        name="users",
        columns=[
            dsl.Int("id", dsl.with_auto_increment(True)),
            dsl.Varchar("email", dsl.with_length(320)),
        ],
    )

The generator reads these files statically and never imports them, but
keeping them importable lets applications use the same definitions at
runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Final, Sequence

from .shared.model import ColumnDeclaration
from .typemap.registry import AbstractColumnType, name_of

ColumnType = AbstractColumnType
ColumnOption = Callable[[ColumnDeclaration], ColumnDeclaration]

TABLE_FACTORY: Final[str] = "Table"


@dataclass(frozen=True, slots=True)
class Table:
    """A table literal: its SQL name and ordered column declarations."""

    name: str
    columns: Sequence[ColumnDeclaration] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))


def _column(name: str, abstract_type: AbstractColumnType, options: Sequence[ColumnOption]) -> ColumnDeclaration:
    column = ColumnDeclaration(name=name, abstract_type=abstract_type)
    for apply_option in options:
        column = apply_option(column)
    return column


# Options

def with_auto_increment(active: bool) -> ColumnOption:
    """Enable auto-increment; only meaningful for numeric columns."""
    return lambda column: replace(column, auto_increment=active)


def with_type(override: AbstractColumnType | str) -> ColumnOption:
    """Override the generated SQL type, by abstract type or literal string."""
    explicit = name_of(override) if isinstance(override, AbstractColumnType) else str(override)
    return lambda column: replace(column, explicit_type=explicit)


def with_default(value: Any) -> ColumnOption:
    return lambda column: replace(column, default=value, has_default=True)


def with_length(length: int) -> ColumnOption:
    return lambda column: replace(column, length=length)


def with_precision(precision: int, scale: int) -> ColumnOption:
    return lambda column: replace(column, precision=precision, scale=scale)


OPTION_NAMES: Final[frozenset[str]] = frozenset({
    "with_auto_increment",
    "with_type",
    "with_default",
    "with_length",
    "with_precision",
})


# Column factories

def Varchar(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.VARCHAR, options)


def Char(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.CHAR, options)


def Text(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.TEXT, options)


def TinyInt(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.TINYINT, options)


def SmallInt(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.SMALLINT, options)


def Int(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.INT, options)


def BigInt(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.BIGINT, options)


def Boolean(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.BOOLEAN, options)


def Real(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.REAL, options)


def Double(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.DOUBLE, options)


def Decimal(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.DECIMAL, options)


def Date(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.DATE, options)


def Time(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.TIME, options)


def DateTime(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.DATETIME, options)


def Timestamp(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.TIMESTAMP, options)


def Blob(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.BLOB, options)


def Json(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.JSON, options)


def Uuid(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.UUID, options)


def Bit(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.BIT, options)


def Binary(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.BINARY, options)


def Varbinary(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.VARBINARY, options)


def Money(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.MONEY, options)


def Xml(name: str, *options: ColumnOption) -> ColumnDeclaration:
    return _column(name, AbstractColumnType.XML, options)


# Factory name -> abstract type; the extractor dispatches on these names
COLUMN_FACTORIES: Final[dict[str, AbstractColumnType]] = {
    "Varchar": AbstractColumnType.VARCHAR,
    "Char": AbstractColumnType.CHAR,
    "Text": AbstractColumnType.TEXT,
    "TinyInt": AbstractColumnType.TINYINT,
    "SmallInt": AbstractColumnType.SMALLINT,
    "Int": AbstractColumnType.INT,
    "BigInt": AbstractColumnType.BIGINT,
    "Boolean": AbstractColumnType.BOOLEAN,
    "Real": AbstractColumnType.REAL,
    "Double": AbstractColumnType.DOUBLE,
    "Decimal": AbstractColumnType.DECIMAL,
    "Date": AbstractColumnType.DATE,
    "Time": AbstractColumnType.TIME,
    "DateTime": AbstractColumnType.DATETIME,
    "Timestamp": AbstractColumnType.TIMESTAMP,
    "Blob": AbstractColumnType.BLOB,
    "Json": AbstractColumnType.JSON,
    "Uuid": AbstractColumnType.UUID,
    "Bit": AbstractColumnType.BIT,
    "Binary": AbstractColumnType.BINARY,
    "Varbinary": AbstractColumnType.VARBINARY,
    "Money": AbstractColumnType.MONEY,
    "Xml": AbstractColumnType.XML,
}

DSL_NAMES: Final[frozenset[str]] = (
    frozenset(COLUMN_FACTORIES) | OPTION_NAMES | {TABLE_FACTORY, "ColumnType"}
)

# Registry identifiers, so schema files can write ``with_type(POSTGRES_JSONB)``
globals().update(AbstractColumnType.__members__)
