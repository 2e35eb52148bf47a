from dataclasses import replace

import pytest

from schemakit.shared.errors import UnsupportedCombination, UnsupportedMultiBitField
from schemakit.shared.model import ColumnDeclaration
from schemakit.typemap import (
    DEFAULT_TYPE_MAPPINGS,
    SHARED_TYPES,
    AbstractColumnType,
    Dialect,
    TypeMappingTable,
    TypeResolver,
    resolve,
)

T = AbstractColumnType


def col(column_type, **kwargs):
    return ColumnDeclaration(name=kwargs.pop("name", "c"), abstract_type=column_type, **kwargs)


class TestExplicitType:
    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_override_wins(self, dialect):
        column = col(T.VARCHAR, explicit_type="CITEXT", length=40)
        assert resolve(dialect, column) == "CITEXT"

    def test_override_skips_unsupported(self):
        column = col(T.POSTGRES_JSONB, explicit_type="TEXT")
        assert resolve(Dialect.SQLITE, column) == "TEXT"

    def test_empty_override_ignored(self):
        assert resolve(Dialect.MYSQL, col(T.INT, explicit_type="")) == "INT"


class TestLengthTypes:
    @pytest.mark.parametrize(
        "dialect,column,expected",
        [
            (Dialect.MYSQL, col(T.VARCHAR), "VARCHAR(255)"),
            (Dialect.MYSQL, col(T.VARCHAR, length=50), "VARCHAR(50)"),
            (Dialect.MYSQL, col(T.VARCHAR, length=0), "VARCHAR(255)"),
            (Dialect.MYSQL, col(T.CHAR), "CHAR(1)"),
            (Dialect.MYSQL, col(T.CHAR, length=10), "CHAR(10)"),
            (Dialect.MYSQL, col(T.VARBINARY), "VARBINARY(255)"),
            (Dialect.POSTGRESQL, col(T.VARCHAR, length=10), "VARCHAR(10)"),
            (Dialect.POSTGRESQL, col(T.VARBINARY, length=10), "BYTEA"),
            (Dialect.SQLITE, col(T.VARCHAR, length=10), "TEXT"),
            (Dialect.SQLSERVER, col(T.BINARY, length=16), "BINARY(16)"),
            (Dialect.ORACLE, col(T.VARCHAR, length=100), "VARCHAR2(100)"),
            (Dialect.CLICKHOUSE, col(T.VARCHAR, length=100), "String"),
        ],
    )
    def test_sized(self, dialect, column, expected):
        assert resolve(dialect, column) == expected


class TestDecimalTypes:
    @pytest.mark.parametrize(
        "dialect,column,expected",
        [
            (Dialect.MYSQL, col(T.DECIMAL), "DECIMAL(10,2)"),
            (Dialect.MYSQL, col(T.DECIMAL, precision=12, scale=4), "DECIMAL(12,4)"),
            (Dialect.POSTGRESQL, col(T.DECIMAL), "NUMERIC(10,2)"),
            (Dialect.MYSQL, col(T.MONEY), "DECIMAL(19,4)"),
            (Dialect.POSTGRESQL, col(T.MONEY), "MONEY"),
            (Dialect.POSTGRESQL, col(T.MONEY, precision=12, scale=2), "MONEY"),
            (Dialect.SQLSERVER, col(T.MONEY), "MONEY"),
            (Dialect.ORACLE, col(T.MONEY), "NUMBER(19,4)"),
            (Dialect.MYSQL, col(T.DECIMAL, precision=8), "DECIMAL(8,2)"),
        ],
    )
    def test_decimal(self, dialect, column, expected):
        assert resolve(dialect, column) == expected


class TestBitFields:
    def test_parameterized(self):
        assert resolve(Dialect.MYSQL, col(T.BIT, length=8)) == "BIT(8)"
        assert resolve(Dialect.POSTGRESQL, col(T.BIT)) == "BIT(1)"

    def test_variable_bit(self):
        assert resolve(Dialect.PRESTO, col(T.BIT, length=8)) == "VARBIT(8)"

    def test_single_bit(self):
        assert resolve(Dialect.SQLSERVER, col(T.BIT)) == "BIT"
        assert resolve(Dialect.SQLSERVER, col(T.BIT, length=1)) == "BIT"

    def test_multi_bit_unsupported(self):
        with pytest.raises(UnsupportedMultiBitField) as exc_info:
            resolve(Dialect.SQLSERVER, col(T.BIT, name="flags", length=8))
        assert exc_info.value.length == 8
        assert exc_info.value.dialect is Dialect.SQLSERVER
        assert exc_info.value.column == "flags"


class TestPlainTypes:
    @pytest.mark.parametrize(
        "dialect,column_type,expected",
        [
            (Dialect.MYSQL, T.UUID, "CHAR(36)"),
            (Dialect.POSTGRESQL, T.UUID, "UUID"),
            (Dialect.SQLSERVER, T.DATETIME, "DATETIME2"),
            (Dialect.POSTGRESQL, T.POSTGRES_JSONB, "JSONB"),
            (Dialect.CLICKHOUSE, T.CLICKHOUSE_OBJECT_JSON, "Object('json')"),
        ],
    )
    def test_plain(self, dialect, column_type, expected):
        assert resolve(dialect, col(column_type)) == expected

    def test_uuid_ignores_length(self):
        assert resolve(Dialect.MYSQL, col(T.UUID, length=99)) == "CHAR(36)"


class TestTotality:
    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_shared_types_resolve(self, dialect):
        for column_type in SHARED_TYPES:
            assert resolve(dialect, col(column_type))

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_deterministic(self, dialect):
        column = col(T.DECIMAL, precision=14, scale=3)
        assert resolve(dialect, column) == resolve(dialect, column)


class TestUnsupported:
    def test_foreign_extension(self):
        with pytest.raises(UnsupportedCombination) as exc_info:
            resolve(Dialect.SQLITE, col(T.POSTGRES_JSONB, name="payload"))
        assert exc_info.value.abstract_type is T.POSTGRES_JSONB
        assert exc_info.value.dialect is Dialect.SQLITE
        assert exc_info.value.column == "payload"

    def test_dialect_missing_from_table(self):
        table = TypeMappingTable.from_rows([DEFAULT_TYPE_MAPPINGS.row(Dialect.SQLITE)])
        with pytest.raises(UnsupportedCombination):
            resolve(Dialect.MYSQL, col(T.INT), table)

    def test_substitute_table(self):
        row = DEFAULT_TYPE_MAPPINGS.row(Dialect.SQLITE)
        base_types = dict(row.base_types)
        base_types[T.TEXT] = "CLOB"
        table = TypeMappingTable.from_rows([replace(row, base_types=base_types)])

        resolver = TypeResolver(table)

        assert resolver.mappings is table
        assert resolver.resolve(Dialect.SQLITE, col(T.TEXT)) == "CLOB"
        assert resolve(Dialect.SQLITE, col(T.TEXT)) == "TEXT"
