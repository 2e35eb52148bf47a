from schemakit.shared.errors import (
    ConfigError,
    DialectError,
    MappingTableError,
    ParseFailure,
    SchemaError,
    UnsupportedCombination,
    UnsupportedMultiBitField,
)
from schemakit.typemap import AbstractColumnType, Dialect


class TestSchemaError:
    def test_init_no_path(self):
        error = SchemaError("test message")
        assert str(error) == "test message"
        assert error.schema_path is None

    def test_init_with_path(self):
        error = SchemaError("test message", "schema/users.py")
        assert str(error) == "[schema/users.py] test message"
        assert error.schema_path == "schema/users.py"

    def test_subclasses(self):
        assert issubclass(ConfigError, SchemaError)
        assert issubclass(MappingTableError, SchemaError)
        assert issubclass(ParseFailure, SchemaError)
        assert issubclass(UnsupportedCombination, DialectError)
        assert issubclass(UnsupportedMultiBitField, DialectError)


class TestParseFailure:
    def test_with_line(self):
        error = ParseFailure("invalid syntax", "users.py", 3)
        assert str(error) == "[users.py] line 3: invalid syntax"
        assert error.lineno == 3

    def test_without_line(self):
        error = ParseFailure("invalid syntax")
        assert str(error) == "invalid syntax"
        assert error.lineno is None


class TestDialectError:
    def test_init(self):
        error = DialectError("unsupported feature", "postgres")
        assert str(error) == "Dialect 'postgres': unsupported feature"
        assert error.dialect == "postgres"
        assert error.schema_path is None

    def test_init_with_path(self):
        error = DialectError("unsupported feature", "postgres", "schema.py")
        assert str(error) == "[schema.py] Dialect 'postgres': unsupported feature"
        assert error.schema_path == "schema.py"


class TestUnsupportedCombination:
    def test_message(self):
        error = UnsupportedCombination(Dialect.SQLITE, AbstractColumnType.POSTGRES_JSONB)
        assert str(error) == "Dialect 'SQLite': no type mapping for 'JSONB'"
        assert error.dialect is Dialect.SQLITE
        assert error.abstract_type is AbstractColumnType.POSTGRES_JSONB
        assert error.column is None

    def test_message_with_column(self):
        error = UnsupportedCombination(Dialect.MYSQL, AbstractColumnType.POSTGRES_INET, "addr")
        assert str(error) == "Dialect 'MySQL': no type mapping for 'INET' (column 'addr')"
        assert error.column == "addr"


class TestUnsupportedMultiBitField:
    def test_message(self):
        error = UnsupportedMultiBitField(Dialect.SQLSERVER, 8, "flags")
        assert str(error) == (
            "Dialect 'SQLServer': multi-bit fields not supported, "
            "requested BIT(8) (column 'flags')"
        )
        assert error.length == 8
        assert error.column == "flags"
