import pytest

from schemakit import dsl
from schemakit.extractor import extract
from schemakit.shared.model import ColumnDeclaration
from schemakit.typemap import AbstractColumnType

T = AbstractColumnType


class TestFactories:
    @pytest.mark.parametrize("factory_name,column_type", sorted(dsl.COLUMN_FACTORIES.items()))
    def test_factory_builds_declaration(self, factory_name, column_type):
        column = getattr(dsl, factory_name)("c")
        assert column == ColumnDeclaration(name="c", abstract_type=column_type)

    def test_every_shared_type_has_a_factory(self):
        shared = {member for member in AbstractColumnType if member.is_shared}
        assert set(dsl.COLUMN_FACTORIES.values()) == shared


class TestOptions:
    def test_options_apply_in_order(self):
        column = dsl.Varchar(
            "email",
            dsl.with_length(64),
            dsl.with_default("none"),
            dsl.with_length(128),
        )
        assert column.length == 128
        assert column.default == "none"
        assert column.has_default is True

    def test_with_type_accepts_registry_member(self):
        column = dsl.Json("payload", dsl.with_type(dsl.POSTGRES_JSONB))
        assert column.explicit_type == "JSONB"

    def test_with_type_accepts_string(self):
        column = dsl.Text("body", dsl.with_type("CITEXT"))
        assert column.explicit_type == "CITEXT"

    def test_with_precision(self):
        column = dsl.Decimal("price", dsl.with_precision(8, 3))
        assert (column.precision, column.scale) == (8, 3)

    def test_with_auto_increment(self):
        assert dsl.BigInt("id", dsl.with_auto_increment(True)).auto_increment is True


class TestTable:
    def test_columns_stored_as_tuple(self):
        table = dsl.Table(name="users", columns=[dsl.Int("id")])
        assert table.columns == (ColumnDeclaration(name="id", abstract_type=T.INT),)

    def test_runtime_matches_extraction(self):
        source = (
            "from schemakit import dsl\n"
            "UserSchema = dsl.Table(name='users', columns=[\n"
            "    dsl.Int('id', dsl.with_auto_increment(True)),\n"
            "    dsl.Varchar('email', dsl.with_length(320)),\n"
            "    dsl.Money('balance', dsl.with_default(0)),\n"
            "])\n"
        )
        namespace: dict = {}
        exec(compile(source, "users.py", "exec"), namespace)

        (entity,) = extract(source)
        assert entity.columns == namespace["UserSchema"].columns
