import json
import textwrap
from unittest.mock import patch

import pytest

from schemakit.extractor.main import (
    DslAliases,
    entity_to_dict,
    extract,
    extract_file,
    main,
)
from schemakit.shared.errors import ParseFailure, SchemaError
from schemakit.typemap import AbstractColumnType

T = AbstractColumnType


def _extract(source: str):
    return extract(textwrap.dedent(source))


USERS = """
from schemakit import dsl

UserSchema = dsl.Table(
    name="users",
    columns=[
        dsl.Int("id", dsl.with_auto_increment(True)),
        dsl.Varchar("email", dsl.with_length(320)),
        dsl.Decimal("balance", dsl.with_precision(12, 4)),
        dsl.Boolean("active", dsl.with_default(True)),
        dsl.Json("settings", dsl.with_type(dsl.POSTGRES_JSONB)),
    ],
)
"""


class TestExtract:
    def test_basic(self):
        (entity,) = _extract(USERS)

        assert entity.name == "User"
        assert entity.table_name == "users"
        assert entity.column_names == ["id", "email", "balance", "active", "settings"]
        assert entity.diagnostics == ()

    def test_column_attributes(self):
        (entity,) = _extract(USERS)

        id_col = entity.column("id")
        assert id_col.abstract_type is T.INT
        assert id_col.auto_increment is True
        assert id_col.has_default is False

        email = entity.column("email")
        assert email.abstract_type is T.VARCHAR
        assert email.length == 320

        balance = entity.column("balance")
        assert (balance.precision, balance.scale) == (12, 4)

        active = entity.column("active")
        assert active.has_default is True
        assert active.default is True

        settings = entity.column("settings")
        assert settings.abstract_type is T.JSON
        assert settings.explicit_type == "JSONB"

    def test_empty_source(self):
        assert _extract("") == []

    def test_no_tables(self):
        assert _extract("import os\n\nVALUE = 1\n\ndef helper():\n    return 2\n") == []

    def test_syntax_error(self):
        with pytest.raises(ParseFailure) as exc_info:
            extract("def broken(:\n", filename="broken.py")
        assert exc_info.value.lineno == 1
        assert exc_info.value.schema_path == "broken.py"

    def test_declaration_order_across_types(self):
        entities = _extract("""
            from schemakit import dsl

            Orders = dsl.Table(name="orders", columns=[
                dsl.Uuid("id"),
                dsl.Timestamp("placed_at"),
                dsl.Money("total"),
                dsl.Text("note"),
                dsl.Bit("flags", dsl.with_length(8)),
            ])
        """)

        assert entities[0].column_names == ["id", "placed_at", "total", "note", "flags"]
        assert [c.abstract_type for c in entities[0].columns] == [
            T.UUID, T.TIMESTAMP, T.MONEY, T.TEXT, T.BIT,
        ]

    def test_multiple_tables_in_order(self):
        entities = _extract("""
            from schemakit import dsl

            ProductDefinition = dsl.Table(name="product", columns=[dsl.Int("id")])
            AuditTable = dsl.Table(name="audit", columns=[dsl.Text("entry")])
            Accounts = dsl.Table(name="accounts", columns=[dsl.Int("id")])
        """)

        assert [e.name for e in entities] == ["Product", "Audit", "Accounts"]
        assert [e.table_name for e in entities] == ["product", "audit", "accounts"]

    def test_table_without_columns(self):
        (entity,) = _extract("""
            from schemakit import dsl
            EmptySchema = dsl.Table(name="empty")
        """)
        assert entity.columns == ()

    def test_table_without_name_skipped(self):
        assert _extract("""
            from schemakit import dsl
            Nameless = dsl.Table(columns=[dsl.Int("id")])
        """) == []

    def test_nested_assignment_ignored(self):
        assert _extract("""
            from schemakit import dsl

            def build():
                Inner = dsl.Table(name="inner", columns=[])
                return Inner
        """) == []

    def test_annotated_and_tuple_assignment(self):
        entities = _extract("""
            from schemakit import dsl

            UserSchema: dsl.Table = dsl.Table(name="users", columns=[])
            A, B = dsl.Table(name="a"), dsl.Table(name="b")
        """)
        assert [e.table_name for e in entities] == ["users", "a", "b"]

    def test_single_table_among_unrelated_code(self):
        entities = _extract("""
            import os
            from dataclasses import dataclass

            from other import Table
            from schemakit import dsl

            LIMIT = 10
            Legacy = Table(name="legacy", columns=[dsl.Int("id")])


            def helper(value):
                return value * 2


            @dataclass
            class Settings:
                path: str = os.getcwd()


            UserSchema = dsl.Table(name="users", columns=[dsl.Int("id")])

            Cache = dict(name="cache")
            Other = Table("other", [dsl.Text("body")])
            VERSION = helper(LIMIT)
        """)

        assert len(entities) == 1
        assert entities[0].table_name == "users"

    def test_positional_arguments(self):
        (entity,) = _extract("""
            from schemakit import dsl
            UserSchema = dsl.Table("users", [dsl.Int("id"), dsl.Text("bio")])
        """)
        assert entity.table_name == "users"
        assert entity.column_names == ["id", "bio"]

    def test_mixed_positional_and_keyword(self):
        (entity,) = _extract("""
            from schemakit import dsl
            UserSchema = dsl.Table("users", columns=[dsl.Int("id")])
        """)
        assert entity.table_name == "users"
        assert entity.column_names == ["id"]


class TestAliases:
    @pytest.mark.parametrize(
        "header,prefix",
        [
            ("from schemakit import dsl", "dsl."),
            ("from schemakit import dsl as g", "g."),
            ("import schemakit.dsl", "schemakit.dsl."),
            ("import schemakit.dsl as tables", "tables."),
            ("import schemakit", "schemakit.dsl."),
            ("from schemakit.dsl import *", ""),
        ],
    )
    def test_import_forms(self, header, prefix):
        source = (
            f"{header}\n\n"
            f"UserSchema = {prefix}Table(name='users', columns=[\n"
            f"    {prefix}Int('id', {prefix}with_auto_increment(True)),\n"
            f"])\n"
        )
        (entity,) = extract(source)
        assert entity.column("id").auto_increment is True

    def test_renamed_names(self):
        (entity,) = _extract("""
            from schemakit.dsl import Table as T, Varchar as Str, with_length as size

            UserSchema = T(name="users", columns=[Str("email", size(64))])
        """)
        column = entity.column("email")
        assert column.abstract_type is T.VARCHAR
        assert column.length == 64

    def test_table_requires_dsl_import(self):
        assert _extract("""
            from other import Table, Int
            UserSchema = Table(name="users", columns=[Int("id")])
        """) == []

    def test_unrelated_call_in_columns_skipped(self):
        (entity,) = _extract("""
            from schemakit import dsl
            UserSchema = dsl.Table(name="users", columns=[dsl.Int("id"), make_column("x"), "raw"])
        """)
        assert entity.column_names == ["id"]
        assert entity.diagnostics == ()

    def test_from_module(self):
        import ast

        tree = ast.parse("from schemakit import dsl as d\nfrom schemakit.dsl import Int\n")
        aliases = DslAliases.from_module(tree)
        assert aliases.modules == frozenset({"d"})
        assert aliases.names == {"Int": "Int"}
        assert aliases.star is False


class TestDiagnostics:
    def test_auto_increment_on_text(self):
        (entity,) = _extract("""
            from schemakit import dsl
            NoteSchema = dsl.Table(name="notes", columns=[
                dsl.Varchar("title", dsl.with_auto_increment(True)),
            ])
        """)
        assert entity.column("title").auto_increment is False
        assert len(entity.diagnostics) == 1
        assert "auto-increment ignored for VARCHAR" in entity.diagnostics[0]

    def test_non_decimal_length(self):
        (entity,) = _extract("""
            from schemakit import dsl
            NoteSchema = dsl.Table(name="notes", columns=[
                dsl.Varchar("title", dsl.with_length(0x40)),
            ])
        """)
        assert entity.column("title").length is None
        assert "base-10 integer" in entity.diagnostics[0]
        assert entity.diagnostics[0].startswith("line 4:")

    def test_unsupported_default(self):
        (entity,) = _extract("""
            from schemakit import dsl
            NoteSchema = dsl.Table(name="notes", columns=[
                dsl.Int("count", dsl.with_default(compute())),
            ])
        """)
        column = entity.column("count")
        assert column.has_default is False
        assert "with_default()" in entity.diagnostics[0]

    @pytest.mark.parametrize(
        "literal,expected",
        [("0", 0), ("-5", -5), ("2.5", 2.5), ("''", ""), ("None", None), ("False", False)],
    )
    def test_default_literals(self, literal, expected):
        (entity,) = extract(
            "from schemakit import dsl\n"
            f"S = dsl.Table(name='s', columns=[dsl.Int('c', dsl.with_default({literal}))])\n"
        )
        column = entity.column("c")
        assert column.has_default is True
        assert column.default == expected
        assert type(column.default) is type(expected)

    @pytest.mark.parametrize("literal", ["1e400", "-1e400"])
    def test_infinite_default_rejected(self, literal):
        (entity,) = extract(
            "from schemakit import dsl\n"
            f"S = dsl.Table(name='s', columns=[dsl.Double('c', dsl.with_default({literal}))])\n"
        )
        column = entity.column("c")
        assert column.has_default is False
        assert "not a finite float" in entity.diagnostics[0]

    def test_duplicate_column(self):
        (entity,) = _extract("""
            from schemakit import dsl
            S = dsl.Table(name="s", columns=[dsl.Int("id"), dsl.Text("id")])
        """)
        assert entity.column_names == ["id"]
        assert entity.column("id").abstract_type is T.INT
        assert "duplicate column 'id'" in entity.diagnostics[0]

    def test_missing_column_name(self):
        (entity,) = _extract("""
            from schemakit import dsl
            S = dsl.Table(name="s", columns=[dsl.Int(), dsl.Int(NAME)])
        """)
        assert entity.columns == ()
        assert len(entity.diagnostics) == 2

    def test_columns_not_a_list(self):
        (entity,) = _extract("""
            from schemakit import dsl
            S = dsl.Table(name="s", columns=build_columns())
        """)
        assert entity.columns == ()
        assert "list literal" in entity.diagnostics[0]

    def test_diagnostics_excluded_from_equality(self):
        clean = _extract("""
            from schemakit import dsl
            S = dsl.Table(name="s", columns=[dsl.Int("id")])
        """)
        noisy = _extract("""
            from schemakit import dsl
            S = dsl.Table(name="s", columns=[dsl.Int("id"), dsl.Int("id")])
        """)
        assert clean == noisy


class TestExtractFile:
    def test_extract_file(self, tmp_path):
        path = tmp_path / "users.py"
        path.write_text(USERS)
        (entity,) = extract_file(path)
        assert entity.name == "User"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError):
            extract_file(tmp_path / "missing.py")


class TestEntityToDict:
    def test_entity_to_dict(self):
        (entity,) = _extract(USERS)
        data = entity_to_dict(entity)

        assert data["name"] == "User"
        assert data["columns"][0]["type"] == "INT"
        assert data["columns"][4]["explicit_type"] == "JSONB"
        json.dumps(data)


class TestMain:
    def test_main_prints_json(self, tmp_path, capsys):
        path = tmp_path / "users.py"
        path.write_text(USERS)

        main([str(path)])

        captured = capsys.readouterr()
        documents = json.loads(captured.out)
        assert documents[str(path.resolve())][0]["table_name"] == "users"

    def test_main_warns_on_bad_file(self, tmp_path, capsys):
        (tmp_path / "good.py").write_text(USERS)
        (tmp_path / "bad.py").write_text("def broken(:\n")

        main([str(tmp_path)])

        captured = capsys.readouterr()
        assert "Warning:" in captured.err
        assert len(json.loads(captured.out)) == 1

    def test_main_missing_path(self, tmp_path):
        with pytest.raises(SystemExit, match="Error:"):
            main([str(tmp_path / "missing.py")])

    def test_main_uses_sys_argv(self, tmp_path, capsys):
        path = tmp_path / "users.py"
        path.write_text(USERS)

        with patch("sys.argv", ["extract", str(path)]):
            main()

        assert "users" in capsys.readouterr().out
