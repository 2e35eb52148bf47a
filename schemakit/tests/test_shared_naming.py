import pytest

from schemakit.shared.naming import (
    PYTHON_KEYWORDS,
    constant_name,
    derive_entity_name,
    sanitize_field_name,
    sanitize_module_name,
    to_pascal_case,
    to_snake_case,
)


class TestDeriveEntityName:
    @pytest.mark.parametrize(
        "variable,expected",
        [
            ("UserSchema", "User"),
            ("OrderDefinition", "Order"),
            ("ProductTable", "Product"),
            ("Accounts", "Accounts"),
            ("OrderTableSchema", "OrderTable"),
            ("Schema", "Schema"),
            ("Table", "Table"),
            ("user_schema", "user_schema"),
        ],
    )
    def test_derive_entity_name(self, variable, expected):
        assert derive_entity_name(variable) == expected

    def test_only_first_suffix_removed(self):
        assert derive_entity_name("AuditDefinitionSchema") == "AuditDefinition"


class TestToPascalCase:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("hello_world", "HelloWorld"),
            ("hello-world", "HelloWorld"),
            ("helloWorld", "HelloWorld"),
            ("User", "User"),
            ("OrderItem", "OrderItem"),
            ("", ""),
            ("_", ""),
            ("a", "A"),
        ],
    )
    def test_to_pascal_case(self, input_str, expected):
        assert to_pascal_case(input_str) == expected


class TestToSnakeCase:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("HelloWorld", "hello_world"),
            ("hello-world", "hello_world"),
            ("User", "user"),
            ("OrderItem", "order_item"),
            ("already_snake", "already_snake"),
            ("Version2Data", "version2_data"),
        ],
    )
    def test_to_snake_case(self, input_str, expected):
        assert to_snake_case(input_str) == expected


class TestSanitizeModuleName:
    def test_basic(self):
        assert sanitize_module_name("OrderItem") == "order_item"

    def test_keyword(self):
        assert sanitize_module_name("Class") == "class_"

    def test_leading_digit(self):
        assert sanitize_module_name("2fa") == "_2fa"


class TestSanitizeFieldName:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("email", "email"),
            ("created-at", "created_at"),
            ("first name", "first_name"),
            ("class", "class_"),
            ("1st", "_1st"),
        ],
    )
    def test_sanitize_field_name(self, input_str, expected):
        assert sanitize_field_name(input_str) == expected

    def test_keywords_include_soft_keywords(self):
        assert "match" in PYTHON_KEYWORDS
        assert sanitize_field_name("match") == "match_"


class TestConstantName:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("id", "ID"),
            ("created_at", "CREATED_AT"),
            ("createdAt", "CREATED_AT"),
            ("e-mail", "E_MAIL"),
        ],
    )
    def test_constant_name(self, input_str, expected):
        assert constant_name(input_str) == expected
