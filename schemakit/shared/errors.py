"""Custom exceptions for schemakit."""

from __future__ import annotations

from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class ParseFailure(SchemaError):
    """Raised when schema source text is not valid Python."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        lineno: int | None = None,
    ) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message, schema_path)


class ConfigError(SchemaError):
    """Raised when a configuration file is missing or malformed."""


class MappingTableError(SchemaError):
    """Raised when a dialect type-mapping table is incomplete or invalid."""


class DialectError(SchemaError):
    """Raised for dialect-specific issues."""

    def __init__(
        self,
        message: str,
        dialect: Any,
        schema_path: str | None = None,
    ) -> None:
        self.dialect = dialect
        super().__init__(f"Dialect '{dialect}': {message}", schema_path)


class UnsupportedCombination(DialectError):
    """Raised when a dialect has no base type for an abstract column type."""

    def __init__(
        self,
        dialect: Any,
        abstract_type: Any,
        column: str | None = None,
        schema_path: str | None = None,
    ) -> None:
        self.abstract_type = abstract_type
        self.column = column
        context = f" (column '{column}')" if column else ""
        super().__init__(
            f"no type mapping for '{abstract_type}'{context}",
            dialect,
            schema_path,
        )


class UnsupportedMultiBitField(DialectError):
    """Raised when a multi-bit field is requested on a single-bit dialect."""

    def __init__(
        self,
        dialect: Any,
        length: int,
        column: str | None = None,
        schema_path: str | None = None,
    ) -> None:
        self.length = length
        self.column = column
        context = f" (column '{column}')" if column else ""
        super().__init__(
            f"multi-bit fields not supported, requested BIT({length}){context}",
            dialect,
            schema_path,
        )
