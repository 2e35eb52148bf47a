"""Supported database dialects and their identifier quoting rules."""

from __future__ import annotations

from enum import Enum
from typing import Final

from ..shared.errors import SchemaError


class Dialect(Enum):
    """A database backend with its own type names and quoting rule."""

    MYSQL = "MySQL"
    POSTGRESQL = "PostgreSQL"
    SQLITE = "SQLite"
    SQLSERVER = "SQLServer"
    CQL = "CQL"
    CLICKHOUSE = "ClickHouse"
    PRESTO = "Presto"
    ORACLE = "Oracle"
    INFORMIX = "Informix"

    def __str__(self) -> str:
        return self.value

    def quote(self, identifier: str) -> str:
        """Quote an identifier the way this dialect expects."""
        opening, closing = _QUOTES[self]
        return f"{opening}{identifier}{closing}"


_QUOTES: Final[dict[Dialect, tuple[str, str]]] = {
    Dialect.MYSQL: ("`", "`"),
    Dialect.POSTGRESQL: ('"', '"'),
    Dialect.SQLITE: ('"', '"'),
    Dialect.SQLSERVER: ("[", "]"),
    Dialect.CQL: ("", ""),
    Dialect.CLICKHOUSE: ('"', '"'),
    Dialect.PRESTO: ('"', '"'),
    Dialect.ORACLE: ('"', '"'),
    Dialect.INFORMIX: ('"', '"'),
}

# Accepted spellings for command-line and config input
_ALIASES: Final[dict[str, Dialect]] = {
    "mysql": Dialect.MYSQL,
    "postgresql": Dialect.POSTGRESQL,
    "postgres": Dialect.POSTGRESQL,
    "sqlite": Dialect.SQLITE,
    "sqlserver": Dialect.SQLSERVER,
    "mssql": Dialect.SQLSERVER,
    "cql": Dialect.CQL,
    "cassandra": Dialect.CQL,
    "clickhouse": Dialect.CLICKHOUSE,
    "presto": Dialect.PRESTO,
    "oracle": Dialect.ORACLE,
    "informix": Dialect.INFORMIX,
}


def parse_dialect(value: str) -> Dialect:
    """Parse a dialect name, accepting common aliases.

    Raises:
        SchemaError: If the name is not a supported dialect.
    """
    dialect = _ALIASES.get(value.strip().lower())
    if dialect is None:
        raise SchemaError(
            f"Unsupported database dialect: {value} (expected one of: {', '.join(dialect_names())})"
        )
    return dialect


def dialect_names() -> list[str]:
    """Return the accepted dialect spellings, sorted."""
    return sorted(_ALIASES)
