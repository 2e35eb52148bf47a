"""
DDL Generator - Generates CREATE TABLE statements from schema files.

Column types come from the type-resolution engine, so the statements use
exactly the SQL types the mapping table assigns to each dialect.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Sequence

from ..extractor import extract_file
from ..shared import (
    DEFAULT_CONFIG_NAME,
    ColumnDeclaration,
    EntityDescriptor,
    SchemaError,
    UnsupportedCombination,
    collect_source_paths,
    find_config,
    load_config,
)
from ..typemap import Dialect, TypeResolver, dialect_names, is_numeric, parse_dialect

logger = logging.getLogger(__name__)

DEFAULT_AUTO_INCREMENT: Final[dict[Dialect, str]] = {
    Dialect.MYSQL: "AUTO_INCREMENT",
    Dialect.POSTGRESQL: "GENERATED BY DEFAULT AS IDENTITY",
    Dialect.ORACLE: "GENERATED BY DEFAULT AS IDENTITY",
    Dialect.SQLITE: "PRIMARY KEY AUTOINCREMENT",
    Dialect.SQLSERVER: "IDENTITY(1,1)",
}

# Dialects without a boolean literal
_NUMERIC_BOOLEANS: Final[frozenset[Dialect]] = frozenset({
    Dialect.SQLSERVER,
    Dialect.SQLITE,
    Dialect.ORACLE,
})


@dataclass(frozen=True, slots=True)
class DialectConfig:
    """Output framing for one dialect."""

    dialect: Dialect
    header: str = ""
    footer: str = ""
    statement_terminator: str = ";"

    @classmethod
    def for_dialect(cls, dialect: Dialect) -> DialectConfig:
        return cls(dialect=dialect, header=f"-- Generated by schemakit for {dialect}. DO NOT EDIT.")


def render_default(value: Any, dialect: Dialect) -> str:
    """Render a column default as a SQL literal for ``dialect``.

    Raises:
        SchemaError: If ``value`` is an infinite or NaN float.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        if dialect in _NUMERIC_BOOLEANS:
            return "1" if value else "0"
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and not math.isfinite(value):
        raise SchemaError(f"default {value!r} has no SQL literal")
    if isinstance(value, (int, float)):
        return repr(value)
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def auto_increment_keyword(dialect: Dialect) -> str | None:
    return DEFAULT_AUTO_INCREMENT.get(dialect)


class DdlGenerator:
    """Builds CREATE TABLE statements for a single dialect."""

    def __init__(
        self,
        dialect: Dialect,
        resolver: TypeResolver | None = None,
        skip_unsupported: bool = False,
    ) -> None:
        self.dialect = dialect
        self.resolver = resolver or TypeResolver()
        self.skip_unsupported = skip_unsupported
        self.config = DialectConfig.for_dialect(dialect)

    def _column_definition(self, column: ColumnDeclaration) -> str:
        parts = [self.dialect.quote(column.name), self.resolver.resolve(self.dialect, column)]

        if column.auto_increment and is_numeric(column.abstract_type):
            keyword = auto_increment_keyword(self.dialect)
            if keyword:
                parts.append(keyword)

        if column.has_default:
            parts.append(f"DEFAULT {render_default(column.default, self.dialect)}")

        return " ".join(parts)

    def create_table(self, entity: EntityDescriptor) -> str:
        """Return the CREATE TABLE statement for ``entity``.

        Raises:
            UnsupportedCombination: If a column type has no mapping and
                ``skip_unsupported`` is off.
            SchemaError: If the table ends up without columns.
        """
        definitions: list[str] = []
        for column in entity.columns:
            try:
                definitions.append(self._column_definition(column))
            except UnsupportedCombination as e:
                if not self.skip_unsupported:
                    raise
                logger.debug("Omitting column %s.%s: %s", entity.table_name, column.name, e)

        if not definitions:
            raise SchemaError(f"table '{entity.table_name}' has no columns for {self.dialect}")

        body = ",\n".join(f"    {definition}" for definition in definitions)
        return f"CREATE TABLE {self.dialect.quote(entity.table_name)} (\n{body}\n)"

    def _join_statements(self, statements: Sequence[str]) -> str:
        terminator = self.config.statement_terminator
        parts = [self.config.header] if self.config.header else []
        parts.extend(f"{statement.rstrip().rstrip(terminator)}{terminator}" for statement in statements)
        if self.config.footer:
            parts.append(self.config.footer)
        return "\n\n".join(parts) + "\n"


def build_create_table(
    entity: EntityDescriptor,
    dialect: Dialect,
    resolver: TypeResolver | None = None,
    skip_unsupported: bool = False,
) -> str:
    """Build a single CREATE TABLE statement for ``entity``."""
    return DdlGenerator(dialect, resolver, skip_unsupported).create_table(entity)


def generate_ddl(
    source_paths: Sequence[Path],
    dialect: Dialect,
    resolver: TypeResolver | None = None,
    skip_unsupported: bool = False,
    failures: list[tuple[Path, SchemaError]] | None = None,
) -> str:
    """Generate a DDL script covering every table in ``source_paths``.

    Args:
        source_paths: Schema source files, processed in order.
        dialect: Target dialect.
        resolver: Type resolver (default: built-in mapping table).
        skip_unsupported: Omit columns whose type has no mapping.
        failures: When given, per-file errors are appended here and the
            remaining files are still processed; otherwise they propagate.

    Returns:
        The joined statements, terminated and framed by a header comment.
    """
    generator = DdlGenerator(dialect, resolver, skip_unsupported)
    statements: list[str] = []

    for path in source_paths:
        try:
            entities = extract_file(path)
            file_statements = [generator.create_table(entity) for entity in entities]
        except SchemaError as e:
            if failures is None:
                raise
            failures.append((path, e))
            continue
        statements.extend(file_statements)

    return generator._join_statements(statements)


def _resolve_target(
    inputs: list[Path],
    dialect_name: str | None,
    recursive: bool,
    config_path: Path | None,
) -> tuple[list[Path], Dialect, bool]:
    config = None
    config_file = config_path or find_config()
    if config_file is not None and (not inputs or not dialect_name):
        config = load_config(config_file)

    if not inputs:
        if config is None:
            raise SchemaError(
                f"input file or directory is required. Pass paths or configure {DEFAULT_CONFIG_NAME}"
            )
        inputs = [config.input]
        recursive = recursive or config.recursive

    dialect_name = dialect_name or (config.dialect if config else None)
    if not dialect_name:
        raise SchemaError("a dialect is required. Pass --dialect or set generate.dialect")

    return inputs, parse_dialect(dialect_name), recursive


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Generate CREATE TABLE statements from schema definitions")
    parser.add_argument("paths", type=Path, nargs="*", help="Schema file(s) or directories")
    parser.add_argument("-i", "--input", type=Path, action="append", default=[], dest="inputs")
    parser.add_argument("-d", "--dialect", help=f"Target dialect: {', '.join(dialect_names())}")
    parser.add_argument("-o", "--output", type=Path, help="Write the script to this file instead of stdout")
    parser.add_argument("-r", "--recursive", action="store_true", help="Process directories recursively")
    parser.add_argument("--config", type=Path, default=None, help=f"Config file (default: ./{DEFAULT_CONFIG_NAME})")
    parser.add_argument(
        "--skip-unsupported",
        action="store_true",
        help="Omit columns whose type has no mapping for the dialect",
    )

    args = parser.parse_args(argv)

    try:
        inputs, dialect, recursive = _resolve_target(
            [*args.paths, *args.inputs], args.dialect, args.recursive, args.config
        )
        source_paths = collect_source_paths(inputs, recursive=recursive)
        if not source_paths:
            raise SystemExit("No schema files found")

        failures: list[tuple[Path, SchemaError]] = []
        script = generate_ddl(
            source_paths,
            dialect,
            skip_unsupported=args.skip_unsupported,
            failures=failures,
        )
    except (SchemaError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e

    for path, error in failures:
        print(f"Warning: failed to process file {path}: {error}", file=sys.stderr)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(script, encoding="utf-8")
        print(f"Generated {dialect} DDL at {args.output}")
    else:
        sys.stdout.write(script)


if __name__ == "__main__":
    main()
