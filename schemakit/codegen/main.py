"""
Code Generator - Generates typed Python accessor modules from schema files.

This module provides deterministic code generation with:
- Pure rendering: output depends only on the extracted entities
- Parallel extraction across input files
- Serialized, ordered writes into the output package
- Per-file failures reported without aborting the batch
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Iterable, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..extractor import extract_file
from ..shared import (
    DEFAULT_CONFIG_NAME,
    ColumnDeclaration,
    EntityDescriptor,
    SchemaError,
    collect_source_paths,
    constant_name,
    find_config,
    load_config,
    sanitize_field_name,
    sanitize_module_name,
    to_pascal_case,
)
from ..typemap.registry import AbstractColumnType, identifier_of

logger = logging.getLogger(__name__)

T = AbstractColumnType

# Python annotations for generated row classes
DEFAULT_PYTHON_TYPES: Final[dict[AbstractColumnType, str]] = {
    T.VARCHAR: "str",
    T.CHAR: "str",
    T.TEXT: "str",
    T.TINYINT: "int",
    T.SMALLINT: "int",
    T.INT: "int",
    T.BIGINT: "int",
    T.BOOLEAN: "bool",
    T.REAL: "float",
    T.DOUBLE: "float",
    T.DECIMAL: "Decimal",
    T.DATE: "date",
    T.TIME: "time",
    T.DATETIME: "datetime",
    T.TIMESTAMP: "datetime",
    T.BLOB: "bytes",
    T.JSON: "str",
    T.UUID: "UUID",
    T.BIT: "int",
    T.BINARY: "bytes",
    T.VARBINARY: "bytes",
    T.MONEY: "Decimal",
    T.XML: "str",
}

# Annotation -> module it must be imported from
_TYPE_IMPORTS: Final[dict[str, str]] = {
    "Decimal": "decimal",
    "date": "datetime",
    "time": "datetime",
    "datetime": "datetime",
    "UUID": "uuid",
    "Any": "typing",
}

FALLBACK_PYTHON_TYPE: Final[str] = "Any"

# Module-level names in generated modules that column constants must not shadow
_RESERVED_CONSTANTS: Final[frozenset[str]] = frozenset({
    "TABLE_NAME",
    "COLUMNS",
    "ColumnDeclaration",
    "AbstractColumnType",
    "dataclass",
    "Final",
    *_TYPE_IMPORTS,
})

# Attribute of the generated Aliased class that properties must not replace
_ALIAS_FIELD: Final[str] = "_alias"

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class Column:
    """A column prepared for rendering."""

    name: str
    field_name: str
    constant_name: str
    python_type: str
    declaration_args: str
    reference_literal: str
    suffix_literal: str


@dataclass(frozen=True, slots=True)
class ModuleSpec:
    """Specification for a generated Python module."""

    module_name: str
    class_name: str
    entity_name: str


@dataclass
class GenerationReport:
    """Outcome of a generation run over several schema files."""

    modules: list[ModuleSpec] = field(default_factory=list)
    failures: list[tuple[Path, SchemaError]] = field(default_factory=list)
    diagnostics: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def entities(self) -> list[str]:
        return [spec.entity_name for spec in self.modules]


@dataclass
class GeneratorContext:
    """Context for code generation with compiled templates."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
            enable_async=False,
        )
        self._entity_template = self.template_env.get_template("entity.py.j2")
        self._package_template = self.template_env.get_template("package.py.j2")

    @property
    def entity_template(self):
        return self._entity_template

    @property
    def package_template(self):
        return self._package_template


@lru_cache(maxsize=256, typed=True)
def _literal(value: Any) -> str:
    """Python literal for embedding a value in generated code."""
    if isinstance(value, float) and not math.isfinite(value):
        return f"float({str(value)!r})"
    return repr(value)


def _constant_name(column_name: str) -> str:
    name = constant_name(column_name)
    return f"{name}_" if name in _RESERVED_CONSTANTS else name


def _python_type(column: ColumnDeclaration) -> str:
    return DEFAULT_PYTHON_TYPES.get(column.abstract_type, FALLBACK_PYTHON_TYPE)


def _declaration_args(column: ColumnDeclaration) -> str:
    """Keyword arguments that rebuild ``column`` in generated code."""
    args = [
        f"name={_literal(column.name)}",
        f"abstract_type=AbstractColumnType.{identifier_of(column.abstract_type)}",
    ]
    if column.explicit_type is not None:
        args.append(f"explicit_type={_literal(column.explicit_type)}")
    if column.has_default:
        args.append(f"default={_literal(column.default)}")
        args.append("has_default=True")
    if column.auto_increment:
        args.append("auto_increment=True")
    for attr in ("length", "precision", "scale"):
        value = getattr(column, attr)
        if value is not None:
            args.append(f"{attr}={value}")
    return ", ".join(args)


def _build_columns(entity: EntityDescriptor) -> list[Column]:
    """Prepare ``entity``'s columns for rendering.

    Raises:
        SchemaError: If two columns map to the same Python identifier.
    """
    columns: list[Column] = []
    fields: dict[str, str] = {_ALIAS_FIELD: _ALIAS_FIELD}
    constants: dict[str, str] = {}
    for column in entity.columns:
        prepared = Column(
            name=column.name,
            field_name=sanitize_field_name(column.name),
            constant_name=_constant_name(column.name),
            python_type=_python_type(column),
            declaration_args=_declaration_args(column),
            reference_literal=_literal(f"{entity.table_name}.{column.name}"),
            suffix_literal=_literal(f".{column.name}"),
        )
        for seen, identifier in ((fields, prepared.field_name), (constants, prepared.constant_name)):
            if identifier in seen:
                raise SchemaError(
                    f"entity '{entity.name}': columns '{seen[identifier]}' and '{column.name}' "
                    f"both map to '{identifier}'"
                )
            seen[identifier] = column.name
        columns.append(prepared)
    return columns


def _type_imports(columns: Iterable[Column]) -> list[str]:
    """Sorted ``from x import y`` lines for the annotations in use."""
    by_module: dict[str, set[str]] = {"dataclasses": {"dataclass"}, "typing": {"Final"}}
    for column in columns:
        module = _TYPE_IMPORTS.get(column.python_type)
        if module is not None:
            by_module.setdefault(module, set()).add(column.python_type)
    return [
        f"from {module} import {', '.join(sorted(names))}"
        for module, names in sorted(by_module.items())
    ]


def module_spec(entity: EntityDescriptor) -> ModuleSpec:
    return ModuleSpec(
        module_name=sanitize_module_name(entity.name),
        class_name=sanitize_field_name(to_pascal_case(entity.name) or "Row"),
        entity_name=entity.name,
    )


def render_entity(entity: EntityDescriptor, ctx: GeneratorContext | None = None) -> str:
    """Render the accessor module for one entity.

    The result is a pure function of ``entity``: identical input always
    produces byte-identical output.
    """
    ctx = ctx or GeneratorContext()
    spec = module_spec(entity)
    columns = _build_columns(entity)

    return ctx.entity_template.render(
        entity_name=entity.name,
        table_name=entity.table_name,
        table_name_literal=_literal(entity.table_name),
        class_name=spec.class_name,
        columns=columns,
        type_imports=_type_imports(columns),
    )


def render_index(
    modules: Iterable[ModuleSpec],
    ctx: GeneratorContext | None = None,
) -> str:
    """Render the package ``__init__.py`` re-exporting all entity modules."""
    ctx = ctx or GeneratorContext()

    # Deduplicate and sort
    dedup: dict[str, ModuleSpec] = {}
    for spec in modules:
        dedup[spec.module_name] = spec

    ordered = sorted(dedup.values(), key=lambda item: item.module_name)
    return ctx.package_template.render(modules=ordered)


def write_entity_module(
    entity: EntityDescriptor,
    output_dir: Path,
    ctx: GeneratorContext,
) -> ModuleSpec:
    spec = module_spec(entity)
    output_path = output_dir / f"{spec.module_name}.py"
    output_path.write_text(render_entity(entity, ctx), encoding="utf-8")
    return spec


def _extract_all(
    source_paths: Sequence[Path],
    parallel: bool,
    max_workers: int | None,
) -> dict[Path, list[EntityDescriptor] | SchemaError]:
    results: dict[Path, list[EntityDescriptor] | SchemaError] = {}

    if parallel and len(source_paths) > 1:
        # Extraction is pure per input, so inputs run independently
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(extract_file, path): path for path in source_paths}
            for future in as_completed(futures):
                path = futures[future]
                try:
                    results[path] = future.result()
                except SchemaError as e:
                    results[path] = e
    else:
        for path in source_paths:
            try:
                results[path] = extract_file(path)
            except SchemaError as e:
                results[path] = e

    return results


def generate(
    source_paths: Sequence[Path],
    output_dir: Path,
    parallel: bool = True,
    max_workers: int | None = None,
) -> GenerationReport:
    """Generate accessor modules from schema files.

    Args:
        source_paths: Paths to schema source files.
        output_dir: Package directory for generated modules.
        parallel: Whether to extract files in parallel.
        max_workers: Maximum number of parallel workers.

    Returns:
        Report listing written modules, per-file failures and diagnostics.
    """
    ctx = GeneratorContext()
    output_dir.mkdir(parents=True, exist_ok=True)
    report = GenerationReport()

    results = _extract_all(source_paths, parallel, max_workers)

    # Writes happen in input order so the output never depends on scheduling
    written: dict[str, Path] = {}
    for path in source_paths:
        result = results[path]
        if isinstance(result, SchemaError):
            logger.debug("Skipping %s: %s", path, result)
            report.failures.append((path, result))
            continue

        for entity in result:
            report.diagnostics.extend((path, message) for message in entity.diagnostics)
            spec = module_spec(entity)
            if spec.module_name in written:
                report.failures.append((
                    path,
                    SchemaError(
                        f"entity '{entity.name}' clashes with module '{spec.module_name}' "
                        f"from {written[spec.module_name]}",
                        str(path),
                    ),
                ))
                continue

            logger.debug("Writing %s.py for table '%s'", spec.module_name, entity.table_name)
            try:
                report.modules.append(write_entity_module(entity, output_dir, ctx))
            except SchemaError as e:
                report.failures.append((path, e))
                continue
            written[spec.module_name] = path

    (output_dir / "__init__.py").write_text(render_index(report.modules, ctx), encoding="utf-8")
    return report


def resolve_inputs(
    paths: Sequence[Path],
    output: Path | None,
    recursive: bool,
    config_path: Path | None,
) -> tuple[list[Path], Path, bool]:
    """Combine command-line inputs with the config file.

    Command-line paths take precedence; the config file is only read when no
    paths are given.

    Raises:
        SchemaError: If no input is given anywhere or the config is invalid.
        FileNotFoundError: If an input path does not exist.
    """
    if paths:
        return list(paths), output or Path("gen"), recursive

    config_file = config_path or find_config()
    if config_file is None:
        raise SchemaError(
            f"input file or directory is required. Pass paths or configure {DEFAULT_CONFIG_NAME}"
        )
    config = load_config(config_file)
    return [config.input], output or config.output, recursive or config.recursive


def report_results(report: GenerationReport, output_dir: Path) -> None:
    """Print generated entities, warnings and a summary."""
    for path, error in report.failures:
        print(f"Warning: failed to process file {path}: {error}", file=sys.stderr)
    for path, message in report.diagnostics:
        print(f"Warning: {path}: {message}", file=sys.stderr)
    for name in report.entities:
        print(f"Generated entity: {name}")
    if report.modules:
        print(f"\nSuccessfully generated {len(report.modules)} entity(ies) in {output_dir}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate typed Python accessors from schema definitions",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="*",
        help="Schema file(s) or directories (default: input from schemakit.yaml)",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        action="append",
        default=[],
        dest="inputs",
        help="Schema file or directory (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output package directory (default: ./gen)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Process directories recursively",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file (default: ./{DEFAULT_CONFIG_NAME} when present)",
    )
    parser.add_argument(
        "--no-parallel",
        action="store_true",
        help="Disable parallel processing",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum number of parallel workers",
    )

    args = parser.parse_args(argv)

    try:
        inputs, output, recursive = resolve_inputs(
            [*args.paths, *args.inputs], args.output, args.recursive, args.config
        )
        source_paths = collect_source_paths(inputs, recursive=recursive)
        if not source_paths:
            raise SystemExit("No schema files found")

        output_dir = output.resolve()
        report = generate(
            source_paths,
            output_dir,
            parallel=not args.no_parallel,
            max_workers=args.workers,
        )
        report_results(report, output_dir)
    except (SchemaError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
