"""
Schema Extractor - Builds the canonical entity model from schema source text.

Schema files are read statically with the ``ast`` module:
- Only top-level assignments of a DSL ``Table(...)`` call become entities
- Import aliases of the DSL are resolved once per input
- Unrelated code is skipped silently; malformed table/column declarations
  are reported as diagnostics on the entity instead of failing the run
"""

from __future__ import annotations

import argparse
import ast
import json
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Iterator, Sequence

from ..dsl import COLUMN_FACTORIES, DSL_NAMES, OPTION_NAMES, TABLE_FACTORY
from ..shared import (
    ColumnDeclaration,
    EntityDescriptor,
    ParseFailure,
    SchemaError,
    collect_source_paths,
    derive_entity_name,
    read_source,
)
from ..typemap.registry import is_numeric, lookup_identifier, name_of

DSL_MODULE: Final[str] = "schemakit.dsl"
DSL_PACKAGE: Final[str] = "schemakit"

_NAME_FIELDS: Final[frozenset[str]] = frozenset({"name", "Name"})
_COLUMNS_FIELDS: Final[frozenset[str]] = frozenset({"columns", "Columns"})

# Returned by literal parsing when a default is not a supported literal
_MISSING: Final = object()


@dataclass(frozen=True, slots=True)
class DslAliases:
    """Local names under which a schema file refers to the DSL.

    ``modules`` holds dotted prefixes bound to the DSL module (``dsl``,
    ``schemakit.dsl``, ``g``); ``names`` maps directly imported local names
    to their canonical DSL names.
    """

    modules: frozenset[str] = frozenset()
    names: dict[str, str] = field(default_factory=dict)
    star: bool = False

    @classmethod
    def from_module(cls, tree: ast.Module) -> DslAliases:
        modules: set[str] = set()
        names: dict[str, str] = {}
        star = False

        for node in tree.body:
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name == DSL_MODULE:
                        modules.add(alias.asname or DSL_MODULE)
                    elif alias.name == DSL_PACKAGE:
                        modules.add(f"{alias.asname or DSL_PACKAGE}.dsl")
            elif isinstance(node, ast.ImportFrom) and node.level == 0:
                if node.module == DSL_PACKAGE:
                    for alias in node.names:
                        if alias.name == "dsl":
                            modules.add(alias.asname or "dsl")
                elif node.module == DSL_MODULE:
                    for alias in node.names:
                        if alias.name == "*":
                            star = True
                        else:
                            names[alias.asname or alias.name] = alias.name

        return cls(modules=frozenset(modules), names=names, star=star)

    def resolve(self, node: ast.expr) -> str | None:
        """Return the canonical DSL name ``node`` refers to, if any."""
        if isinstance(node, ast.Name):
            if node.id in self.names:
                return self.names[node.id]
            if self.star and node.id in DSL_NAMES:
                return node.id
            return None
        if isinstance(node, ast.Attribute) and _dotted_name(node.value) in self.modules:
            return node.attr
        return None


def _dotted_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        prefix = _dotted_name(node.value)
        return f"{prefix}.{node.attr}" if prefix else None
    return None


def _unqualified_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


class _Literals:
    """Exact literal parsing against the schema source text."""

    def __init__(self, source: str) -> None:
        self._source = source

    def _signed(self, node: ast.expr) -> tuple[int, ast.expr]:
        if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
            return (-1 if isinstance(node.op, ast.USub) else 1), node.operand
        return 1, node

    def integer(self, node: ast.expr) -> int | None:
        sign, node = self._signed(node)
        if not isinstance(node, ast.Constant) or type(node.value) is not int:
            return None
        text = ast.get_source_segment(self._source, node)
        try:
            return sign * int(text, 10) if text is not None else None
        except ValueError:
            return None

    def floating(self, node: ast.expr) -> float | None:
        sign, node = self._signed(node)
        if not isinstance(node, ast.Constant) or type(node.value) is not float:
            return None
        text = ast.get_source_segment(self._source, node)
        try:
            return sign * float(text) if text is not None else None
        except ValueError:
            return None

    @staticmethod
    def boolean(node: ast.expr) -> bool | None:
        if isinstance(node, ast.Constant) and isinstance(node.value, bool):
            return node.value
        return None

    @staticmethod
    def string(node: ast.expr) -> str | None:
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            return node.value
        return None

    def default(self, node: ast.expr) -> Any:
        """Parse a default literal; returns ``_MISSING`` when unsupported."""
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or node.value is None:
                return node.value
            if isinstance(node.value, str):
                return node.value
        value = self.integer(node)
        if value is not None:
            return value
        value = self.floating(node)
        if value is not None:
            return value
        return _MISSING


class _TableParser:
    """Parses the table literals of a single source input."""

    def __init__(self, source: str, aliases: DslAliases) -> None:
        self.aliases = aliases
        self.literals = _Literals(source)

    def parse_table(self, variable: str, call: ast.Call) -> EntityDescriptor | None:
        table_name: str | None = None
        columns_node: ast.expr | None = None
        # Positional arguments follow Table(name, columns)
        if call.args:
            table_name = self.literals.string(call.args[0])
        if len(call.args) > 1:
            columns_node = call.args[1]
        for keyword in call.keywords:
            if keyword.arg in _NAME_FIELDS:
                table_name = self.literals.string(keyword.value)
            elif keyword.arg in _COLUMNS_FIELDS:
                columns_node = keyword.value

        if not table_name:
            return None

        diagnostics: list[str] = []
        columns: list[ColumnDeclaration] = []
        if columns_node is not None:
            if isinstance(columns_node, (ast.List, ast.Tuple)):
                self._parse_columns(columns_node.elts, columns, diagnostics)
            else:
                diagnostics.append(
                    _at(columns_node, "columns must be a list literal of column constructors")
                )

        return EntityDescriptor(
            name=derive_entity_name(variable),
            table_name=table_name,
            columns=tuple(columns),
            diagnostics=tuple(diagnostics),
        )

    def _parse_columns(
        self,
        elements: Sequence[ast.expr],
        columns: list[ColumnDeclaration],
        diagnostics: list[str],
    ) -> None:
        seen: set[str] = set()
        for element in elements:
            if not isinstance(element, ast.Call):
                continue
            column = self._parse_column(element, diagnostics)
            if column is None:
                continue
            if column.name in seen:
                diagnostics.append(_at(element, f"duplicate column '{column.name}' ignored"))
                continue
            seen.add(column.name)
            columns.append(column)

    def _factory_name(self, func: ast.expr) -> str | None:
        resolved = self.aliases.resolve(func)
        if resolved is None and isinstance(func, ast.Name):
            resolved = func.id
        return resolved if resolved in COLUMN_FACTORIES else None

    def _option_name(self, func: ast.expr) -> str | None:
        # Options are matched by their unqualified name, whatever the import alias
        resolved = self.aliases.resolve(func) or _unqualified_name(func)
        return resolved if resolved in OPTION_NAMES else None

    def _parse_column(
        self,
        call: ast.Call,
        diagnostics: list[str],
    ) -> ColumnDeclaration | None:
        factory = self._factory_name(call.func)
        if factory is None:
            return None
        abstract_type = COLUMN_FACTORIES[factory]

        name = self.literals.string(call.args[0]) if call.args else None
        if not name:
            diagnostics.append(_at(call, f"{factory}() needs a column name string literal"))
            return None

        attrs: dict[str, Any] = {}
        for arg in call.args[1:]:
            if not isinstance(arg, ast.Call):
                continue
            option = self._option_name(arg.func)
            if option is not None:
                self._apply_option(option, arg, attrs, name, diagnostics)

        if attrs.get("auto_increment") and not is_numeric(abstract_type):
            diagnostics.append(
                _at(call, f"column '{name}': auto-increment ignored for {name_of(abstract_type)}")
            )
            attrs.pop("auto_increment")

        return ColumnDeclaration(name=name, abstract_type=abstract_type, **attrs)

    def _apply_option(
        self,
        option: str,
        call: ast.Call,
        attrs: dict[str, Any],
        column: str,
        diagnostics: list[str],
    ) -> None:
        args = call.args

        def report(message: str) -> None:
            diagnostics.append(_at(call, f"column '{column}': {option}() {message}"))

        if option == "with_auto_increment":
            value = self.literals.boolean(args[0]) if args else None
            if value is None:
                report("expects True or False")
            else:
                attrs["auto_increment"] = value

        elif option == "with_type":
            explicit = self._explicit_type(args[0]) if args else None
            if explicit is None:
                report("expects a column type identifier or string literal")
            else:
                attrs["explicit_type"] = explicit

        elif option == "with_default":
            value = self.literals.default(args[0]) if args else _MISSING
            if value is _MISSING:
                report("expects an int, float, str or bool literal")
            elif isinstance(value, float) and not math.isfinite(value):
                report(f"value {value!r} is not a finite float")
            else:
                attrs["default"] = value
                attrs["has_default"] = True

        elif option == "with_length":
            value = self.literals.integer(args[0]) if args else None
            if value is None:
                report("expects a base-10 integer literal")
            else:
                attrs["length"] = value

        elif option == "with_precision":
            if len(args) < 2:
                report("expects precision and scale")
                return
            precision = self.literals.integer(args[0])
            scale = self.literals.integer(args[1])
            if precision is None or scale is None:
                report("expects base-10 integer literals")
            if precision is not None:
                attrs["precision"] = precision
            if scale is not None:
                attrs["scale"] = scale

    def _explicit_type(self, node: ast.expr) -> str | None:
        literal = self.literals.string(node)
        if literal:
            return literal
        identifier = _unqualified_name(node)
        column_type = lookup_identifier(identifier) if identifier else None
        return name_of(column_type) if column_type is not None else None


def _at(node: ast.AST, message: str) -> str:
    lineno = getattr(node, "lineno", None)
    return f"line {lineno}: {message}" if lineno else message


def _iter_table_assignments(
    tree: ast.Module,
    aliases: DslAliases,
) -> Iterator[tuple[str, ast.Call]]:
    """Yield (variable name, Table call) for top-level table assignments."""

    def is_table(value: ast.expr) -> bool:
        return isinstance(value, ast.Call) and aliases.resolve(value.func) == TABLE_FACTORY

    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets, value = node.targets, node.value
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            targets, value = [node.target], node.value
        else:
            continue

        for target in targets:
            if isinstance(target, ast.Name) and is_table(value):
                yield target.id, value  # type: ignore[misc]
            elif (
                isinstance(target, ast.Tuple)
                and isinstance(value, ast.Tuple)
                and len(target.elts) == len(value.elts)
            ):
                for sub_target, sub_value in zip(target.elts, value.elts):
                    if isinstance(sub_target, ast.Name) and is_table(sub_value):
                        yield sub_target.id, sub_value  # type: ignore[misc]


def extract(source: str, filename: str = "<schema>") -> list[EntityDescriptor]:
    """Extract entity descriptors from schema source text.

    Args:
        source: Python source text of a schema file.
        filename: Name used in error messages.

    Returns:
        Entities in declaration order; empty when nothing is recognized.

    Raises:
        ParseFailure: If the text is not syntactically valid Python.
    """
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise ParseFailure(e.msg, filename, e.lineno) from e

    aliases = DslAliases.from_module(tree)
    parser = _TableParser(source, aliases)

    entities: list[EntityDescriptor] = []
    for variable, call in _iter_table_assignments(tree, aliases):
        entity = parser.parse_table(variable, call)
        if entity is not None:
            entities.append(entity)
    return entities


def extract_file(path: Path) -> list[EntityDescriptor]:
    """Read ``path`` and extract its entities.

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    return extract(read_source(path), filename=str(path))


def entity_to_dict(entity: EntityDescriptor) -> dict[str, Any]:
    """JSON-friendly view of an entity."""
    return {
        "name": entity.name,
        "table_name": entity.table_name,
        "columns": [
            {
                "name": col.name,
                "type": name_of(col.abstract_type),
                "explicit_type": col.explicit_type,
                "has_default": col.has_default,
                "default": col.default,
                "auto_increment": col.auto_increment,
                "length": col.length,
                "precision": col.precision,
                "scale": col.scale,
            }
            for col in entity.columns
        ],
        "diagnostics": list(entity.diagnostics),
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: print the extracted model as JSON."""
    parser = argparse.ArgumentParser(
        description="Print the entities found in schema files as JSON",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Schema file(s) or directories containing schema modules",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Process directories recursively",
    )

    args = parser.parse_args(argv)

    try:
        source_paths = collect_source_paths(args.paths, recursive=args.recursive)
    except FileNotFoundError as e:
        raise SystemExit(f"Error: {e}") from e

    documents: dict[str, list[dict[str, Any]]] = {}
    for path in source_paths:
        try:
            documents[str(path)] = [entity_to_dict(e) for e in extract_file(path)]
        except SchemaError as e:
            print(f"Warning: {e}", file=sys.stderr)

    print(json.dumps(documents, indent=2, default=str))


if __name__ == "__main__":
    main()
