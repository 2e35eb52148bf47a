"""Naming utilities for schema extraction and code generation."""

from __future__ import annotations

import keyword
import re
from functools import lru_cache
from typing import Final

PYTHON_KEYWORDS: frozenset[str] = frozenset(keyword.kwlist) | frozenset(keyword.softkwlist)

# Checked in order; only the first match is removed
ENTITY_NAME_SUFFIXES: Final[tuple[str, ...]] = ("Schema", "Definition", "Table")


@lru_cache(maxsize=1024)
def derive_entity_name(variable_name: str) -> str:
    """Derive an entity name from the variable a table is assigned to.

    Examples:
        >>> derive_entity_name("UserSchema")
        'User'
        >>> derive_entity_name("OrderTableSchema")
        'OrderTable'
        >>> derive_entity_name("Accounts")
        'Accounts'
    """
    for suffix in ENTITY_NAME_SUFFIXES:
        if variable_name.endswith(suffix) and len(variable_name) > len(suffix):
            return variable_name.removesuffix(suffix)
    return variable_name


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Examples:
        >>> to_pascal_case("hello_world")
        'HelloWorld'
        >>> to_pascal_case("helloWorld")
        'HelloWorld'
    """
    value = re.sub(r"([a-z])([A-Z])", r"\1_\2", value)
    parts = [part for part in value.replace("-", "_").split("_") if part]
    return "".join(part.capitalize() for part in parts)


@lru_cache(maxsize=1024)
def to_snake_case(value: str) -> str:
    """Convert a string to snake_case.

    Examples:
        >>> to_snake_case("HelloWorld")
        'hello_world'
        >>> to_snake_case("hello-world")
        'hello_world'
    """
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    value = value.replace("-", "_")
    value = re.sub(r"_+", "_", value)
    return value.lower().strip("_")


@lru_cache(maxsize=1024)
def sanitize_module_name(value: str) -> str:
    """Sanitize an entity name for use as a Python module name."""
    name = to_snake_case(value)
    name = re.sub(r"\W", "_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


@lru_cache(maxsize=1024)
def sanitize_field_name(value: str) -> str:
    """Sanitize a column name for use as a Python attribute name."""
    sanitized = re.sub(r"\W", "_", value)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    if sanitized in PYTHON_KEYWORDS:
        return f"{sanitized}_"
    return sanitized


@lru_cache(maxsize=1024)
def constant_name(value: str) -> str:
    """Upper-case form of a column name for module-level constants."""
    return sanitize_field_name(to_snake_case(value)).upper()
