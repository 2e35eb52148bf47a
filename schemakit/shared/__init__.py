"""Shared utilities for schemakit."""

from .config_loader import (
    DEFAULT_CONFIG_NAME,
    GenerateConfig,
    collect_source_paths,
    find_config,
    load_config,
    read_source,
)
from .errors import (
    ConfigError,
    DialectError,
    MappingTableError,
    ParseFailure,
    SchemaError,
    UnsupportedCombination,
    UnsupportedMultiBitField,
)
from .model import ColumnDeclaration, EntityDescriptor
from .naming import (
    ENTITY_NAME_SUFFIXES,
    PYTHON_KEYWORDS,
    constant_name,
    derive_entity_name,
    sanitize_field_name,
    sanitize_module_name,
    to_pascal_case,
    to_snake_case,
)

__all__ = [
    # Config and source discovery
    "DEFAULT_CONFIG_NAME",
    "GenerateConfig",
    "collect_source_paths",
    "find_config",
    "load_config",
    "read_source",
    # Model
    "ColumnDeclaration",
    "EntityDescriptor",
    # Naming utilities
    "ENTITY_NAME_SUFFIXES",
    "PYTHON_KEYWORDS",
    "constant_name",
    "derive_entity_name",
    "sanitize_field_name",
    "sanitize_module_name",
    "to_pascal_case",
    "to_snake_case",
    # Errors
    "ConfigError",
    "DialectError",
    "MappingTableError",
    "ParseFailure",
    "SchemaError",
    "UnsupportedCombination",
    "UnsupportedMultiBitField",
]
