"""Abstract column types, dialect mapping tables and type resolution."""

from .dialects import Dialect, dialect_names, parse_dialect
from .mapping import (
    DEFAULT_TYPE_MAPPINGS,
    BitFieldRule,
    DialectTypeMap,
    TypeMappingTable,
)
from .registry import (
    SHARED_TYPES,
    UNKNOWN_TYPE_NAME,
    AbstractColumnType,
    dialect_types,
    identifier_of,
    is_numeric,
    lookup_identifier,
    name_of,
)
from .resolver import DECIMAL_DEFAULTS, LENGTH_DEFAULTS, TypeResolver, resolve

__all__ = [
    # Dialects
    "Dialect",
    "dialect_names",
    "parse_dialect",
    # Registry
    "SHARED_TYPES",
    "UNKNOWN_TYPE_NAME",
    "AbstractColumnType",
    "dialect_types",
    "identifier_of",
    "is_numeric",
    "lookup_identifier",
    "name_of",
    # Mapping table
    "DEFAULT_TYPE_MAPPINGS",
    "BitFieldRule",
    "DialectTypeMap",
    "TypeMappingTable",
    # Resolution
    "DECIMAL_DEFAULTS",
    "LENGTH_DEFAULTS",
    "TypeResolver",
    "resolve",
]
