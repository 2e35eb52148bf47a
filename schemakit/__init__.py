"""schemakit - typed accessors and SQL types from Python table definitions."""

from .extractor import extract, extract_file
from .shared import (
    ColumnDeclaration,
    ConfigError,
    DialectError,
    EntityDescriptor,
    MappingTableError,
    ParseFailure,
    SchemaError,
    UnsupportedCombination,
    UnsupportedMultiBitField,
)
from .typemap import (
    DEFAULT_TYPE_MAPPINGS,
    AbstractColumnType,
    Dialect,
    TypeMappingTable,
    TypeResolver,
    name_of,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Extraction
    "extract",
    "extract_file",
    # Model
    "ColumnDeclaration",
    "EntityDescriptor",
    # Types and resolution
    "DEFAULT_TYPE_MAPPINGS",
    "AbstractColumnType",
    "Dialect",
    "TypeMappingTable",
    "TypeResolver",
    "name_of",
    "resolve",
    # Errors
    "ConfigError",
    "DialectError",
    "MappingTableError",
    "ParseFailure",
    "SchemaError",
    "UnsupportedCombination",
    "UnsupportedMultiBitField",
]
