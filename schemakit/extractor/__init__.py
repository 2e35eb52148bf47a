"""Schema Extractor - Builds the canonical entity model from schema files."""

from .main import (
    DslAliases,
    entity_to_dict,
    extract,
    extract_file,
    main,
)

__all__ = [
    "DslAliases",
    "entity_to_dict",
    "extract",
    "extract_file",
    "main",
]
