"""DDL Generator - Generates CREATE TABLE statements from schema definitions."""

from .main import (
    DEFAULT_AUTO_INCREMENT,
    DdlGenerator,
    DialectConfig,
    build_create_table,
    generate_ddl,
    main,
    render_default,
)

__all__ = [
    "DEFAULT_AUTO_INCREMENT",
    "DdlGenerator",
    "DialectConfig",
    "build_create_table",
    "generate_ddl",
    "main",
    "render_default",
]
