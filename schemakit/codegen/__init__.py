"""Code Generator - Generates typed Python accessor modules from schema files."""

from .main import (
    GenerationReport,
    GeneratorContext,
    ModuleSpec,
    generate,
    main,
    render_entity,
    render_index,
)

__all__ = [
    "GenerationReport",
    "GeneratorContext",
    "ModuleSpec",
    "generate",
    "main",
    "render_entity",
    "render_index",
]
