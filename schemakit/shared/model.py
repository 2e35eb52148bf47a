"""Canonical, dialect-agnostic schema model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..typemap.registry import AbstractColumnType


@dataclass(frozen=True, slots=True)
class ColumnDeclaration:
    """A single column as declared in a schema file.

    ``has_default`` is tracked separately from ``default`` so that a zero,
    empty or ``None`` default stays distinguishable from no default.
    """

    name: str
    abstract_type: AbstractColumnType
    explicit_type: str | None = None
    default: Any = None
    has_default: bool = False
    auto_increment: bool = False
    length: int | None = None
    precision: int | None = None
    scale: int | None = None


@dataclass(frozen=True, slots=True)
class EntityDescriptor:
    """One table: derived entity name, literal table name and ordered columns."""

    name: str
    table_name: str
    columns: tuple[ColumnDeclaration, ...] = ()
    diagnostics: tuple[str, ...] = field(default=(), compare=False)

    def column(self, name: str) -> ColumnDeclaration | None:
        return next((col for col in self.columns if col.name == name), None)

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]
