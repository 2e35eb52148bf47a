"""Configuration loading and schema source discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Iterator, Sequence

import yaml

from .errors import ConfigError, SchemaError

DEFAULT_CONFIG_NAME: Final[str] = "schemakit.yaml"
DEFAULT_OUTPUT_DIR: Final[Path] = Path("gen")
SOURCE_SUFFIXES: Final[tuple[str, ...]] = (".py",)


@dataclass(frozen=True, slots=True)
class GenerateConfig:
    """The ``generate`` section of a schemakit config file."""

    input: Path
    output: Path = DEFAULT_OUTPUT_DIR
    recursive: bool = False
    dialect: str | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any], base_dir: Path) -> GenerateConfig:
        """Build a config from the parsed ``generate`` mapping.

        Relative paths are resolved against ``base_dir``.
        """
        raw_input = data.get("input")
        if not raw_input:
            raise ConfigError("input not specified in config")

        raw_output = data.get("output") or DEFAULT_OUTPUT_DIR
        recursive = data.get("recursive", False)
        if not isinstance(recursive, bool):
            raise ConfigError("'recursive' must be true or false")

        dialect = data.get("dialect")
        return cls(
            input=base_dir / str(raw_input),
            output=base_dir / str(raw_output),
            recursive=recursive,
            dialect=str(dialect) if dialect else None,
        )


def load_config(config_path: Path) -> GenerateConfig:
    """Load the ``generate`` section from a YAML config file.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(config_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(config_path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", str(config_path))

    section = data.get("generate")
    if not isinstance(section, dict):
        raise ConfigError("config must provide a 'generate' mapping", str(config_path))

    try:
        return GenerateConfig.from_mapping(section, config_path.resolve().parent)
    except ConfigError as e:
        raise ConfigError(str(e), str(config_path)) from e


def find_config(start: Path | None = None) -> Path | None:
    """Return ``schemakit.yaml`` in ``start`` (default: cwd) if it exists."""
    candidate = (start or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def read_source(path: Path) -> str:
    """Read a schema source file.

    Raises:
        SchemaError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(f"Failed to read schema file: {e}", str(path)) from e


def collect_source_paths(inputs: Sequence[Path], recursive: bool = False) -> list[Path]:
    """Collect all schema source files from the given inputs.

    Args:
        inputs: Paths to schema files or directories.
        recursive: Descend into subdirectories of directory inputs.

    Returns:
        List of unique, resolved source file paths in sorted walk order.

    Raises:
        FileNotFoundError: If any input path doesn't exist.
    """

    def _iter_paths() -> Iterator[Path]:
        for raw in inputs:
            path = raw.resolve()
            if not path.exists():
                raise FileNotFoundError(f"Schema path '{raw}' does not exist")
            if path.is_dir():
                candidates = path.rglob("*") if recursive else path.iterdir()
                yield from sorted(
                    p
                    for p in candidates
                    if p.is_file() and p.suffix in SOURCE_SUFFIXES
                )
            else:
                yield path

    # Use dict to preserve order while deduplicating
    seen: dict[Path, None] = {}
    for path in _iter_paths():
        seen.setdefault(path, None)

    return list(seen.keys())
