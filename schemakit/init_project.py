"""Scaffold a schemakit project: example schema, config file and README."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .shared import DEFAULT_CONFIG_NAME

EXAMPLE_SCHEMA = '''\
"""Example table definitions. Edit freely, then run ``schemakit generate``."""

from schemakit import dsl

# UserSchema defines the "user" table; the generated entity is "User"
UserSchema = dsl.Table(
    name="user",
    columns=[
        dsl.Int("id", dsl.with_auto_increment(True)),
        dsl.Varchar("name"),
        dsl.Varchar("email", dsl.with_length(320)),
        dsl.DateTime("created_at"),
        dsl.DateTime("updated_at"),
    ],
)

ProductSchema = dsl.Table(
    name="product",
    columns=[
        dsl.Int("id", dsl.with_auto_increment(True)),
        dsl.Varchar("name"),
        dsl.Text("description"),
        dsl.Decimal("price", dsl.with_precision(10, 2)),
        dsl.Boolean("active", dsl.with_default(True)),
        dsl.DateTime("created_at"),
    ],
)
'''

CONFIG_TEMPLATE = """\
# schemakit configuration

generate:
  input: "{input}"    # File or directory containing schema modules
  output: "./gen"     # Package directory for generated accessors
  recursive: true     # Process subdirectories recursively
  # dialect: postgresql  # Default dialect for 'schemakit ddl'
"""

README = """\
# Schema definitions

Tables are declared in plain Python modules with `schemakit.dsl` and turned
into typed accessor modules by schemakit.

1. Edit `user_schema.py` to define your tables.
2. Run `schemakit generate` to write the accessors into `./gen`.
3. Run `schemakit ddl --dialect postgresql` to print CREATE TABLE statements.

```python
from gen import user

print(user.TABLE_NAME)      # "user"
print(user.EMAIL)           # "user.email"
print(str(user.as_("u")))   # "user AS u"
```
"""


def _write(path: Path, content: str, force: bool) -> bool:
    if path.exists() and not force:
        print(f"Warning: {path} already exists, skipping (use --force to overwrite)", file=sys.stderr)
        return False
    path.write_text(content, encoding="utf-8")
    print(f"Created {path}")
    return True


def init_project(output_dir: Path, root: Path, force: bool = False) -> list[Path]:
    """Write the example schema, README and config file.

    Args:
        output_dir: Directory for the example schema module and README.
        root: Directory that receives ``schemakit.yaml``.
        force: Overwrite existing files.

    Returns:
        Paths of the files actually written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    root.mkdir(parents=True, exist_ok=True)

    relative_input = Path(os.path.relpath(output_dir.resolve(), root.resolve())).as_posix()
    if not relative_input.startswith("."):
        relative_input = f"./{relative_input}"
    files = {
        output_dir / "user_schema.py": EXAMPLE_SCHEMA,
        output_dir / "README.md": README,
        root / DEFAULT_CONFIG_NAME: CONFIG_TEMPLATE.format(input=relative_input),
    }
    return [path for path, content in files.items() if _write(path, content, force)]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Initialize a schemakit project with an example schema")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("schema"),
        help="Directory for schema files (default: ./schema)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help=f"Directory that receives {DEFAULT_CONFIG_NAME} (default: .)",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite existing files")

    args = parser.parse_args(argv)

    try:
        init_project(args.output, args.root, force=args.force)
    except OSError as e:
        raise SystemExit(f"Error: {e}") from e

    print(f"\nInitialized schemakit project in {args.output}")
    print("Next steps:")
    print(f"1. Edit {args.output / 'user_schema.py'} to define your tables")
    print("2. Run 'schemakit generate' to generate typed accessors")
    print("3. Import the generated package in your application")


if __name__ == "__main__":
    main()
