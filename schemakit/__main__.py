#!/usr/bin/env python3
"""
schemakit command-line interface.

Usage:
    python -m schemakit [-v] <command> [options]

Commands:
    generate    Generate typed accessor modules from schema files
    ddl         Print CREATE TABLE statements for a dialect
    extract     Dump the extracted entity model as JSON
    init        Create an example schema and schemakit.yaml

Examples:
    python -m schemakit generate ./schema -o ./gen --recursive
    python -m schemakit ddl ./schema --dialect postgresql
    python -m schemakit extract ./schema/user_schema.py
    python -m schemakit init --output ./schema
"""

from __future__ import annotations

import logging
import sys
from typing import Callable


def _run(entry: Callable[[list[str]], None], args: list[str]) -> int:
    try:
        entry(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
            return 1
        return e.code or 0


def cmd_generate(args: list[str]) -> int:
    """Generate accessor modules."""
    from schemakit.codegen import main as codegen_main
    return _run(codegen_main, args)


def cmd_ddl(args: list[str]) -> int:
    """Generate DDL statements."""
    from schemakit.ddl_generator import main as ddl_main
    return _run(ddl_main, args)


def cmd_extract(args: list[str]) -> int:
    """Dump extracted entities."""
    from schemakit.extractor import main as extract_main
    return _run(extract_main, args)


def cmd_init(args: list[str]) -> int:
    """Scaffold a project."""
    from schemakit.init_project import main as init_main
    return _run(init_main, args)


COMMANDS = {
    "generate": (cmd_generate, "Generate typed accessor modules from schema files"),
    "ddl": (cmd_ddl, "Print CREATE TABLE statements for a dialect"),
    "extract": (cmd_extract, "Dump the extracted entity model as JSON"),
    "init": (cmd_init, "Create an example schema and schemakit.yaml"),
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    verbose = False
    while argv and argv[0] in ("-v", "--verbose"):
        verbose = True
        argv.pop(0)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command, args = argv[0], argv[1:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
