#!/usr/bin/env python3
"""sqlsense - Context-aware SQL completion from the command line."""

from __future__ import annotations

import argparse
import sys


def _add_schema_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--sqlite", metavar="PATH", help="Read the schema from a SQLite database file")
    source.add_argument(
        "--schema-json",
        metavar="PATH",
        help="Read the schema from a JSON snapshot (as printed by 'sqlsense schema')",
    )
    parser.add_argument("--database", "-d", help="Bind completion to this database")
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="Path to settings JSON file (overrides ~/.sqlsense/settings.json)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlsense",
        description="Context-aware SQL completion",
        epilog="Example: sqlsense complete --sqlite shop.db --text 'SELECT * FROM '",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    complete_parser = subparsers.add_parser("complete", help="Print completions at a cursor position")
    _add_schema_arguments(complete_parser)
    buffer_group = complete_parser.add_mutually_exclusive_group()
    buffer_group.add_argument("--text", "-t", help="SQL buffer text (default: read from stdin)")
    buffer_group.add_argument("--file", "-f", help="Read the SQL buffer from a file")
    complete_parser.add_argument("--line", type=int, help="0-based cursor line (default: last line)")
    complete_parser.add_argument("--column", type=int, help="0-based cursor column (default: end of line)")
    complete_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    complete_parser.add_argument(
        "--limit",
        type=int,
        default=0,
        metavar="COUNT",
        help="Show at most COUNT suggestions (default: all)",
    )

    schema_parser = subparsers.add_parser("schema", help="Print the schema snapshot as JSON")
    _add_schema_arguments(schema_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "complete":
        from .domains.query.cli.commands import cmd_complete

        return cmd_complete(args)
    if args.command == "schema":
        from .domains.query.cli.commands import cmd_schema

        return cmd_schema(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
