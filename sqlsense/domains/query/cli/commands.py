"""CLI completion command handlers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from sqlsense.domains.query.app.completion_session import CompletionSession
from sqlsense.domains.query.completion import CompletionResult
from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot
from sqlsense.domains.schema.providers import (
    SchemaFetchError,
    SchemaProvider,
    StaticSchemaProvider,
    build_sqlite_provider,
)
from sqlsense.domains.shell.store.settings import CompletionSettings, load_completion_settings

CLI_CONNECTION_ID = "cli"


def _build_provider(args: Any) -> SchemaProvider:
    if getattr(args, "sqlite", None):
        return build_sqlite_provider({CLI_CONNECTION_ID: args.sqlite})
    if getattr(args, "schema_json", None):
        return StaticSchemaProvider.from_json_file(args.schema_json, CLI_CONNECTION_ID)
    raise ValueError("Either --sqlite or --schema-json is required")


def _load_settings(args: Any) -> CompletionSettings:
    if getattr(args, "settings", None):
        return load_completion_settings(Path(args.settings).expanduser())
    return load_completion_settings()


def _read_buffer(args: Any) -> str:
    if args.text is not None:
        return args.text
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def _resolve_cursor(text: str, line: int | None, column: int | None) -> tuple[int, int]:
    """Default to the last line, and to the end of the chosen line."""
    lines = text.split("\n")
    if line is None:
        line = len(lines) - 1
    if column is None:
        column = len(lines[line]) if 0 <= line < len(lines) else 0
    return line, column


def _open_session(args: Any) -> CompletionSession:
    """Create a session and load its schema synchronously.

    Raises:
        SchemaFetchError: If the schema could not be loaded.
    """
    settings = _load_settings(args)
    # One-shot commands load the schema explicitly below
    session = CompletionSession(
        _build_provider(args),
        settings=CompletionSettings(
            column_qualify_threshold=settings.column_qualify_threshold,
            comment_markers=settings.comment_markers,
            auto_refresh=False,
        ),
    )
    session.on_connection_changed(CLI_CONNECTION_ID)
    future = session.on_database_changed(args.database) if args.database else session.force_refresh()
    if future is not None:
        try:
            future.result()
        except Exception:
            session.close()
            raise
    return session


def _output_table(result: CompletionResult, limit: int) -> None:
    """Output suggestions as an aligned text table."""
    suggestions = result.suggestions[:limit] if limit > 0 else result.suggestions
    max_col_width = 50
    columns = ["label", "category", "detail", "insert"]
    rows = [(s.label, s.category.name.lower(), s.detail, s.insert_text) for s in suggestions]

    col_widths = [len(col) for col in columns]
    for row in rows:
        for i, val in enumerate(row):
            col_widths[i] = min(max_col_width, max(col_widths[i], len(val)))

    header = " | ".join(col.ljust(col_widths[i]) for i, col in enumerate(columns))
    print(header)
    print("-" * len(header))
    for row in rows:
        row_parts = []
        for i, val in enumerate(row):
            if len(val) > col_widths[i]:
                val = val[: col_widths[i] - 2] + ".."
            row_parts.append(val.ljust(col_widths[i]))
        print(" | ".join(row_parts))

    replace = result.range
    print(f"\n({len(rows)} suggestion(s), replacing line {replace.line} columns {replace.start_column}-{replace.end_column})")


def _output_json(result: CompletionResult, limit: int) -> None:
    suggestions = result.suggestions[:limit] if limit > 0 else result.suggestions
    payload = {
        "range": result.range._asdict(),
        "suggestions": [
            {
                "label": s.label,
                "category": s.category.name.lower(),
                "detail": s.detail,
                "documentation": s.documentation,
                "insert_text": s.insert_text,
                "is_snippet": s.is_snippet,
                "sort_text": s.sort_text,
            }
            for s in suggestions
        ],
    }
    print(json.dumps(payload, indent=2))


def cmd_complete(args: Any) -> int:
    """Print completions for a SQL buffer at a cursor position."""
    try:
        text = _read_buffer(args)
    except OSError as error:
        print(f"Error: Could not read {args.file}: {error}")
        return 1

    try:
        session = _open_session(args)
    except (SchemaFetchError, ValueError) as error:
        print(f"Error: {error}")
        return 1

    with session:
        line, column = _resolve_cursor(text, args.line, args.column)
        result = session.complete_with_range(text, line, column)

    if args.format == "json":
        _output_json(result, args.limit)
    else:
        _output_table(result, args.limit)
    return 0


def cmd_schema(args: Any) -> int:
    """Print the schema snapshot the completion engine would use, as JSON."""
    try:
        session = _open_session(args)
    except (SchemaFetchError, ValueError) as error:
        print(f"Error: {error}")
        return 1

    with session:
        snapshot: SchemaSnapshot = session.cache.current()
    print(json.dumps(snapshot.to_dict(), indent=2))
    return 0
