"""Completion session: the editor-facing entry point.

Ties the schema cache to the completion engine. Each request classifies the
cursor line, extracts table references from the whole buffer when columns
are in play, and assembles suggestions from whatever snapshot the cache
holds right now. Requests never wait for a schema fetch.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any

from textual import log

from sqlsense.domains.query.completion import (
    CompletionResult,
    ReplacementRange,
    build_suggestions,
    classify_prefix,
    extract_tables_from_query,
)
from sqlsense.domains.query.completion.core import Suggestion
from sqlsense.domains.schema.app.cache import SchemaCache
from sqlsense.domains.schema.app.executor import FetchExecutor
from sqlsense.domains.schema.providers.model import SchemaProvider
from sqlsense.domains.shell.store.settings import CompletionSettings


def split_cursor_line(buffer_text: str, cursor_line: int, cursor_column: int) -> tuple[str, int, int]:
    """Return ``(line_prefix, line, column)`` for a 0-based cursor.

    Out-of-range lines read as empty and the column is clamped to the line.
    """
    lines = buffer_text.split("\n")
    if cursor_line < 0 or cursor_line >= len(lines):
        return "", max(cursor_line, 0), 0
    line_text = lines[cursor_line].rstrip("\r")
    column = min(max(cursor_column, 0), len(line_text))
    return line_text[:column], cursor_line, column


class CompletionSession:
    """Completion engine bound to one editor.

    Usage:
        with CompletionSession(provider) as session:
            session.on_connection_changed("local")
            session.on_database_changed("shop")
            suggestions = session.complete("SELECT * FROM ", 0, 14)
    """

    def __init__(
        self,
        provider: SchemaProvider,
        *,
        settings: CompletionSettings | None = None,
        executor: FetchExecutor | None = None,
        cache: SchemaCache | None = None,
    ) -> None:
        self._settings = settings or CompletionSettings()
        self._cache = cache or SchemaCache(provider, executor)

    @property
    def cache(self) -> SchemaCache:
        return self._cache

    @property
    def settings(self) -> CompletionSettings:
        return self._settings

    @property
    def current_database(self) -> str | None:
        return self._cache.key.database

    def on_connection_changed(self, connection_id: str | None) -> bool:
        return self._cache.set_connection(connection_id)

    def on_database_changed(self, database: str | None) -> Future[bool] | None:
        return self._cache.set_database(database)

    def force_refresh(self) -> Future[bool] | None:
        return self._cache.force_refresh()

    def complete(self, buffer_text: str, cursor_line: int, cursor_column: int) -> list[Suggestion]:
        """Suggestions for the cursor at ``(cursor_line, cursor_column)``, 0-based."""
        return list(self.complete_with_range(buffer_text, cursor_line, cursor_column).suggestions)

    def complete_with_range(self, buffer_text: str, cursor_line: int, cursor_column: int) -> CompletionResult:
        """Suggestions plus the range an accepted suggestion replaces.

        Never raises; internal faults are logged and yield no suggestions.
        """
        line, column = max(cursor_line, 0), max(cursor_column, 0)
        try:
            line_prefix, line, column = split_cursor_line(buffer_text, cursor_line, cursor_column)
            context = classify_prefix(line_prefix, self._settings.comment_markers)
            replace_range = ReplacementRange(line, column - len(context.current_word), column)
            if context.is_comment:
                return CompletionResult((), replace_range)

            self._maybe_refresh()
            snapshot = self._cache.current()
            referenced = extract_tables_from_query(buffer_text) if context.column else []
            suggestions = build_suggestions(
                context,
                snapshot,
                referenced,
                current_database=self.current_database,
                qualify_threshold=self._settings.column_qualify_threshold,
            )
            return CompletionResult(tuple(suggestions), replace_range)
        except Exception as error:
            log.error(f"Error building completions: {error}")
            return CompletionResult((), ReplacementRange(line, column, column))

    def _maybe_refresh(self) -> None:
        if not self._settings.auto_refresh or not self._cache.needs_refresh():
            return
        try:
            self._cache.refresh()
        except RuntimeError as error:
            log.error(f"Could not start schema refresh: {error}")

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> CompletionSession:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
