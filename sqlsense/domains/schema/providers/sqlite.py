"""SQLite schema inspection using built-in sqlite3."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from sqlsense.domains.schema.domain.snapshot import ColumnMeta

from .inspector import InspectorSchemaProvider


def quote_identifier(name: str) -> str:
    """Quote identifier using double quotes, doubling embedded quotes."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


class SQLiteInspector:
    """SchemaInspector for SQLite files.

    Each attached database (``main`` plus anything ATTACHed) is reported as a
    database; ``temp`` is skipped.
    """

    def get_databases(self, conn: Any) -> list[str]:
        cursor = conn.cursor()
        cursor.execute("PRAGMA database_list")
        # PRAGMA database_list returns: seq, name, file
        return [row[1] for row in cursor.fetchall() if row[1] != "temp"]

    def get_tables(self, conn: Any, database: str | None = None) -> list[str]:
        """Get tables and views, skipping SQLite's internal objects."""
        master = f"{quote_identifier(database)}.sqlite_master" if database else "sqlite_master"
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT name FROM {master} WHERE type IN ('table', 'view') "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row[0] for row in cursor.fetchall()]

    def get_columns(self, conn: Any, table: str, database: str | None = None) -> list[ColumnMeta]:
        cursor = conn.cursor()
        pragma = f"PRAGMA {quote_identifier(database)}.table_info" if database else "PRAGMA table_info"
        cursor.execute(f"{pragma}({quote_identifier(table)})")
        # PRAGMA table_info returns: cid, name, type, notnull, dflt_value, pk
        return [ColumnMeta(name=row[1], data_type=row[2] or "TEXT") for row in cursor.fetchall()]


def sqlite_connector(paths: Mapping[str, str | Path] | None = None) -> Callable[[str], Any]:
    """Return a connect callable mapping connection ids to SQLite files.

    Connection ids missing from ``paths`` are treated as file paths. Files
    are opened read-only so inspecting never creates an empty database.
    """
    known = dict(paths or {})

    def connect(connection_id: str) -> sqlite3.Connection:
        file_path = Path(known.get(connection_id, connection_id)).expanduser()
        if not file_path.exists():
            raise FileNotFoundError(f"SQLite database not found: {file_path}")
        # check_same_thread=False: the schema cache inspects from its fetch thread
        return sqlite3.connect(f"{file_path.resolve().as_uri()}?mode=ro", uri=True, check_same_thread=False)

    return connect


def build_sqlite_provider(paths: Mapping[str, str | Path] | None = None) -> InspectorSchemaProvider:
    return InspectorSchemaProvider(sqlite_connector(paths), SQLiteInspector())
