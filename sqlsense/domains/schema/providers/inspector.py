"""Build schema snapshots by walking a SchemaInspector."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from textual import log

from sqlsense.domains.schema.domain.keywords import DEFAULT_KEYWORDS
from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot, TableMeta

from .exceptions import SchemaFetchError
from .model import SchemaInspector


class InspectorSchemaProvider:
    """SchemaProvider that opens a connection and inspects it object by object.

    When a database is requested only that database's tables are loaded,
    otherwise every database the inspector reports is walked. A table whose
    columns cannot be read is kept with no columns; a database that cannot
    be listed is skipped unless it was the one explicitly requested.
    """

    def __init__(
        self,
        connect: Callable[[str], Any],
        inspector: SchemaInspector,
        *,
        keywords: Sequence[str] = DEFAULT_KEYWORDS,
    ) -> None:
        self._connect = connect
        self._inspector = inspector
        self._keywords = tuple(keywords)

    def fetch_schema(self, connection_id: str, database: str | None) -> SchemaSnapshot:
        try:
            conn = self._connect(connection_id)
        except Exception as error:
            raise SchemaFetchError(connection_id, database, reason=str(error)) from error

        try:
            return self._build_snapshot(conn, connection_id, database)
        finally:
            close = getattr(conn, "close", None)
            if callable(close):
                try:
                    close()
                except Exception as error:
                    log.warning(f"Error closing schema connection for {connection_id}: {error}")

    def _build_snapshot(self, conn: Any, connection_id: str, database: str | None) -> SchemaSnapshot:
        inspector = self._inspector
        try:
            databases = list(inspector.get_databases(conn))
        except Exception as error:
            raise SchemaFetchError(connection_id, database, reason=str(error)) from error

        targets: list[str | None]
        if database:
            targets = [database]
        elif databases:
            targets = list(databases)
        else:
            targets = [None]

        tables: list[TableMeta] = []
        for target in targets:
            try:
                table_names = inspector.get_tables(conn, target)
            except Exception as error:
                if database:
                    raise SchemaFetchError(connection_id, database, reason=str(error)) from error
                log.warning(f"Skipping database {target} while loading schema: {error}")
                continue

            for table_name in table_names:
                try:
                    columns = tuple(inspector.get_columns(conn, table_name, target))
                except Exception as error:
                    log.warning(f"Error loading columns for {table_name}: {error}")
                    columns = ()
                tables.append(TableMeta(name=table_name, database=target or "", columns=columns))

        return SchemaSnapshot(databases=tuple(databases), tables=tuple(tables), keywords=self._keywords)
