"""Schema provider and inspector protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlsense.domains.schema.domain.snapshot import ColumnMeta, SchemaSnapshot


@runtime_checkable
class SchemaProvider(Protocol):
    """Source of schema snapshots for the schema cache.

    Implementations may block; the cache always calls them off the caller's
    thread. Failures should be raised as SchemaFetchError.
    """

    def fetch_schema(self, connection_id: str, database: str | None) -> SchemaSnapshot: ...


@runtime_checkable
class SchemaInspector(Protocol):
    """Per-object metadata queries against an open connection."""

    def get_databases(self, conn: Any) -> list[str]: ...

    def get_tables(self, conn: Any, database: str | None = None) -> list[str]: ...

    def get_columns(self, conn: Any, table: str, database: str | None = None) -> list[ColumnMeta]: ...
