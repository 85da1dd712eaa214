"""Schema provider serving pre-built snapshots."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot

from .exceptions import SchemaFetchError


class StaticSchemaProvider:
    """SchemaProvider backed by snapshots held in memory.

    Snapshots are keyed by connection id, or by ``(connection_id, database)``
    for a database-specific snapshot which takes precedence.
    """

    def __init__(self, snapshots: Mapping[Any, SchemaSnapshot] | None = None) -> None:
        self._snapshots: dict[Any, SchemaSnapshot] = dict(snapshots or {})

    def add(self, connection_id: str, snapshot: SchemaSnapshot, database: str | None = None) -> None:
        key: Any = (connection_id, database) if database else connection_id
        self._snapshots[key] = snapshot

    def fetch_schema(self, connection_id: str, database: str | None) -> SchemaSnapshot:
        if database and (connection_id, database) in self._snapshots:
            return self._snapshots[(connection_id, database)]
        snapshot = self._snapshots.get(connection_id)
        if snapshot is None:
            raise SchemaFetchError(connection_id, database, reason="unknown connection")
        if database and snapshot.databases and database not in snapshot.databases:
            raise SchemaFetchError(connection_id, database, reason="unknown database")
        return snapshot

    @classmethod
    def from_json_file(cls, path: str | Path, connection_id: str = "default") -> StaticSchemaProvider:
        """Load a single snapshot from a JSON file and serve it for ``connection_id``.

        Raises:
            SchemaFetchError: If the file is missing or not a valid snapshot.
        """
        file_path = Path(path).expanduser()
        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
            snapshot = SchemaSnapshot.from_dict(data)
        except (OSError, ValueError) as error:
            raise SchemaFetchError(connection_id, reason=f"{file_path}: {error}") from error
        return cls({connection_id: snapshot})
