"""Shared builders for sqlsense tests."""

from __future__ import annotations

import threading

from sqlsense.domains.schema.domain.snapshot import ColumnMeta, SchemaSnapshot, TableMeta
from sqlsense.domains.schema.providers import SchemaFetchError


def make_table(name: str, *columns: str, database: str = "shop") -> TableMeta:
    """Build a TableMeta whose columns are given as ``name`` or ``name:type``."""
    metas = []
    for column in columns:
        col_name, _, data_type = column.partition(":")
        metas.append(ColumnMeta(name=col_name, data_type=data_type or "int"))
    return TableMeta(name=name, database=database, columns=tuple(metas))


def labels(suggestions, category=None) -> list[str]:
    """Labels of the suggestions, optionally restricted to one category."""
    return [s.label for s in suggestions if category is None or s.category == category]


class GatedProvider:
    """Schema provider whose fetches can be held until a gate is opened.

    Snapshots are keyed by database name. A database mapped to an exception
    raises it instead.
    """

    def __init__(self, snapshots: dict[str | None, SchemaSnapshot | Exception]):
        self.snapshots = snapshots
        self.gates: dict[str | None, threading.Event] = {}
        self.calls: list[tuple[str, str | None]] = []

    def gate(self, database: str | None) -> threading.Event:
        event = threading.Event()
        self.gates[database] = event
        return event

    def fetch_schema(self, connection_id: str, database: str | None) -> SchemaSnapshot:
        self.calls.append((connection_id, database))
        gate = self.gates.get(database)
        if gate is not None:
            gate.wait(timeout=5)
        result = self.snapshots.get(database)
        if result is None:
            raise SchemaFetchError(connection_id, database, reason="unknown database")
        if isinstance(result, Exception):
            raise result
        return result
