"""Immutable schema metadata snapshots.

A SchemaSnapshot is built once by a provider and then only ever replaced as a
whole by the schema cache. All containers are tuples so a snapshot can be
shared between the fetch thread and completion requests without copying.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from .keywords import DEFAULT_KEYWORDS


@dataclass(frozen=True)
class ColumnMeta:
    """A column name and its display type label."""

    name: str
    data_type: str = ""


@dataclass(frozen=True)
class TableMeta:
    """A table and the database that owns it."""

    name: str
    database: str
    columns: tuple[ColumnMeta, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.database}.{self.name}" if self.database else self.name


class CacheKey(NamedTuple):
    """Identity a snapshot was fetched under."""

    connection_id: str | None
    database: str | None


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class SchemaSnapshot:
    """Schema metadata for one (connection, database) pair.

    Attributes:
        databases: Known database names, in provider order.
        tables: Tables across the fetched databases.
        keywords: The dialect keyword list.
    """

    databases: tuple[str, ...] = ()
    tables: tuple[TableMeta, ...] = ()
    keywords: tuple[str, ...] = field(default=DEFAULT_KEYWORDS)

    def __post_init__(self) -> None:
        # Accept any iterable from callers but always store de-duplicated tuples
        object.__setattr__(self, "databases", _unique(self.databases))
        object.__setattr__(self, "tables", tuple(self.tables))
        object.__setattr__(self, "keywords", _unique(self.keywords))

    @property
    def table_count(self) -> int:
        return len(self.tables)

    @property
    def is_empty(self) -> bool:
        return not self.databases and not self.tables

    def find_table(self, name: str, database: str | None = None) -> TableMeta | None:
        """Look up a table by name, case-insensitively."""
        name_lower = name.lower()
        for table in self.tables:
            if table.name.lower() != name_lower:
                continue
            if database is not None and table.database != database:
                continue
            return table
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape accepted by from_dict."""
        return {
            "databases": list(self.databases),
            "tables": [
                {
                    "name": table.name,
                    "database": table.database,
                    "columns": [{"name": c.name, "data_type": c.data_type} for c in table.columns],
                }
                for table in self.tables
            ],
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SchemaSnapshot:
        """Build a snapshot from its JSON shape.

        Raises:
            ValueError: If the data does not describe a snapshot.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Schema snapshot must be a JSON object")

        databases = data.get("databases", [])
        if not isinstance(databases, list) or not all(isinstance(d, str) for d in databases):
            raise ValueError("'databases' must be a list of strings")

        tables: list[TableMeta] = []
        for raw_table in data.get("tables", []):
            if not isinstance(raw_table, Mapping) or not isinstance(raw_table.get("name"), str):
                raise ValueError(f"Invalid table entry: {raw_table!r}")
            columns: list[ColumnMeta] = []
            for raw_column in raw_table.get("columns", []):
                if isinstance(raw_column, str):
                    columns.append(ColumnMeta(name=raw_column))
                elif isinstance(raw_column, Mapping) and isinstance(raw_column.get("name"), str):
                    columns.append(ColumnMeta(name=raw_column["name"], data_type=str(raw_column.get("data_type", ""))))
                else:
                    raise ValueError(f"Invalid column entry in {raw_table['name']}: {raw_column!r}")
            tables.append(
                TableMeta(
                    name=raw_table["name"],
                    database=str(raw_table.get("database", "")),
                    columns=tuple(columns),
                )
            )

        keywords = data.get("keywords")
        if keywords is None:
            keywords = DEFAULT_KEYWORDS
        elif not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            raise ValueError("'keywords' must be a list of strings")

        return cls(databases=tuple(databases), tables=tuple(tables), keywords=tuple(keywords))


EMPTY_SNAPSHOT = SchemaSnapshot()
