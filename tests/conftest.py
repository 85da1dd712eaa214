"""Pytest fixtures for sqlsense tests."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="sqlsense-test-config-"))
os.environ.setdefault("SQLSENSE_CONFIG_DIR", str(_TEST_CONFIG_DIR))

from sqlsense.domains.query.app.completion_session import CompletionSession  # noqa: E402
from sqlsense.domains.schema.domain.snapshot import SchemaSnapshot  # noqa: E402
from sqlsense.domains.schema.providers import StaticSchemaProvider  # noqa: E402
from tests.helpers import make_table  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the developer's real settings file."""
    monkeypatch.setenv("SQLSENSE_SETTINGS_PATH", str(tmp_path / "settings.json"))


@pytest.fixture
def users_snapshot() -> SchemaSnapshot:
    """One database with a single users table."""
    return SchemaSnapshot(
        databases=("shop",),
        tables=(make_table("users", "id:int", "name:varchar"),),
    )


@pytest.fixture
def shop_snapshot() -> SchemaSnapshot:
    """Two databases; users and orders in shop, events in analytics."""
    return SchemaSnapshot(
        databases=("shop", "analytics"),
        tables=(
            make_table("users", "id:int", "name:varchar"),
            make_table("orders", "id:int", "uid:int", "total:decimal"),
            make_table("events", "id:bigint", "kind:text", database="analytics"),
        ),
    )


@pytest.fixture
def make_session() -> Iterator[Callable[..., CompletionSession]]:
    """Factory for sessions whose schema is already loaded."""
    sessions: list[CompletionSession] = []

    def factory(snapshot: SchemaSnapshot, database: str | None = None, **kwargs) -> CompletionSession:
        session = CompletionSession(StaticSchemaProvider({"conn": snapshot}), **kwargs)
        sessions.append(session)
        session.on_connection_changed("conn")
        future = session.on_database_changed(database) if database else session.force_refresh()
        assert future is not None
        assert future.result(timeout=5) is True
        return session

    yield factory
    for session in sessions:
        session.close()


@pytest.fixture
def sqlite_db_path(tmp_path: Path) -> Path:
    """A SQLite file with users, orders and a view."""
    db_path = tmp_path / "shop.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email VARCHAR(255));
            CREATE TABLE orders (id INTEGER PRIMARY KEY, uid INTEGER REFERENCES users(id), total);
            CREATE VIEW big_orders AS SELECT * FROM orders WHERE total > 100;
            """
        )
        conn.commit()
    finally:
        conn.close()
    return db_path
