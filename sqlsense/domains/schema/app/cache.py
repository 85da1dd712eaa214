"""Schema cache for completion.

Holds the latest SchemaSnapshot for the bound (connection, database) pair.
Reads never block. Refreshes run on a FetchExecutor and only commit when the
key they were started for is still current: every key change bumps a
generation counter, the fetch captures the generation it was started under,
and the commit compares the two under a lock.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future

from textual import log

from sqlsense.domains.schema.domain.snapshot import EMPTY_SNAPSHOT, CacheKey, SchemaSnapshot
from sqlsense.domains.schema.providers.exceptions import SchemaFetchError
from sqlsense.domains.schema.providers.model import SchemaProvider

from .executor import FetchExecutor


class SchemaCache:
    """Single-snapshot cache with generation-checked asynchronous refresh."""

    def __init__(self, provider: SchemaProvider, executor: FetchExecutor | None = None) -> None:
        self._provider = provider
        self._executor = executor or FetchExecutor()
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._connection_id: str | None = None
        self._database: str | None = None
        self._generation = 0
        self._snapshot: SchemaSnapshot | None = None
        self._pending: Future[bool] | None = None
        self._pending_generation = -1
        self._failed_generation: int | None = None

    @property
    def key(self) -> CacheKey:
        return CacheKey(self._connection_id, self._database)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def is_refreshing(self) -> bool:
        """True while a fetch for the current key is in flight."""
        pending = self._pending
        return pending is not None and self._pending_generation == self._generation and not pending.done()

    def current(self) -> SchemaSnapshot:
        """Return the held snapshot, or EMPTY_SNAPSHOT when none is held."""
        snapshot = self._snapshot
        return snapshot if snapshot is not None else EMPTY_SNAPSHOT

    def set_connection(self, connection_id: str | None) -> bool:
        """Bind a connection, dropping the snapshot if it changed.

        Returns:
            True if the connection changed.
        """
        with self._lock:
            if connection_id == self._connection_id:
                return False
            self._connection_id = connection_id
            self._invalidate_locked()
        log.info(f"Schema cache bound to connection {connection_id}")
        return True

    def set_database(self, database: str | None) -> Future[bool] | None:
        """Bind a database, dropping the snapshot and refreshing if it changed.

        Returns:
            The refresh future, or None if nothing changed or no connection is bound.
        """
        with self._lock:
            if database == self._database:
                return None
            self._database = database
            self._invalidate_locked()
        log.info(f"Schema cache bound to database {database}")
        return self.refresh()

    def needs_refresh(self) -> bool:
        """Whether a completion request should kick off a fetch.

        False while a fetch for the current key is in flight, and after the
        last fetch for the current key failed (until force_refresh or a key
        change) so a broken connection is not retried on every keystroke.
        """
        with self._lock:
            if self._connection_id is None or self._snapshot is not None:
                return False
            if self._failed_generation == self._generation:
                return False
            pending = self._pending
            if pending is not None and self._pending_generation == self._generation and not pending.done():
                return False
            return True

    def refresh(self) -> Future[bool] | None:
        """Fetch a new snapshot for the current key in the background.

        The future resolves to True when the snapshot was committed and False
        when it was discarded because the key changed meanwhile. A failed
        fetch clears the snapshot and sets SchemaFetchError on the future.

        Returns:
            The refresh future, or None when no connection is bound.
        """
        with self._lock:
            key = CacheKey(self._connection_id, self._database)
            if key.connection_id is None:
                return None
            generation = self._generation
            future = self._executor.submit(self._fetch_and_commit, key, generation)
            self._pending = future
            self._pending_generation = generation
        return future

    def force_refresh(self) -> Future[bool] | None:
        """Refresh even if the last fetch for this key failed."""
        with self._lock:
            self._failed_generation = None
        return self.refresh()

    async def refresh_async(self) -> bool:
        """Awaitable refresh; returns whether the snapshot was committed."""
        future = self.refresh()
        if future is None:
            return False
        return await asyncio.wrap_future(future)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def _invalidate_locked(self) -> None:
        self._generation += 1
        self._snapshot = None
        self._failed_generation = None

    def _fetch_and_commit(self, key: CacheKey, generation: int) -> bool:
        connection_id = key.connection_id or ""
        try:
            snapshot = self._provider.fetch_schema(connection_id, key.database)
            if not isinstance(snapshot, SchemaSnapshot):
                raise SchemaFetchError(
                    connection_id,
                    key.database,
                    reason=f"provider returned {type(snapshot).__name__}",
                )
        except Exception as error:
            with self._lock:
                # A failure for an outdated key must not clear the newer key's state
                if generation == self._generation:
                    self._snapshot = None
                    self._failed_generation = generation
            log.error(f"Error loading schema for {connection_id}/{key.database}: {error}")
            if isinstance(error, SchemaFetchError):
                raise
            raise SchemaFetchError(connection_id, key.database, reason=str(error)) from error

        with self._lock:
            if generation != self._generation:
                log.debug(f"Discarding stale schema for {connection_id}/{key.database}")
                return False
            self._snapshot = snapshot
            self._failed_generation = None
        log.info(f"Schema loaded for {connection_id}/{key.database}: {snapshot.table_count} tables")
        return True
