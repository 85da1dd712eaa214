"""Schema fetch executor.

Provider calls for one completion session run on a single background thread
so at most one schema fetch talks to the provider at a time.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


class FetchExecutor:
    """Serializes schema fetches for a completion session.

    Usage:
        future = executor.submit(provider.fetch_schema, "conn", "db")
        snapshot = future.result()

        # In async code
        snapshot = await executor.run_async(provider.fetch_schema, "conn", "db")
    """

    def __init__(self, thread_name_prefix: str = "sqlsense-schema-"):
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=thread_name_prefix,
        )
        self._lock = threading.Lock()
        self._shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        """Submit an operation to the executor.

        Raises:
            RuntimeError: If the executor has been shut down.
        """
        with self._lock:
            if self._shutdown:
                raise RuntimeError("Executor has been shut down")
            return self._executor.submit(fn, *args, **kwargs)

    async def run_async(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run an operation on the executor and await its result."""
        future = self.submit(fn, *args, **kwargs)
        return await asyncio.wrap_future(future)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the executor.

        Args:
            wait: If True, wait for pending fetches to complete.
                  If False, cancel fetches that have not started.
        """
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True

        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def __del__(self) -> None:
        if not getattr(self, "_shutdown", True):
            self.shutdown(wait=False)
