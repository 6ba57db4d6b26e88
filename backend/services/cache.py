"""Single-slot in-memory cache for the repository snapshot. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
the upstream may be fetched twice per window (once per worker). Within one
worker, concurrent requests that hit a stale cache share a single refresh.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable

from config import CACHE_TTL_SECONDS
from services.repository import Snapshot

logger = logging.getLogger(__name__)


class SnapshotCache:
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Snapshot]],
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch = fetch
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Snapshot | None = None
        self._fetched_at: float | None = None
        self._pending: asyncio.Task | None = None

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    def age(self) -> float | None:
        """Seconds since the cached snapshot was fetched, or None if empty."""
        if self._fetched_at is None:
            return None
        return self._clock() - self._fetched_at

    def is_fresh(self) -> bool:
        age = self.age()
        return self._snapshot is not None and age is not None and age < self.ttl_seconds

    async def get_snapshot(self) -> Snapshot:
        """Return the cached snapshot, refreshing it first if stale.

        Errors from the fetch propagate; the previous entry is kept as is.
        """
        if self.is_fresh():
            return self._snapshot

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._refresh())
            self._pending.add_done_callback(self._clear_pending)
        else:
            logger.debug("Refresh already in flight, waiting on it")

        # shield: a cancelled caller must not cancel the refresh other callers await
        return await asyncio.shield(self._pending)

    async def _refresh(self) -> Snapshot:
        started = self._clock()
        snapshot = await self._fetch()
        self._snapshot = snapshot
        self._fetched_at = started
        return snapshot

    def _clear_pending(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None
        # Mark the exception as retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()
