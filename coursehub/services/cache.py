"""
Pull-based cache with a staleness window.

Callers ask for a key together with a loader coroutine; the cached value is
returned while it is younger than ``stale_after`` seconds, otherwise the
loader runs and its result replaces the entry. Entries nobody has read for
``evict_after`` seconds are dropped.
"""

import asyncio
import logging
import time
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    fetched_at: float
    last_read: float


class StaleCache:
    """Per-key cache with single-flight refresh."""

    def __init__(
        self,
        stale_after: float = 5 * 60,
        evict_after: float = 10 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stale_after = stale_after
        self.evict_after = evict_after
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _evict_idle(self, now: float) -> None:
        idle = [k for k, e in self._entries.items() if now - e.last_read >= self.evict_after]
        for key in idle:
            del self._entries[key]
            self._drop_lock(key)
            logger.debug("Evicted idle cache entry: %s", key)

    def _drop_lock(self, key: str) -> None:
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def is_fresh(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() - entry.fetched_at < self.stale_after

    async def get_or_refresh(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for ``key`` or load a fresh one."""
        self._evict_idle(self._clock())
        try:
            async with self._locks[key]:
                now = self._clock()
                entry = self._entries.get(key)
                if entry is not None and now - entry.fetched_at < self.stale_after:
                    entry.last_read = now
                    return entry.value

                logger.debug("Cache %s for %s", "stale" if entry else "miss", key)
                value = await loader()
                now = self._clock()
                self._entries[key] = CacheEntry(value=value, fetched_at=now, last_read=now)
                return value
        finally:
            # a first load that failed leaves no entry to evict the lock with
            if key not in self._entries:
                self._drop_lock(key)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or every key when ``key`` is None."""
        if key is None:
            self._entries.clear()
            keys = list(self._locks)
        else:
            self._entries.pop(key, None)
            keys = [key]
        for k in keys:
            self._drop_lock(k)
