"""In-process TTL cache."""

import asyncio
import time
from typing import Callable

from code360stats.cache.base import CacheEntry, CacheProvider
from code360stats.models.response import PublicProfileResponse


class MemoryCache(CacheProvider):
    """Dict-backed cache with per-entry expiry, local to one process."""

    def __init__(self, default_ttl: int = 600, clock: Callable[[], float] = time.monotonic):
        """
        Initialize memory cache.

        Args:
            default_ttl: Default TTL in seconds (10 minutes)
            clock: Time source in seconds
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[CacheEntry, float]] = {}
        self._lock = asyncio.Lock()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> CacheEntry | None:
        async with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            entry, expires_at = item
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry

    async def set(self, key: str, response: PublicProfileResponse, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        async with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = (CacheEntry(response=response, captured_at=now), now + ttl)

    async def invalidate(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    async def keys(self) -> list[str]:
        async with self._lock:
            self._purge_expired(self._clock())
            return list(self._entries)

    async def close(self) -> None:
        await self.clear()
