"""SQLite-based cache implementation."""

import time
from pathlib import Path

import aiosqlite
from pydantic import ValidationError

from code360stats.cache.base import CacheEntry, CacheProvider
from code360stats.exceptions import CacheError
from code360stats.models.response import PublicProfileResponse


class SQLiteCache(CacheProvider):
    """SQLite-based local cache using aiosqlite, shared across restarts."""

    def __init__(self, db_path: str = ".code360_cache.db", default_ttl: int = 600):
        """
        Initialize SQLite cache.

        Args:
            db_path: Path to SQLite database file
            default_ttl: Default TTL in seconds (10 minutes)
        """
        self.db_path = Path(db_path)
        self.default_ttl = default_ttl
        self._db: aiosqlite.Connection | None = None

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is None:
            self._db = await aiosqlite.connect(self.db_path)
            await self._db.execute("""
                CREATE TABLE IF NOT EXISTS profile_cache (
                    cache_key TEXT PRIMARY KEY,
                    response_json TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    expires_at REAL NOT NULL
                )
            """)
            await self._db.execute(
                "CREATE INDEX IF NOT EXISTS idx_expires ON profile_cache(expires_at)"
            )
            await self._db.commit()
        return self._db

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cached response, None if miss or expired."""
        try:
            db = await self._ensure_db()
            async with db.execute(
                "SELECT response_json, created_at FROM profile_cache WHERE cache_key = ? AND expires_at > ?",
                (key, time.time()),
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise CacheError(f"Cache read failed for {key}: {e}") from e

        if row is None:
            return None

        response_json, created_at = row
        try:
            response = PublicProfileResponse.model_validate_json(response_json)
        except ValidationError as e:
            await self.invalidate(key)
            raise CacheError(f"Corrupt cache entry for {key}") from e

        return CacheEntry(response=response, captured_at=created_at)

    async def set(self, key: str, response: PublicProfileResponse, ttl_seconds: int | None = None) -> None:
        """Store response in cache."""
        db = await self._ensure_db()
        now = time.time()
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        await db.execute(
            """
            INSERT OR REPLACE INTO profile_cache (cache_key, response_json, created_at, expires_at)
            VALUES (?, ?, ?, ?)
            """,
            (key, response.model_dump_json(by_alias=True), now, now + ttl),
        )
        await db.commit()

    async def invalidate(self, key: str) -> None:
        """Remove specific entry."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profile_cache WHERE cache_key = ?", (key,))
        await db.commit()

    async def clear(self) -> None:
        """Clear all cached entries."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profile_cache")
        await db.commit()

    async def keys(self) -> list[str]:
        """Keys of unexpired entries, oldest first."""
        db = await self._ensure_db()
        async with db.execute(
            "SELECT cache_key FROM profile_cache WHERE expires_at > ? ORDER BY created_at",
            (time.time(),),
        ) as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        db = await self._ensure_db()
        cursor = await db.execute(
            "DELETE FROM profile_cache WHERE expires_at <= ?", (time.time(),)
        )
        await db.commit()
        return cursor.rowcount

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None
