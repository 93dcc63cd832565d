"""Abstract cache interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from code360stats.models.response import PublicProfileResponse


@dataclass
class CacheEntry:
    """Cached response and the time it was captured."""

    response: PublicProfileResponse
    captured_at: float


def make_cache_key(username: str, platform: str = "code360") -> str:
    """Cache key for a profile; username casing is preserved."""
    return f"{platform}_{username}"


class CacheProvider(ABC):
    """Abstract base class for cache implementations."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """
        Retrieve a live entry.

        Args:
            key: Cache key, see make_cache_key

        Returns:
            CacheEntry or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, key: str, response: PublicProfileResponse, ttl_seconds: int | None = None) -> None:
        """
        Store a response.

        Args:
            key: Cache key
            response: PublicProfileResponse to cache
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Remove a specific entry."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def keys(self) -> list[str]:
        """Keys of all live entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "CacheProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
