"""Cache implementations."""

from code360stats.cache.base import CacheEntry, CacheProvider, make_cache_key
from code360stats.cache.memory_cache import MemoryCache
from code360stats.cache.sqlite_cache import SQLiteCache

__all__ = ["CacheEntry", "CacheProvider", "make_cache_key", "MemoryCache", "SQLiteCache"]
