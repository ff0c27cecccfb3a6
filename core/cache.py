# core/cache.py

"""
In-process TTL cache for user permission records.

Every request resolves the caller's role + permissoes override from the
usuarios table; caching the row for a short TTL keeps that off the hot path.
Writes through services.usuarios drop the entry, so admins see their own
changes immediately. Other workers pick them up after the TTL.
"""

from typing import Optional, Any
from datetime import datetime, timedelta
from threading import Lock
from core.logging_config import logger


class CacheEntry:
    def __init__(self, value: Any, ttl_seconds: int):
        self.value = value
        self.expires_at = datetime.now() + timedelta(seconds=ttl_seconds)

    def is_expired(self) -> bool:
        return datetime.now() >= self.expires_at


class SimpleCache:
    """Thread-safe dict of CacheEntry, expired lazily on read."""

    def __init__(self):
        self._cache: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._cache[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int = 60):
        if ttl_seconds < 0:
            return
        with self._lock:
            self._cache[key] = CacheEntry(value, ttl_seconds)

    def delete(self, key: str):
        with self._lock:
            self._cache.pop(key, None)

    def clear(self):
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._cache)


# Global cache instance
_cache = SimpleCache()


def cache_get(key: str) -> Optional[Any]:
    value = _cache.get(key)
    if value is not None:
        logger.debug(f"Cache hit: {key}")
    return value


def cache_set(key: str, value: Any, ttl_seconds: int = 60):
    _cache.set(key, value, ttl_seconds)


def cache_delete(key: str):
    _cache.delete(key)


def cache_clear():
    _cache.clear()
