# src/cache/memory_store.py - v1
"""In-process cache store (CACHE_BACKEND=memory).

Records live for the lifetime of the process. Useful for tests and for
single-worker deployments.
"""

from __future__ import annotations

import time

from sonar.cache.base_cache_store import BaseCacheStore
from sonar.cache.models import CacheRecord


class MemoryCacheStore(BaseCacheStore):
    """Dictionary-backed cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[CacheRecord, float | None]] = {}

    async def get(self, key: str) -> CacheRecord | None:
        """Retrieve a record, dropping it if expired."""
        item = self._entries.get(key)
        if item is None:
            return None
        record, expires_at = item
        if expires_at is not None and expires_at <= time.time():
            del self._entries[key]
            return None
        return record

    async def set(
        self, key: str, record: CacheRecord, ttl: int | None = None
    ) -> None:
        """Store a record."""
        expires_at = time.time() + ttl if ttl is not None else None
        self._entries[key] = (record, expires_at)

    async def delete(self, key: str) -> None:
        """Remove a record."""
        self._entries.pop(key, None)

    async def clear(self) -> None:
        """Remove every record."""
        self._entries.clear()
