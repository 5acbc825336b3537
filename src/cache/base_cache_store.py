# src/cache/base_cache_store.py - v1
"""Abstract cache store interface for compile records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sonar.cache.models import CacheRecord


class BaseCacheStore(ABC):
    """Unified interface for key-value cache backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheRecord | None:
        """Retrieve the record stored under ``key``."""

    @abstractmethod
    async def set(
        self, key: str, record: CacheRecord, ttl: int | None = None
    ) -> None:
        """Store a record. ``ttl=None`` keeps it permanently."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a record."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every record."""
