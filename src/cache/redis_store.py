# src/cache/redis_store.py - v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments sharing one destination root.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from sonar.cache.base_cache_store import BaseCacheStore
from sonar.cache.models import CacheRecord

logger = logging.getLogger(__name__)

_KEY_PREFIX = "sonar:cache:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def get(self, key: str) -> CacheRecord | None:
        """Retrieve a record by key."""
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CacheRecord.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def set(
        self, key: str, record: CacheRecord, ttl: int | None = None
    ) -> None:
        """Store a record; without ttl the key never expires."""
        self._client.set(f"{_KEY_PREFIX}{key}", record.model_dump_json(), ex=ttl)

    async def delete(self, key: str) -> None:
        """Remove a record."""
        self._client.delete(f"{_KEY_PREFIX}{key}")

    async def clear(self) -> None:
        """Remove every sonar record (other keys in the database are kept)."""
        keys = list(self._client.scan_iter(match=f"{_KEY_PREFIX}*"))
        if keys:
            self._client.delete(*keys)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
