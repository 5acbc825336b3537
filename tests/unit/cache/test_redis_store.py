# tests/unit/cache/test_redis_store.py - v1
"""Tests for cache/redis_store.py - mocked Redis client."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from sonar.cache.models import CacheRecord


def _fake_redis_module(storage: dict[str, str]) -> MagicMock:
    client = MagicMock()
    client.get.side_effect = lambda k: storage.get(k)

    def _set(k, v, ex=None):
        storage[k] = v

    def _delete(*keys):
        for k in keys:
            storage.pop(k, None)

    client.set.side_effect = _set
    client.delete.side_effect = _delete
    client.scan_iter.side_effect = lambda match: [k for k in list(storage) if k.startswith(match.rstrip("*"))]
    module = MagicMock()
    module.Redis.from_url.return_value = client
    return module


def _record() -> CacheRecord:
    return CacheRecord(key="k1", last_compiled_at=datetime(2026, 2, 16, tzinfo=timezone.utc))


class TestRedisCacheStore:
    def test_import_error_without_redis(self):
        """Clear ImportError when redis is not available."""
        with patch.dict(sys.modules, {"redis": None}):
            from sonar.cache.redis_store import RedisCacheStore
            with pytest.raises(ImportError, match="redis"):
                RedisCacheStore(redis_url="redis://localhost")

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        storage: dict[str, str] = {}
        with patch.dict(sys.modules, {"redis": _fake_redis_module(storage)}):
            from sonar.cache.redis_store import RedisCacheStore
            store = RedisCacheStore(redis_url="redis://localhost")
            await store.set("k1", _record())
            assert "sonar:cache:k1" in storage
            assert await store.get("k1") == _record()

    @pytest.mark.asyncio
    async def test_permanent_set_has_no_expiry(self):
        module = _fake_redis_module({})
        with patch.dict(sys.modules, {"redis": module}):
            from sonar.cache.redis_store import RedisCacheStore
            store = RedisCacheStore(redis_url="redis://localhost")
            await store.set("k1", _record())
            client = module.Redis.from_url.return_value
            assert client.set.call_args.kwargs["ex"] is None

    @pytest.mark.asyncio
    async def test_ttl_passed_through(self):
        module = _fake_redis_module({})
        with patch.dict(sys.modules, {"redis": module}):
            from sonar.cache.redis_store import RedisCacheStore
            store = RedisCacheStore(redis_url="redis://localhost")
            await store.set("k1", _record(), ttl=60)
            client = module.Redis.from_url.return_value
            assert client.set.call_args.kwargs["ex"] == 60

    @pytest.mark.asyncio
    async def test_get_missing_and_corrupt(self):
        storage = {"sonar:cache:bad": "not json"}
        with patch.dict(sys.modules, {"redis": _fake_redis_module(storage)}):
            from sonar.cache.redis_store import RedisCacheStore
            store = RedisCacheStore(redis_url="redis://localhost")
            assert await store.get("missing") is None
            assert await store.get("bad") is None

    @pytest.mark.asyncio
    async def test_clear_only_touches_own_keys(self):
        storage = {"other:key": "x"}
        with patch.dict(sys.modules, {"redis": _fake_redis_module(storage)}):
            from sonar.cache.redis_store import RedisCacheStore
            store = RedisCacheStore(redis_url="redis://localhost")
            await store.set("k1", _record())
            await store.set("k2", _record())
            await store.clear()
            assert storage == {"other:key": "x"}
