# tests/unit/cache/test_models.py - v1
"""Tests for cache/models.py."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sonar.cache.models import CacheRecord


class TestCacheRecord:
    def test_create(self):
        ts = datetime(2026, 2, 7, 12, 0, tzinfo=timezone.utc)
        rec = CacheRecord(key="sonar-t-x", last_compiled_at=ts)
        assert rec.last_compiled_at == ts

    def test_naive_timestamp_is_utc(self):
        rec = CacheRecord(key="k", last_compiled_at=datetime(2026, 2, 7, 12, 0))
        assert rec.last_compiled_at.tzinfo == timezone.utc
        assert rec.last_compiled_at.hour == 12

    def test_other_timezone_converted(self):
        cet = timezone(timedelta(hours=1))
        rec = CacheRecord(key="k", last_compiled_at=datetime(2026, 2, 7, 13, 0, tzinfo=cet))
        assert rec.last_compiled_at.tzinfo == timezone.utc
        assert rec.last_compiled_at.hour == 12

    def test_json_roundtrip(self):
        rec = CacheRecord(key="k", last_compiled_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
        assert CacheRecord.model_validate_json(rec.model_dump_json()) == rec
