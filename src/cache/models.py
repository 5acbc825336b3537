# src/cache/models.py - v1
"""Cache domain models: CacheRecord."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator


class CacheRecord(BaseModel):
    """Timestamp of the last successful compile for a cache key."""

    key: str
    last_compiled_at: datetime

    @field_validator("last_compiled_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:  # noqa: N805
        """Naive timestamps are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
