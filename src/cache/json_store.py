# src/cache/json_store.py - v1
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores each record as an individual JSON file under CACHE_ROOT.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path

from pydantic import ValidationError

from sonar.cache.base_cache_store import BaseCacheStore
from sonar.cache.models import CacheRecord

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str) -> CacheRecord | None:
        """Retrieve a record by key."""
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            expires_at = data.get("expires_at")
            if expires_at is not None and expires_at <= time.time():
                path.unlink(missing_ok=True)
                return None
            return CacheRecord(**data["record"])
        except (OSError, json.JSONDecodeError, KeyError, ValidationError) as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None

    async def set(
        self, key: str, record: CacheRecord, ttl: int | None = None
    ) -> None:
        """Store a record, replacing the file atomically."""
        path = self._entry_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "record": record.model_dump(mode="json"),
            "expires_at": time.time() + ttl if ttl is not None else None,
        }
        tmp = path.with_name(f"{path.name}.{os.getpid()}.{time.time_ns()}.tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp, path)

    async def delete(self, key: str) -> None:
        """Remove a record."""
        path = self._entry_path(key)
        if path.exists():
            path.unlink()

    async def clear(self) -> None:
        """Remove every record."""
        if not self._root.is_dir():
            return
        for path in self._root.glob("*.json"):
            path.unlink(missing_ok=True)

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"
