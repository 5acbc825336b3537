# src/cache/sqlite_store.py - v1
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path

from pydantic import ValidationError

from sonar.cache.base_cache_store import BaseCacheStore
from sonar.cache.models import CacheRecord

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_records (
    key TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    expires_at REAL
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store shared by several worker processes."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> CacheRecord | None:
        """Retrieve a record by key."""
        cursor = self._conn.execute(
            "SELECT data, expires_at FROM cache_records WHERE key = ?", (key,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        data, expires_at = row
        if expires_at is not None and expires_at <= time.time():
            await self.delete(key)
            return None
        try:
            return CacheRecord.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def set(
        self, key: str, record: CacheRecord, ttl: int | None = None
    ) -> None:
        """Store a record (upsert)."""
        expires_at = time.time() + ttl if ttl is not None else None
        self._conn.execute(
            """INSERT OR REPLACE INTO cache_records (key, data, expires_at)
               VALUES (?, ?, ?)""",
            (key, record.model_dump_json(), expires_at),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        """Remove a record."""
        self._conn.execute("DELETE FROM cache_records WHERE key = ?", (key,))
        self._conn.commit()

    async def clear(self) -> None:
        """Remove every record."""
        self._conn.execute("DELETE FROM cache_records")
        self._conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
