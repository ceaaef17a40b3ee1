# src/cache/sqlite_store.py — v1
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from profilescope.cache.base_cache_store import BaseCacheStore, CacheCorruptError
from profilescope.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS profile_cache (
    profile_id TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    content_hash TEXT NOT NULL,
    stored_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_content_hash ON profile_cache(content_hash);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def load(self, profile_id: str) -> CacheEntry | None:
        row = self._conn.execute(
            "SELECT data FROM profile_cache WHERE profile_id = ?", (profile_id,)
        ).fetchone()
        if row is None:
            return None
        try:
            return CacheEntry.model_validate_json(row[0])
        except (ValidationError, ValueError) as e:
            raise CacheCorruptError(f"{profile_id}: {e}") from e

    async def put(self, profile_id: str, entry: CacheEntry) -> None:
        """Store a cache entry (upsert)."""
        self._conn.execute(
            """INSERT OR REPLACE INTO profile_cache
               (profile_id, data, content_hash, stored_at)
               VALUES (?, ?, ?, ?)""",
            (
                profile_id,
                entry.model_dump_json(),
                entry.content_hash,
                entry.timestamp.isoformat(),
            ),
        )
        self._conn.commit()

    async def invalidate(self, profile_id: str) -> None:
        self._conn.execute("DELETE FROM profile_cache WHERE profile_id = ?", (profile_id,))
        self._conn.commit()

    async def list_entries(self) -> list[CacheEntry]:
        entries: list[CacheEntry] = []
        for profile_id, data in self._conn.execute(
            "SELECT profile_id, data FROM profile_cache ORDER BY profile_id"
        ).fetchall():
            try:
                entries.append(CacheEntry.model_validate_json(data))
            except (ValidationError, ValueError) as e:
                logger.warning("Skipping unreadable cache row %s: %s", profile_id, e)
        return entries

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
