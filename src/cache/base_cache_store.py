# src/cache/base_cache_store.py — v1
"""Abstract cache store interface.

Backends implement raw storage; validity (TTL and content hash) is applied
here so every backend treats expiry, content changes and corruption the
same way: as a miss.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from profilescope.cache.models import CacheEntry, CacheLookup, validate_entry

logger = logging.getLogger(__name__)


class CacheCorruptError(Exception):
    """Raised by a backend when a stored entry cannot be deserialized."""


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def load(self, profile_id: str) -> CacheEntry | None:
        """Raw entry for ``profile_id`` without validity checks."""

    @abstractmethod
    async def put(self, profile_id: str, entry: CacheEntry) -> None:
        """Store (overwrite) the entry for ``profile_id``."""

    @abstractmethod
    async def invalidate(self, profile_id: str) -> None:
        """Remove the entry for ``profile_id`` if present."""

    @abstractmethod
    async def list_entries(self) -> list[CacheEntry]:
        """All readable entries."""

    async def lookup(
        self,
        profile_id: str,
        content_hash: str | None = None,
        now: datetime | None = None,
    ) -> CacheLookup:
        """Validated lookup reporting why a miss happened."""
        try:
            entry = await self.load(profile_id)
        except CacheCorruptError as e:
            logger.warning("Corrupt cache entry for %s: %s", profile_id, e)
            return CacheLookup(status="corrupt")
        if entry is None:
            return CacheLookup(status="miss")
        status = validate_entry(entry, content_hash, now)
        if status != "hit":
            logger.info("Cache %s for %s", status.replace("_", " "), profile_id)
            return CacheLookup(status=status)
        return CacheLookup(status="hit", entry=entry)

    async def get(
        self,
        profile_id: str,
        content_hash: str | None = None,
        now: datetime | None = None,
    ) -> CacheEntry | None:
        """Valid entry for ``profile_id``, or None on any kind of miss."""
        return (await self.lookup(profile_id, content_hash, now)).entry

    async def peek(self, profile_id: str) -> CacheEntry | None:
        """Most recent entry regardless of validity (stale fallback)."""
        try:
            return await self.load(profile_id)
        except CacheCorruptError as e:
            logger.warning("Corrupt cache entry for %s: %s", profile_id, e)
            return None

    async def clear(self) -> int:
        """Remove every entry. Returns the number removed."""
        entries = await self.list_entries()
        for entry in entries:
            await self.invalidate(entry.profile_id)
        return len(entries)
