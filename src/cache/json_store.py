# src/cache/json_store.py — v1
"""JSON file-based cache store (default CACHE_BACKEND=json).

One ``cache_<profile_id>.json`` file per profile under CACHE_ROOT.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from profilescope.cache.base_cache_store import BaseCacheStore, CacheCorruptError
from profilescope.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    async def load(self, profile_id: str) -> CacheEntry | None:
        path = self._entry_path(profile_id)
        if not path.exists():
            return None
        try:
            return CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, ValueError, OSError) as e:
            raise CacheCorruptError(f"{path.name}: {e}") from e

    async def put(self, profile_id: str, entry: CacheEntry) -> None:
        path = self._entry_path(profile_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)

    async def invalidate(self, profile_id: str) -> None:
        path = self._entry_path(profile_id)
        if path.exists():
            path.unlink()

    async def list_entries(self) -> list[CacheEntry]:
        entries: list[CacheEntry] = []
        if not self._root.is_dir():
            return entries
        for path in sorted(self._root.glob("cache_*.json")):
            try:
                entries.append(
                    CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
                )
            except (ValidationError, ValueError, OSError) as e:
                logger.warning("Skipping unreadable cache file %s: %s", path.name, e)
        return entries

    def _entry_path(self, profile_id: str) -> Path:
        return self._root / f"cache_{_UNSAFE.sub('_', profile_id)}.json"
