# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation."""

from __future__ import annotations

from pathlib import Path

from profilescope.cache.base_cache_store import BaseCacheStore
from profilescope.config.settings import Settings

DEFAULT_CACHE_ROOT = Path("~/.profilescope/cache")


class UnsupportedCacheBackendError(ValueError):
    """Raised when CACHE_BACKEND names no known backend."""


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the JSON backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "json" if settings is None else settings.cache_backend
    cache_root = DEFAULT_CACHE_ROOT if settings is None else settings.cache_root

    if backend == "json":
        from profilescope.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=cache_root)

    if backend == "sqlite":
        from profilescope.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=Path(cache_root).expanduser() / "profilescope_cache.db")

    raise UnsupportedCacheBackendError(f"Unsupported cache backend: {backend!r}")
