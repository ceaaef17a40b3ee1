# src/api/facade.py — v1
"""Public API facade — single entry point for profile analysis.

Usage:
    from profilescope.api.facade import analyze_html
    result = await analyze_html(html, url="https://www.linkedin.com/in/jane-doe/")
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from profilescope.config.settings import Settings, load_settings
from profilescope.coordinator.analysis_coordinator import (
    AnalysisCoordinator,
    AnalysisOptions,
    AnalysisResult,
)
from profilescope.dom.document import BaseDocument, StaticDocument
from profilescope.dom.selectors import safe_select_one

if TYPE_CHECKING:
    from profilescope.ai.base_analyzer import BaseQualityAnalyzer
    from profilescope.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

_PROFILE_PATH = re.compile(r"/in/([^/?#]+)")

# Where a saved page records its own address.
_URL_SELECTORS: tuple[tuple[str, str], ...] = (
    ('link[rel="canonical"]', "href"),
    ('meta[property="og:url"]', "content"),
)


def profile_id_from_url(url: str) -> str | None:
    """Profile id is the path segment after ``/in/``; None if there is none."""
    match = _PROFILE_PATH.search(urlparse(url).path or url)
    if match is None:
        return None
    return unquote(match.group(1)).strip() or None


def _document_url(document: BaseDocument) -> str | None:
    if document.url:
        return document.url
    for selector, attribute in _URL_SELECTORS:
        node = safe_select_one(document.root, selector)
        if node is not None and node.get(attribute):
            return str(node[attribute])
    return None


def resolve_profile_id(
    document: BaseDocument,
    profile_id: str | None = None,
) -> str:
    """Explicit id, else the id in the document's URL or canonical link.

    Raises:
        ValueError: If no profile id can be determined.
    """
    if profile_id:
        return profile_id
    url = _document_url(document)
    resolved = profile_id_from_url(url) if url else None
    if resolved is None:
        raise ValueError("Cannot determine profile id: pass profile_id or a /in/ URL")
    return resolved


def _create_cache_store(settings: Settings) -> BaseCacheStore | None:
    if not settings.cache_enabled:
        return None
    from profilescope.cache.cache_factory import create_cache_store

    return create_cache_store(settings)


async def analyze_document(
    document: BaseDocument,
    profile_id: str | None = None,
    settings: Settings | None = None,
    force_refresh: bool = False,
    ai_enabled: bool | None = None,
    cache_store: BaseCacheStore | None = None,
    analyzer: BaseQualityAnalyzer | None = None,
) -> AnalysisResult:
    """Analyze an already-loaded document (static snapshot or live page)."""
    settings = settings or load_settings()
    resolved_id = resolve_profile_id(document, profile_id)
    store = cache_store if cache_store is not None else _create_cache_store(settings)
    coordinator = AnalysisCoordinator(settings, store, analyzer=analyzer)
    return await coordinator.run_analysis(
        resolved_id,
        document,
        AnalysisOptions(force_refresh=force_refresh, ai_enabled=ai_enabled),
    )


async def analyze_html(
    html: str,
    profile_id: str | None = None,
    url: str | None = None,
    settings: Settings | None = None,
    force_refresh: bool = False,
    ai_enabled: bool | None = None,
    cache_store: BaseCacheStore | None = None,
    analyzer: BaseQualityAnalyzer | None = None,
) -> AnalysisResult:
    """Analyze a saved profile page.

    Args:
        html: Page markup.
        profile_id: Cache key. Derived from ``url`` or the page when omitted.
        url: Page address, used for the profile id.
        settings: Global settings. Loaded from .env if None.
        force_refresh: Skip the cache lookup.
        ai_enabled: Override AI_ENABLED for this run.
        cache_store: Cache backend. Built from settings if None.
        analyzer: AI capability. Built from settings on demand if None.

    Returns:
        AnalysisResult carrying at least the completeness breakdown.

    Raises:
        ValueError: If no profile id can be determined.
    """
    document = StaticDocument(html, url=url)
    return await analyze_document(
        document,
        profile_id=profile_id,
        settings=settings,
        force_refresh=force_refresh,
        ai_enabled=ai_enabled,
        cache_store=cache_store,
        analyzer=analyzer,
    )


async def invalidate_cache(profile_id: str, settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    from profilescope.cache.cache_factory import create_cache_store

    await create_cache_store(settings).invalidate(profile_id)
    logger.info("Invalidated cache entry for %s", profile_id)


async def clear_cache(settings: Settings | None = None) -> int:
    """Remove every cache entry. Returns the number removed."""
    settings = settings or load_settings()
    from profilescope.cache.cache_factory import create_cache_store

    removed = await create_cache_store(settings).clear()
    logger.info("Cleared %d cache entries", removed)
    return removed
