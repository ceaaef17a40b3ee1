# src/dom/selectors.py — v1
"""Fault-tolerant CSS selection over BeautifulSoup trees.

Selector lists are curated against third-party markup; a selector the
engine rejects is skipped rather than raised.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)


def safe_select(node: Tag, selector: str) -> list[Tag]:
    """All matches of ``selector`` under ``node`` in document order, [] if invalid."""
    try:
        return list(node.select(selector))
    except (SelectorSyntaxError, ValueError, NotImplementedError) as e:
        logger.debug("Skipping unsupported selector %r: %s", selector, e)
        return []


def safe_select_one(node: Tag, selector: str) -> Tag | None:
    """First match of ``selector`` under ``node``, None if absent or invalid."""
    try:
        return node.select_one(selector)
    except (SelectorSyntaxError, ValueError, NotImplementedError) as e:
        logger.debug("Skipping unsupported selector %r: %s", selector, e)
        return None


def has_class(node: Tag, class_name: str) -> bool:
    return class_name in (node.get("class") or [])


def css_path(node: Tag) -> str:
    """Structural CSS path (``tag:nth-of-type(i)`` chain) locating ``node``.

    Used to address the same element on a live page and as the identity of
    an activated expansion control.
    """
    parts: list[str] = []
    current: Tag | None = node
    while current is not None and not isinstance(current, BeautifulSoup):
        parent = current.parent
        if parent is None:
            parts.append(current.name)
            break
        index = 1
        for sibling in parent.find_all(current.name, recursive=False):
            if sibling is current:
                break
            index += 1
        parts.append(f"{current.name}:nth-of-type({index})")
        current = parent
    return " > ".join(reversed(parts))
