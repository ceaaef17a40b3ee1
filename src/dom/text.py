# src/dom/text.py — v1
"""Text reading helpers for rendered profile markup."""

from __future__ import annotations

import re
from collections.abc import Iterable

from bs4 import Tag

from profilescope.dom.selectors import safe_select

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def node_text(node: Tag) -> str:
    """Readable text of ``node``.

    Rendered profile markup duplicates most strings: one copy in a
    ``span[aria-hidden="true"]`` for display and one visually hidden copy
    for assistive technology. The display copy is preferred.
    """
    display = node.select_one('span[aria-hidden="true"]')
    if display is not None:
        text = normalize_whitespace(display.get_text(" ", strip=True))
        if text:
            return text
    return normalize_whitespace(node.get_text(" ", strip=True))


def first_text(node: Tag, selectors: Iterable[str]) -> str:
    """Text of the first non-empty match over ``selectors`` in rank order."""
    for selector in selectors:
        for match in safe_select(node, selector):
            text = node_text(match)
            if text:
                return text
    return ""


def longest_text(node: Tag, selectors: Iterable[str]) -> str:
    """Longest non-empty match over all ``selectors``; ties keep the earlier one."""
    best = ""
    for selector in selectors:
        for match in safe_select(node, selector):
            text = normalize_whitespace(match.get_text(" ", strip=True))
            if len(text) > len(best):
                best = text
    return best


def accessible_label(node: Tag) -> str:
    """aria-label plus visible text, the string count patterns are matched against."""
    label = node.get("aria-label") or ""
    if isinstance(label, list):
        label = " ".join(label)
    return normalize_whitespace(f"{label} {node.get_text(' ', strip=True)}")
