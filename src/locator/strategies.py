# src/locator/strategies.py — v1
"""Section location strategies.

Each strategy maps a SectionProfile and a document root to the first
matching element, or None. Strategies never touch the page.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from bs4 import Tag

from profilescope.config.sections import (
    ANCHOR_CLASS,
    SectionProfile,
    derived_anchor_ids,
)
from profilescope.dom.selectors import has_class, safe_select, safe_select_one
from profilescope.dom.text import accessible_label, normalize_whitespace

logger = logging.getLogger(__name__)

_EXPAND_PHRASES = ("show all", "see all", "view all")


class LocatorStrategy(ABC):
    """One step of the locator's fallback chain."""

    name: ClassVar[str]

    @abstractmethod
    def find(self, profile: SectionProfile, root: Tag) -> Tag | None:
        """Return the section's region element, or None."""


class SelectorStrategy(LocatorStrategy):
    """Ranked structural selectors; first match in document order wins."""

    name = "selector"

    def find(self, profile: SectionProfile, root: Tag) -> Tag | None:
        for selector in profile.selectors:
            for match in safe_select(root, selector):
                # Marker-only anchors are handled by AnchorStrategy.
                if has_class(match, ANCHOR_CLASS):
                    continue
                return match
        return None


class AnchorStrategy(LocatorStrategy):
    """Stable marker node, then a bounded walk over its following siblings."""

    name = "anchor"

    def __init__(self, lookahead: int = 5) -> None:
        self._lookahead = lookahead

    def find(self, profile: SectionProfile, root: Tag) -> Tag | None:
        for anchor_id in derived_anchor_ids(profile):
            anchor = root.find("div", id=anchor_id, class_=ANCHOR_CLASS)
            if anchor is None:
                continue
            if not profile.siblings_only:
                enclosing = anchor.find_parent("section")
                if enclosing is not None:
                    return enclosing
            match = self._scan_siblings(anchor, profile)
            if match is not None:
                return match
            logger.debug(
                "Anchor #%s found but no sibling qualified for %s",
                anchor_id, profile.name.value,
            )
        return None

    def _scan_siblings(self, anchor: Tag, profile: SectionProfile) -> Tag | None:
        sibling = anchor.find_next_sibling()
        for _ in range(self._lookahead):
            if sibling is None:
                return None
            if self._accepts(sibling, profile):
                return sibling
            sibling = sibling.find_next_sibling()
        return None

    def _accepts(self, sibling: Tag, profile: SectionProfile) -> bool:
        if profile.item_marker:
            return bool(safe_select(sibling, profile.item_marker))
        has_list = (
            safe_select_one(sibling, "ul, .pvs-list") is not None
            or sibling.find("li") is not None
        )
        text_length = len(normalize_whitespace(sibling.get_text(" ", strip=True)))
        if has_list and text_length > profile.min_sibling_text:
            return True
        return _has_expand_control(sibling, profile)


def _has_expand_control(node: Tag, profile: SectionProfile) -> bool:
    keywords = profile.count_keywords or (profile.label.lower(),)
    for control in safe_select(node, "a, button"):
        label = accessible_label(control).lower()
        if any(p in label for p in _EXPAND_PHRASES) and any(
            k in label for k in keywords
        ):
            return True
    return False


class HeadingStrategy(LocatorStrategy):
    """Heading text equal to or containing the label, then the enclosing card."""

    name = "heading"

    def find(self, profile: SectionProfile, root: Tag) -> Tag | None:
        if not profile.heading_search:
            return None
        label = profile.label.lower()
        for heading in root.find_all(["h2", "h3"]):
            text = normalize_whitespace(heading.get_text(" ", strip=True)).lower()
            if not text or (text != label and label not in text):
                continue
            container = _enclosing_container(heading)
            if container is not None:
                return container
        return None


def _enclosing_container(node: Tag) -> Tag | None:
    for parent in node.parents:
        if not isinstance(parent, Tag) or parent.name == "[document]":
            return None
        if parent.name == "section":
            return parent
        if parent.name == "div":
            if parent.get("data-view-name") == "profile-card":
                return parent
            if any("profile-card" in c for c in parent.get("class") or []):
                return parent
    return None


def default_strategies(lookahead: int = 5) -> list[LocatorStrategy]:
    """The fallback chain in evaluation order."""
    return [SelectorStrategy(), AnchorStrategy(lookahead=lookahead), HeadingStrategy()]
