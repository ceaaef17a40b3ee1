# src/locator/count_reconciler.py — v1
"""Visible vs. total item counts for partially rendered sections.

Pages render the first few items of a list and an expansion control such
as "Show all 53 skills". The total is read from that control, then from
short free-text nodes, then defaults to the visible count. Patterns are
ordered (pattern, extractor) pairs; the first match wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import lru_cache

from bs4 import Tag

from profilescope.config.sections import (
    SECTION_PROFILES,
    SHOW_ALL_CONTROL_SELECTORS,
    SectionProfile,
)
from profilescope.core.models import CountSource, SectionName
from profilescope.dom.selectors import safe_select
from profilescope.dom.text import accessible_label, normalize_whitespace
from profilescope.locator.section_locator import Region

logger = logging.getLogger(__name__)

CountPattern = tuple[re.Pattern[str], Callable[[re.Match[str]], int]]

_NUMBER = r"(\d[\d,]*)"


def _first_group(match: re.Match[str]) -> int:
    return int(match.group(1).replace(",", ""))


def _keyword_alternation(keywords: tuple[str, ...]) -> str:
    return "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))


@lru_cache(maxsize=64)
def control_patterns(keywords: tuple[str, ...]) -> tuple[CountPattern, ...]:
    """Patterns applied to an expansion control's label and text."""
    patterns = [
        rf"Show\s+all\s+{_NUMBER}",
        rf"Show\s+all\s+\({_NUMBER}\)",
    ]
    if keywords:
        kw = _keyword_alternation(keywords)
        patterns += [
            rf"{_NUMBER}\s+(?:{kw})\b",
            rf"(?:{kw})\s*\({_NUMBER}\)",
        ]
    patterns += [
        rf"\bAll\s+{_NUMBER}",
        rf"{_NUMBER}\s+items?\b",
    ]
    return tuple((re.compile(p, re.IGNORECASE), _first_group) for p in patterns)


@lru_cache(maxsize=64)
def text_patterns(keywords: tuple[str, ...]) -> tuple[CountPattern, ...]:
    """Patterns applied to short free-text nodes of the region."""
    patterns: list[str] = []
    if keywords:
        kw = _keyword_alternation(keywords)
        patterns += [
            rf"{_NUMBER}\s+(?:{kw})\b",
            rf"(?:{kw})\s*\({_NUMBER}\)",
        ]
    patterns += [
        rf"Show\s+all\s+{_NUMBER}",
        rf"View\s+all\s+{_NUMBER}",
        rf"{_NUMBER}\s+total\b",
    ]
    return tuple((re.compile(p, re.IGNORECASE), _first_group) for p in patterns)


def match_count(text: str, patterns: tuple[CountPattern, ...]) -> int | None:
    """Apply ``patterns`` in order; the first match's extracted number wins."""
    for pattern, extract in patterns:
        match = pattern.search(text)
        if match:
            return extract(match)
    return None


@dataclass(frozen=True)
class ItemCounts:
    visible_count: int
    total_count: int
    source: CountSource


class CountReconciler:
    """Derives authoritative totals from expansion controls and region text."""

    def __init__(
        self,
        profiles: Mapping[SectionName, SectionProfile] | None = None,
        max_text_length: int = 200,
    ) -> None:
        self._profiles = profiles if profiles is not None else SECTION_PROFILES
        self._max_text_length = max_text_length

    def reconcile(self, region: Region | Tag, section: SectionName | str) -> ItemCounts:
        element = region.element if isinstance(region, Region) else region
        profile = self._profiles[SectionName(section)]
        if profile.single_value:
            return ItemCounts(visible_count=1, total_count=1, source="single")

        visible = self.count_visible(element, profile)
        source: CountSource = "control"
        total = self._total_from_controls(element, profile)
        if total is None:
            source = "text"
            total = self._total_from_text(element, profile)
        if total is None:
            source = "visible"
            total = visible
        if total < visible:
            logger.debug(
                "%s: parsed total %d below visible %d, using visible",
                profile.name.value, total, visible,
            )
            total = visible
        return ItemCounts(visible_count=visible, total_count=total, source=source)

    def count_visible(self, element: Tag, profile: SectionProfile) -> int:
        """Item count from the first item shape that yields any matches."""
        for selector in profile.item_selectors:
            count = len(safe_select(element, selector))
            if count:
                return count
        return 0

    def find_controls(self, element: Tag, profile: SectionProfile) -> list[Tag]:
        """Expansion controls in selector rank order, without duplicates."""
        seen: set[int] = set()
        controls: list[Tag] = []
        for selector in _control_selectors(profile):
            for control in safe_select(element, selector):
                if id(control) not in seen:
                    seen.add(id(control))
                    controls.append(control)
        return controls

    def _total_from_controls(self, element: Tag, profile: SectionProfile) -> int | None:
        patterns = control_patterns(profile.count_keywords)
        for control in self.find_controls(element, profile):
            total = match_count(accessible_label(control), patterns)
            if total is not None:
                return total
        return None

    def _total_from_text(self, element: Tag, profile: SectionProfile) -> int | None:
        patterns = text_patterns(profile.count_keywords)
        for node in element.find_all(["span", "div", "a", "p"]):
            text = normalize_whitespace(node.get_text(" ", strip=True))
            if not text or len(text) > self._max_text_length:
                continue
            total = match_count(text, patterns)
            if total is not None:
                return total
        return None


def _control_selectors(profile: SectionProfile) -> list[str]:
    selectors: list[str] = []
    for template in SHOW_ALL_CONTROL_SELECTORS:
        if "{slug}" in template:
            selectors.extend(template.format(slug=s) for s in profile.details_slugs)
        else:
            selectors.append(template)
    return selectors
