# src/locator/section_locator.py — v1
"""Resolve a logical section to a region of the document tree.

Strategies are evaluated in order and the first one returning an element
wins. Not finding a section is a normal outcome and yields None.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from bs4 import Tag

from profilescope.config.sections import SECTION_PROFILES, SectionProfile
from profilescope.core.models import SectionName
from profilescope.locator.strategies import LocatorStrategy, default_strategies

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """Concrete subtree of the document for one section."""

    section: SectionName
    element: Tag
    strategy: str


class SectionLocator:
    """Ordered fallback chain over locator strategies."""

    def __init__(
        self,
        strategies: Sequence[LocatorStrategy] | None = None,
        profiles: Mapping[SectionName, SectionProfile] | None = None,
        sibling_lookahead: int = 5,
    ) -> None:
        self._strategies = (
            list(strategies)
            if strategies is not None
            else default_strategies(lookahead=sibling_lookahead)
        )
        self._profiles = profiles if profiles is not None else SECTION_PROFILES

    def profile(self, section: SectionName | str) -> SectionProfile:
        return self._profiles[SectionName(section)]

    def locate(self, section: SectionName | str, root: Tag) -> Region | None:
        """Find the region for ``section``.

        Raises:
            ValueError: If ``section`` is not a known section name.
        """
        name = SectionName(section)
        profile = self._profiles[name]
        for strategy in self._strategies:
            element = strategy.find(profile, root)
            if element is not None:
                logger.debug("Located %s via %s", name.value, strategy.name)
                return Region(section=name, element=element, strategy=strategy.name)
        logger.debug("Section %s not found", name.value)
        return None
