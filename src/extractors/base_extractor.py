# src/extractors/base_extractor.py — v1
"""Three-phase section extractor protocol.

Every section offers ``scan`` (presence and counts), ``extract`` (scan plus
normalized scoring fields) and ``extract_deep`` (extract plus the full
payload, after expanding in-place "show more" controls). Each phase calls
the previous one first. A section that cannot be located yields an absent
result at every phase instead of raising.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from bs4 import Tag

from profilescope.config.sections import SECTION_PROFILES, SectionProfile
from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.document import BaseDocument, is_expanded, navigates_away
from profilescope.dom.selectors import safe_select
from profilescope.dom.waiting import wait_until
from profilescope.locator.count_reconciler import CountReconciler
from profilescope.locator.section_locator import Region, SectionLocator

logger = logging.getLogger(__name__)


class ExtractionTimeout(Exception):
    """A section did not settle within its time bound."""

    def __init__(self, section: SectionName, timeout_s: float) -> None:
        super().__init__(f"Section {section.value!r} timed out after {timeout_s:.1f}s")
        self.section = section
        self.timeout_s = timeout_s


class BaseSectionExtractor(ABC):
    """Unified interface for per-section extractors."""

    section: ClassVar[SectionName]
    # In-place controls that reveal more content; activated by extract_deep only.
    expansion_selectors: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        locator: SectionLocator | None = None,
        reconciler: CountReconciler | None = None,
        wait_timeout_s: float = 3.0,
        poll_interval_s: float = 0.1,
    ) -> None:
        self._locator = locator or SectionLocator()
        self._reconciler = reconciler or CountReconciler()
        self._wait_timeout_s = wait_timeout_s
        self._poll_interval_s = poll_interval_s

    @property
    def profile(self) -> SectionProfile:
        return SECTION_PROFILES[self.section]

    def locate(self, document: BaseDocument) -> Region | None:
        return self._locator.locate(self.section, document.root)

    # --- Phases ---

    async def scan(self, document: BaseDocument) -> ScanResult:
        """Presence and item counts. Never interacts with the document."""
        scan, _ = self._scan(document)
        return scan

    async def extract(self, document: BaseDocument) -> SectionResult:
        """Scan plus the normalized fields used for scoring. Side-effect free."""
        scan, region = self._scan(document)
        if not scan.exists or region is None:
            return SectionResult.absent(self.section)
        fields = self.shallow_fields(region.element, scan)
        return SectionResult(
            section=self.section,
            exists=True,
            visible_count=scan.visible_count,
            total_count=scan.total_count,
            fields=fields,
        )

    async def extract_deep(self, document: BaseDocument) -> SectionResult:
        """Extract, expand in place, then read the full payload."""
        shallow = await self.extract(document)
        if not shallow.exists:
            return shallow.deepen({})
        region = self.locate(document)
        if region is None:
            logger.warning("%s vanished before deep extraction", self.section.value)
            return shallow.deepen({})
        region = await self._expand(document, region, shallow)
        return shallow.deepen(self.deep_details(region.element, shallow))

    # --- Section hooks ---

    @abstractmethod
    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        """Minimal normalized fields for completeness scoring."""

    @abstractmethod
    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        """Full payload for AI analysis, read after expansion."""

    def count(self, region: Region) -> tuple[int, int, str]:
        counts = self._reconciler.reconcile(region, self.section)
        return counts.visible_count, counts.total_count, counts.source

    def is_materialized(self, region: Tag, shallow: SectionResult) -> bool:
        """Whether expanded content is present. Default: items or controls settled."""
        visible = self._reconciler.count_visible(region, self.profile)
        return visible > shallow.visible_count or not self.pending_controls(region)

    def pending_controls(self, region: Tag) -> list[Tag]:
        """Expansion controls under ``region`` that could still be activated."""
        seen: set[int] = set()
        controls: list[Tag] = []
        for selector in self.expansion_selectors:
            for control in safe_select(region, selector):
                if id(control) in seen or is_expanded(control) or navigates_away(control):
                    continue
                seen.add(id(control))
                controls.append(control)
        return controls

    # --- Internals ---

    def _scan(self, document: BaseDocument) -> tuple[ScanResult, Region | None]:
        region = self.locate(document)
        if region is None:
            return ScanResult.absent(self.section), None
        visible, total, source = self.count(region)
        scan = ScanResult(
            section=self.section,
            exists=True,
            visible_count=visible,
            total_count=total,
            count_source=source,  # type: ignore[arg-type]
        )
        return scan, region

    async def _expand(
        self,
        document: BaseDocument,
        region: Region,
        shallow: SectionResult,
    ) -> Region:
        controls = self.pending_controls(region.element)
        if not controls:
            return region
        dispatched = 0
        for control in controls:
            if await document.activate(control):
                dispatched += 1
        if not dispatched:
            return region

        def materialized(root: Tag) -> bool:
            current = self._locator.locate(self.section, root)
            return current is not None and self.is_materialized(current.element, shallow)

        settled = await wait_until(
            document, materialized, self._wait_timeout_s, self._poll_interval_s,
        )
        if not settled:
            logger.info(
                "%s: expanded content not materialized after %.1fs, reading current view",
                self.section.value, self._wait_timeout_s,
            )
        return self.locate(document) or region
