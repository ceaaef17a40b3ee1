# src/extractors/recommendations_extractor.py — v1
"""Recommendations received and given."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.selectors import safe_select
from profilescope.dom.text import accessible_label
from profilescope.extractors import items as item_reader
from profilescope.extractors.base_extractor import BaseSectionExtractor

_TAB_COUNT = re.compile(r"\((\d[\d,]*)\)|(\d[\d,]*)")


class RecommendationsExtractor(BaseSectionExtractor):
    section = SectionName.RECOMMENDATIONS
    expansion_selectors = (".pvs-list__footer-wrapper button",)

    def _tab_count(self, region: Tag, kind: str) -> int | None:
        for selector in self.profile.extra.get(kind, ()):
            for tab in safe_select(region, selector):
                match = _TAB_COUNT.search(accessible_label(tab))
                if match:
                    return int((match.group(1) or match.group(2)).replace(",", ""))
        return None

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        received = self._tab_count(region, "received")
        given = self._tab_count(region, "given")
        return {
            "received_count": received if received is not None else scan.total_count,
            "given_count": given or 0,
        }

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        recommendations = []
        for item in item_reader.item_nodes(region, self.profile):
            text = item_reader.item_description(item)
            captions = item_reader.item_captions(item)
            recommendations.append({
                "recommender": item_reader.item_title(item),
                "headline": item_reader.item_subtitle(item),
                "relationship": captions[0] if captions else "",
                "text": text,
                "char_count": len(text),
            })
        lengths = [r["char_count"] for r in recommendations if r["char_count"]]
        return {
            "recommendations": recommendations,
            "average_length": round(sum(lengths) / len(lengths)) if lengths else 0,
        }
