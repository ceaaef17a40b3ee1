# src/extractors/featured_extractor.py — v1
"""Featured posts, articles, links and media. Informational, not scored."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.text import first_text
from profilescope.extractors import items as item_reader
from profilescope.extractors.base_extractor import BaseSectionExtractor

_KIND_LABELS = ("post", "article", "link", "document", "media", "newsletter")


def featured_kind(label: str) -> str:
    lower = label.lower()
    for kind in _KIND_LABELS:
        if kind in lower:
            return kind
    return "other"


class FeaturedExtractor(BaseSectionExtractor):
    section = SectionName.FEATURED

    def _read_item(self, item: Tag) -> dict[str, Any]:
        label = first_text(item, (".t-12", ".pv-featured-container__label"))
        url = item_reader.item_link(item, exclude=())
        host = urlparse(url).netloc if url else ""
        return {
            "title": item_reader.item_title(item),
            "kind": featured_kind(label),
            "url": url,
            "is_external": bool(host) and "linkedin.com" not in host,
        }

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        kinds = {self._read_item(i)["kind"] for i in item_reader.item_nodes(region, self.profile)}
        return {"kinds": sorted(kinds)}

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        return {"items": [self._read_item(i) for i in item_reader.item_nodes(region, self.profile)]}
