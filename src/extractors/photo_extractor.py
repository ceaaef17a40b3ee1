# src/extractors/photo_extractor.py — v1
"""Profile photo: presence only; placeholder avatars count as absent."""

from __future__ import annotations

from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.document import BaseDocument
from profilescope.extractors.base_extractor import BaseSectionExtractor
from profilescope.locator.section_locator import Region

_ALT_MARKERS = ("profile photo", "profile picture")
_PLACEHOLDER_MARKERS = ("ghost", "default-avatar", "person-placeholder")


class PhotoExtractor(BaseSectionExtractor):
    section = SectionName.PHOTO

    def locate(self, document: BaseDocument) -> Region | None:
        region = super().locate(document)
        if region is None:
            region = self._locate_by_alt(document)
        if region is None or _is_placeholder(_image(region.element)):
            return None
        return region

    def _locate_by_alt(self, document: BaseDocument) -> Region | None:
        for img in document.root.find_all("img"):
            alt = (img.get("alt") or "").lower()
            if any(marker in alt for marker in _ALT_MARKERS):
                return Region(section=self.section, element=img, strategy="attribute")
        return None

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        return {"has_photo": True}

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        img = _image(region)
        return {
            "photo_url": img.get("src") if img is not None else None,
            "alt": (img.get("alt") or "") if img is not None else "",
        }


def _image(node: Tag) -> Tag | None:
    if node.name == "img":
        return node
    return node.find("img")


def _is_placeholder(img: Tag | None) -> bool:
    if img is None or not img.get("src"):
        return True
    haystack = " ".join([img.get("src", ""), *(img.get("class") or [])]).lower()
    return any(marker in haystack for marker in _PLACEHOLDER_MARKERS)
