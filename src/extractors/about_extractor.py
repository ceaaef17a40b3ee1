# src/extractors/about_extractor.py — v1
"""About (summary) text section."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from profilescope.cache.fingerprint import text_digest
from profilescope.config.sections import SHOW_MORE_CONTROL_SELECTORS
from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.selectors import safe_select
from profilescope.dom.text import normalize_whitespace
from profilescope.extractors import text_analysis
from profilescope.extractors.base_extractor import BaseSectionExtractor

_NOISE = re.compile(
    r"^\s*about\b|(?:…|\.\.\.)?\s*(?:see|show)\s+(?:more|less)\s*$",
    re.IGNORECASE,
)
_TRUNCATED = ("…", "...")


def clean_about_text(text: str) -> str:
    """Drop the heading echo and trailing see-more/see-less toggles."""
    previous = None
    while previous != text:
        previous = text
        text = _NOISE.sub("", text).strip()
    return text


class AboutExtractor(BaseSectionExtractor):
    section = SectionName.ABOUT
    expansion_selectors = SHOW_MORE_CONTROL_SELECTORS

    def read_text(self, region: Tag) -> str:
        """Best text node under the region, line breaks preserved."""
        best: Tag | None = None
        best_length = 0
        for selector in self.profile.extra.get("text", ()):
            for node in safe_select(region, selector):
                length = len(normalize_whitespace(node.get_text(" ", strip=True)))
                if length > best_length:
                    best, best_length = node, length
        if best is None:
            return clean_about_text(_without_headings(region))
        lines = [normalize_whitespace(line) for line in best.get_text("\n").split("\n")]
        return clean_about_text("\n".join(line for line in lines if line))

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        text = self.read_text(region)
        flat = normalize_whitespace(text)
        return {
            "char_count": len(flat),
            "word_count": text_analysis.word_count(flat),
            "paragraph_count": len(text_analysis.split_paragraphs(text)),
            "has_show_more": bool(self.pending_controls(region)) or flat.endswith(_TRUNCATED),
            "text_digest": text_digest(flat),
        }

    def is_materialized(self, region: Tag, shallow: SectionResult) -> bool:
        current = len(normalize_whitespace(self.read_text(region)))
        return current > shallow.fields["char_count"] or not self.pending_controls(region)

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        text = self.read_text(region)
        flat = normalize_whitespace(text)
        return {
            "text": text,
            "full_char_count": len(flat),
            "paragraphs": text_analysis.split_paragraphs(text),
            "keywords": text_analysis.extract_keywords(flat),
            "has_call_to_action": text_analysis.has_call_to_action(flat),
            "has_contact_info": text_analysis.has_contact_info(flat),
            "sentiment": text_analysis.sentiment(flat),
            "readability": text_analysis.readability(flat),
            "chunks": text_analysis.chunk_text(flat, 1000),
        }


def _without_headings(region: Tag) -> str:
    parts = []
    for string in region.find_all(string=True):
        if string.find_parent(["h2", "h3", "button"]) is not None:
            continue
        parts.append(str(string))
    return normalize_whitespace(" ".join(parts))
