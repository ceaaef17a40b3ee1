# src/extractors/headline_extractor.py — v1
"""Headline under the profile name."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.text import node_text
from profilescope.extractors import text_analysis
from profilescope.extractors.base_extractor import BaseSectionExtractor

ROLE_KEYWORDS = (
    "senior", "lead", "principal", "director", "manager", "engineer",
    "developer", "designer", "analyst", "consultant", "expert", "specialist",
    "architect", "strategist", "founder", "scientist", "head",
)
GENERIC_PHRASES = (
    "looking for opportunities", "seeking new role", "open to work",
    "unemployed", "student at",
)
VALUE_WORDS = ("helping", "help ", "enabling", "driving", "building", "empowering", "transforming")

_PART_SEPARATORS = re.compile(r"\s*(?:\||·|•|—|–| - )\s*")


class HeadlineExtractor(BaseSectionExtractor):
    section = SectionName.HEADLINE

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        text = node_text(region)
        lower = text.lower()
        return {
            "text": text,
            "char_count": len(text),
            "has_keywords": any(k in lower for k in ROLE_KEYWORDS),
            "is_generic": any(p in lower for p in GENERIC_PHRASES),
            "has_pipe": "|" in text,
            "has_at": "@" in text or " at " in lower,
        }

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        text = shallow.fields["text"]
        lower = text.lower()
        parts = [p for p in _PART_SEPARATORS.split(text) if p]
        return {
            "word_count": text_analysis.word_count(text),
            "keywords": text_analysis.extract_keywords(text, limit=8),
            "parts": parts,
            "has_title": shallow.fields["has_keywords"],
            "has_company": shallow.fields["has_at"],
            "has_value_proposition": any(w in lower for w in VALUE_WORDS),
            "sentiment": text_analysis.sentiment(text),
        }
