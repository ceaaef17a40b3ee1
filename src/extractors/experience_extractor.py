# src/extractors/experience_extractor.py — v1
"""Work experience: roles, tenure and current position."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from profilescope.config.sections import SHOW_MORE_CONTROL_SELECTORS
from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.extractors import items as item_reader
from profilescope.extractors import text_analysis
from profilescope.extractors.base_extractor import BaseSectionExtractor

SENIORITY_LADDER = ("intern", "junior", "senior", "lead", "principal", "manager",
                    "director", "vp", "chief")

_DATE_HINT = re.compile(r"(?:19|20)\d{2}|present|\d+\s*(?:yrs?|mos?)\b", re.IGNORECASE)
RECENCY_DECAY = 0.8


class ExperienceExtractor(BaseSectionExtractor):
    section = SectionName.EXPERIENCE
    expansion_selectors = SHOW_MORE_CONTROL_SELECTORS + (
        ".pvs-list__footer-wrapper button",
    )

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        roles = [self._read_role(item) for item in item_reader.item_nodes(region, self.profile)]
        return {
            "has_current_role": any(r["is_current"] for r in roles),
            "total_months": sum(r["months"] for r in roles),
        }

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        roles = []
        for index, item in enumerate(item_reader.item_nodes(region, self.profile)):
            role = self._read_role(item)
            role["description"] = item_reader.item_description(item)
            role["recency_weight"] = round(RECENCY_DECAY ** index, 4)
            roles.append(role)
        tenures = [r["months"] for r in roles if r["months"]]
        return {
            "roles": roles,
            "average_tenure_months": round(sum(tenures) / len(tenures)) if tenures else 0,
            "roles_with_descriptions": sum(1 for r in roles if r["description"]),
            "has_quantified_achievements": any(
                text_analysis.has_quantified_achievement(r["description"]) for r in roles
            ),
            "career_progression": career_progression([r["title"] for r in roles]),
        }

    def _read_role(self, item: Tag) -> dict[str, Any]:
        subtitle = item_reader.item_subtitle(item)
        subtitle_parts = item_reader.split_dot(subtitle)
        captions = item_reader.item_captions(item)
        dates = next((c for c in captions if _DATE_HINT.search(c)), "")
        location = next((c for c in captions if c != dates), "")
        return {
            "title": item_reader.item_title(item),
            "company": subtitle_parts[0] if subtitle_parts else "",
            "employment_type": text_analysis.employment_type(subtitle),
            "duration": dates,
            "months": text_analysis.parse_duration_months(dates),
            "is_current": "present" in dates.lower(),
            "location": location,
        }


def career_progression(titles_recent_first: list[str]) -> str:
    """'upward' when seniority rises over time, else 'lateral'."""
    if len(titles_recent_first) < 2:
        return "insufficient_data"
    levels = [_seniority(t) for t in reversed(titles_recent_first)]
    steps_up = sum(1 for prev, cur in zip(levels, levels[1:]) if cur > prev)
    return "upward" if steps_up > len(levels) / 3 else "lateral"


def _seniority(title: str) -> int:
    lower = title.lower()
    level = -1
    for index, marker in enumerate(SENIORITY_LADDER):
        if re.search(rf"\b{marker}\b", lower):
            level = index
    return level
