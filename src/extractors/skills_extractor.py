# src/extractors/skills_extractor.py — v1
"""Skills list with endorsement counts."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.dom.selectors import safe_select
from profilescope.dom.text import normalize_whitespace, node_text
from profilescope.extractors import items as item_reader
from profilescope.extractors.base_extractor import BaseSectionExtractor

_ENDORSEMENTS = re.compile(r"(\d[\d,]*)\+?\s+endorsements?", re.IGNORECASE)
TOP_SKILLS = 5


class SkillsExtractor(BaseSectionExtractor):
    section = SectionName.SKILLS
    expansion_selectors = (
        ".pvs-list__footer-wrapper button",
        'button[aria-label*="Show all"]',
        'button[aria-label*="more skills"]',
    )

    def read_skills(self, region: Tag) -> list[dict[str, Any]]:
        """Skill names in document order, with endorsements where shown."""
        skills: list[dict[str, Any]] = []
        seen: set[str] = set()
        for node in self._skill_nodes(region):
            name = node_text(node) if node.name == "a" else item_reader.item_title(node)
            if not name or len(name) > 100 or name.lower() in seen:
                continue
            seen.add(name.lower())
            container = node.find_parent("li") if node.name == "a" else node
            skills.append({"name": name, "endorsements": _endorsements(container or node)})
        return skills

    def _skill_nodes(self, region: Tag) -> list[Tag]:
        topics = safe_select(region, 'a[data-field="skill_card_skill_topic"]')
        if topics:
            return topics
        return item_reader.item_nodes(region, self.profile)

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        skills = self.read_skills(region)
        return {
            "top_skills": [s["name"] for s in skills[:TOP_SKILLS]],
            "has_more": scan.total_count > scan.visible_count,
            "has_endorsements": any(s["endorsements"] for s in skills),
        }

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        skills = self.read_skills(region)
        endorsed = sorted(
            (s for s in skills if s["endorsements"]),
            key=lambda s: -s["endorsements"],
        )
        return {
            "skills": skills,
            "listed_count": len(skills),
            "total_endorsements": sum(s["endorsements"] for s in skills),
            "top_endorsed": [s["name"] for s in endorsed[:TOP_SKILLS]],
        }


def _endorsements(node: Tag) -> int:
    match = _ENDORSEMENTS.search(normalize_whitespace(node.get_text(" ", strip=True)))
    return int(match.group(1).replace(",", "")) if match else 0
