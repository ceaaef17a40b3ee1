# src/extractors/education_extractor.py — v1
"""Education: schools, degrees and years."""

from __future__ import annotations

from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.extractors import items as item_reader
from profilescope.extractors import text_analysis
from profilescope.extractors.base_extractor import BaseSectionExtractor

# Highest first.
DEGREE_LEVELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("doctorate", ("phd", "ph.d", "doctor", "doctorate", "dphil")),
    ("master", ("master", "mba", "m.sc", "msc", "m.s.", "m.a.", "meng")),
    ("bachelor", ("bachelor", "b.sc", "bsc", "b.s.", "b.a.", "beng", "licence")),
    ("associate", ("associate",)),
    ("certificate", ("certificate", "diploma")),
)


def degree_level(text: str) -> str | None:
    lower = text.lower()
    for level, markers in DEGREE_LEVELS:
        if any(m in lower for m in markers):
            return level
    return None


class EducationExtractor(BaseSectionExtractor):
    section = SectionName.EDUCATION

    def _read_school(self, item: Tag) -> dict[str, Any]:
        degree_line = item_reader.item_subtitle(item)
        degree, _, field = degree_line.partition(",")
        captions = item_reader.item_captions(item)
        start, end, current = text_analysis.parse_year_range(" ".join(captions))
        return {
            "school": item_reader.item_title(item),
            "degree": degree.strip(),
            "field": field.strip(),
            "level": degree_level(degree_line),
            "start_year": start,
            "end_year": end,
            "in_progress": current,
        }

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        schools = [self._read_school(i) for i in item_reader.item_nodes(region, self.profile)]
        levels = [s["level"] for s in schools if s["level"]]
        ranked = [name for name, _ in DEGREE_LEVELS]
        highest = min(levels, key=ranked.index) if levels else None
        return {"has_degree": bool(levels), "highest_degree": highest}

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        schools = []
        for item in item_reader.item_nodes(region, self.profile):
            school = self._read_school(item)
            school["description"] = item_reader.item_description(item)
            schools.append(school)
        return {
            "schools": schools,
            "fields_of_study": sorted({s["field"] for s in schools if s["field"]}),
        }
