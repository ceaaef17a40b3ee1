# src/extractors/projects_extractor.py — v1
"""Projects."""

from __future__ import annotations

from typing import Any

from bs4 import Tag

from profilescope.config.sections import SHOW_MORE_CONTROL_SELECTORS
from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.extractors import items as item_reader
from profilescope.extractors.base_extractor import BaseSectionExtractor


class ProjectsExtractor(BaseSectionExtractor):
    section = SectionName.PROJECTS
    expansion_selectors = SHOW_MORE_CONTROL_SELECTORS + (".pvs-list__footer-wrapper button",)

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        nodes = item_reader.item_nodes(region, self.profile)
        return {"has_descriptions": any(item_reader.item_description(n) for n in nodes)}

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        projects = [
            {
                "name": item_reader.item_title(item),
                "date": item_reader.item_subtitle(item),
                "description": item_reader.item_description(item),
                "url": item_reader.item_link(item),
            }
            for item in item_reader.item_nodes(region, self.profile)
        ]
        return {"projects": projects}
