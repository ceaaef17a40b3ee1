# tests/unit/config/test_unit_sections.py — v1
"""Tests for config/sections.py — section catalogue and anchor ids."""

from __future__ import annotations

from profilescope.config.sections import (
    SECTION_PROFILES,
    derived_anchor_ids,
    get_profile,
)
from profilescope.core.models import SectionName


class TestCatalogue:
    def test_every_section_has_profile(self):
        assert set(SECTION_PROFILES) == set(SectionName)

    def test_single_value_sections(self):
        singles = {n for n, p in SECTION_PROFILES.items() if p.single_value}
        assert singles == {SectionName.PHOTO, SectionName.HEADLINE, SectionName.ABOUT}

    def test_top_card_sections_skip_heading_search(self):
        assert get_profile(SectionName.PHOTO).heading_search is False
        assert get_profile(SectionName.HEADLINE).heading_search is False


class TestDerivedAnchorIds:
    def test_explicit_ids_first(self):
        ids = derived_anchor_ids(get_profile(SectionName.CERTIFICATIONS))
        assert ids[0] == "licenses_and_certifications"
        assert "licenses-and-certifications" in ids

    def test_no_duplicates(self):
        ids = derived_anchor_ids(get_profile(SectionName.SKILLS))
        assert len(ids) == len(set(ids))
        assert ids[0] == "skills"
