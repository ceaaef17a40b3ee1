# tests/unit/extractors/test_unit_extractors.py — v1
"""Tests for extractors/ — the scan / extract / extract_deep phases."""

from __future__ import annotations

import pytest

from profilescope.core.models import ExtractionDepth, SectionName
from profilescope.dom.document import StaticDocument
from profilescope.extractors.about_extractor import AboutExtractor, clean_about_text
from profilescope.extractors.experience_extractor import (
    ExperienceExtractor,
    career_progression,
)
from profilescope.extractors.headline_extractor import HeadlineExtractor
from profilescope.extractors.photo_extractor import PhotoExtractor
from profilescope.extractors.skills_extractor import SkillsExtractor

from conftest import profile_page


class TestAboutExtractor:
    @pytest.mark.asyncio
    async def test_scan_single_value(self):
        document = StaticDocument(profile_page(about_chars=956))
        scan = await AboutExtractor().scan(document)
        assert scan.exists
        assert (scan.visible_count, scan.total_count, scan.count_source) == (1, 1, "single")

    @pytest.mark.asyncio
    async def test_extract_char_count(self):
        document = StaticDocument(profile_page(about_chars=956))
        result = await AboutExtractor().extract(document)
        assert result.depth is ExtractionDepth.SHALLOW
        assert result.fields["char_count"] == 956
        assert result.fields["has_show_more"] is False
        assert result.details == {}

    @pytest.mark.asyncio
    async def test_extract_deep_adds_payload(self):
        document = StaticDocument(profile_page(about_chars=300))
        result = await AboutExtractor().extract_deep(document)
        assert result.depth is ExtractionDepth.DEEP
        assert result.details["full_char_count"] == 300
        assert result.details["text"].startswith("Engineer")

    @pytest.mark.asyncio
    async def test_absent_at_every_phase(self):
        document = StaticDocument(profile_page())
        extractor = AboutExtractor()
        assert not (await extractor.scan(document)).exists
        assert not (await extractor.extract(document)).exists
        deep = await extractor.extract_deep(document)
        assert not deep.exists
        assert deep.depth is ExtractionDepth.DEEP

    def test_clean_about_text(self):
        assert clean_about_text("About I build things …see more") == "I build things"


class TestSkillsExtractor:
    @pytest.mark.asyncio
    async def test_counts_from_control(self):
        document = StaticDocument(profile_page(skills_visible=2, skills_total=53))
        result = await SkillsExtractor().extract(document)
        assert (result.visible_count, result.total_count) == (2, 53)
        assert result.fields["has_more"] is True
        assert result.fields["top_skills"] == ["Python 0", "SQL 1"]

    @pytest.mark.asyncio
    async def test_counts_from_visible(self):
        document = StaticDocument(profile_page(skills_visible=5))
        scan = await SkillsExtractor().scan(document)
        assert (scan.visible_count, scan.total_count, scan.count_source) == (5, 5, "visible")

    @pytest.mark.asyncio
    async def test_deep_lists_skills(self):
        document = StaticDocument(profile_page(skills_visible=3, skills_total=10))
        result = await SkillsExtractor().extract_deep(document)
        assert result.details["listed_count"] == 3
        assert result.details["total_endorsements"] == 0


class TestExperienceExtractor:
    @pytest.mark.asyncio
    async def test_fields(self):
        document = StaticDocument(profile_page(experience_items=3))
        result = await ExperienceExtractor().extract(document)
        assert result.total_count == 3
        assert result.fields["has_current_role"] is True
        assert result.fields["total_months"] == 3 * 48

    @pytest.mark.asyncio
    async def test_deep_roles(self):
        document = StaticDocument(profile_page(experience_items=2))
        result = await ExperienceExtractor().extract_deep(document)
        roles = result.details["roles"]
        assert [r["title"] for r in roles] == ["Engineer 0", "Engineer 1"]
        assert roles[0]["company"] == "Acme"
        assert roles[0]["employment_type"] == "Full-time"
        assert roles[0]["is_current"] is True

    def test_career_progression(self):
        assert career_progression(["Senior Engineer", "Junior Engineer"]) == "upward"
        assert career_progression(["Engineer"]) == "insufficient_data"


class TestTopCard:
    @pytest.mark.asyncio
    async def test_headline(self):
        document = StaticDocument(profile_page(headline="Senior Engineer | Data platforms"))
        result = await HeadlineExtractor().extract(document)
        assert result.exists
        assert result.fields["char_count"] == len("Senior Engineer | Data platforms")
        assert result.fields["has_keywords"] is True
        assert result.fields["has_pipe"] is True

    @pytest.mark.asyncio
    async def test_photo_present(self):
        result = await PhotoExtractor().extract_deep(StaticDocument(profile_page(photo=True)))
        assert result.exists
        assert result.details["photo_url"] == "https://media.example.com/jane.jpg"

    @pytest.mark.asyncio
    async def test_placeholder_photo_absent(self):
        html = profile_page(photo=True).replace("jane.jpg", "ghost-person.png")
        scan = await PhotoExtractor().scan(StaticDocument(html))
        assert not scan.exists
