# tests/unit/scoring/test_unit_quality.py — v1
"""Tests for scoring/quality.py — weighted AI score and independent caps."""

from __future__ import annotations

import pytest

from profilescope.ai.models import StructuredResult
from profilescope.core.models import SectionName
from profilescope.scoring.quality import (
    applicable_caps,
    apply_caps,
    assess_quality,
    weighted_section_score,
)

from conftest import make_record, present, structured_result


def strong_record():
    """A record for which no cap applies."""
    return make_record(
        headline=present("headline", char_count=60),
        about=present("about", char_count=900),
        experience=present("experience", visible=4),
        skills=present("skills", visible=5, total=20),
        recommendations=present("recommendations", visible=2),
    )


class TestWeightedScore:
    def test_renormalizes_over_scored_sections(self):
        result = structured_result(about=8.0, experience=6.0)
        assert weighted_section_score(result) == pytest.approx(7.0)

    def test_falls_back_to_overall(self):
        assert weighted_section_score(StructuredResult(overall_score=6.5)) == 6.5


class TestCaps:
    def test_no_caps_for_strong_record(self):
        assert applicable_caps(strong_record()) == []

    def test_about_absent_caps_at_7(self):
        record = make_record(
            headline=present("headline", char_count=60),
            experience=present("experience", visible=4),
            skills=present("skills", visible=5, total=20),
            recommendations=present("recommendations", visible=2),
        )
        quality = assess_quality(structured_result(about=10, experience=10, skills=10), record)
        assert quality.score <= 7.0
        assert quality.cap == 7.0

    def test_short_about_capped(self):
        record = make_record(
            headline=present("headline", char_count=60),
            about=present("about", char_count=80),
            experience=present("experience", visible=4),
            skills=present("skills", visible=5, total=20),
            recommendations=present("recommendations", visible=2),
        )
        assert [c.cap for c in applicable_caps(record)] == [7.0]

    def test_caps_are_independent_minimums(self):
        # Everything missing: every cap applies, the lowest wins.
        caps = applicable_caps(make_record())
        assert {c.section for c in caps} == {
            SectionName.ABOUT, SectionName.EXPERIENCE, SectionName.SKILLS,
            SectionName.HEADLINE, SectionName.RECOMMENDATIONS,
        }
        assert apply_caps(9.5, caps) == 6.0

    def test_cap_does_not_raise_low_score(self):
        quality = assess_quality(structured_result(about=3, experience=3, skills=3), make_record())
        assert quality.score == 3.0
        assert quality.raw_score == 3.0

    def test_uncapped_assessment(self):
        quality = assess_quality(structured_result(about=9, experience=8, skills=7), strong_record())
        assert quality.cap is None
        assert quality.applied_caps == []
        assert quality.score == quality.raw_score == pytest.approx(8.1)
