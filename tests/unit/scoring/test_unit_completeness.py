# tests/unit/scoring/test_unit_completeness.py — v1
"""Tests for scoring/completeness.py — weights, fill ratios, missing items."""

from __future__ import annotations

import pytest

from profilescope.core.models import SectionName, SectionResult
from profilescope.scoring.completeness import (
    SECTION_WEIGHTS,
    CompletenessScorer,
    level_for,
    priority_for,
    round_half_up,
)

from conftest import make_record, present


@pytest.fixture
def scorer() -> CompletenessScorer:
    return CompletenessScorer()


class TestWeights:
    def test_weights_total_100(self):
        assert sum(SECTION_WEIGHTS.values()) == 100

    def test_featured_not_scored(self):
        assert SectionName.FEATURED not in SECTION_WEIGHTS


class TestScore:
    def test_empty_record_scores_zero(self, scorer):
        breakdown = scorer.score(make_record())
        assert breakdown.score == 0
        assert breakdown.level == "poor"
        assert len(breakdown.missing_items) == len(SECTION_WEIGHTS)

    def test_sample_profile(self, scorer):
        record = make_record(
            about=present("about", char_count=956),
            experience=present("experience", visible=10),
            skills=present("skills", visible=2, total=53),
        )
        breakdown = scorer.score(record)
        assert breakdown.score == 60
        assert breakdown.earned(SectionName.SKILLS) == 15
        assert breakdown.level == "fair"

    def test_partial_fill(self, scorer):
        record = make_record(about=present("about", char_count=400))
        breakdown = scorer.score(record)
        assert breakdown.earned(SectionName.ABOUT) == pytest.approx(10.0)
        assert breakdown.per_section[SectionName.ABOUT].fill_ratio == pytest.approx(0.5)
        assert breakdown.score == 10

    def test_skills_use_total_not_visible(self, scorer):
        record = make_record(skills=present("skills", visible=3, total=6))
        assert scorer.score(record).earned(SectionName.SKILLS) == pytest.approx(6.0)

    def test_absent_earns_nothing(self, scorer):
        assert scorer.fill_ratio(SectionResult.absent(SectionName.PHOTO)) == 0.0

    def test_scan_depth_counts_presence(self, scorer):
        record = make_record(about=SectionResult(
            section=SectionName.ABOUT, exists=True, visible_count=1, total_count=1,
            depth="scan",
        ))
        assert scorer.score(record).earned(SectionName.ABOUT) == 20

    def test_pure(self, scorer):
        record = make_record(skills=present("skills", visible=2, total=53))
        assert scorer.score(record) == scorer.score(record)


class TestMissingItems:
    def test_sorted_by_impact_then_section_order(self, scorer):
        items = scorer.score(make_record()).missing_items
        impacts = [i.impact_points for i in items]
        assert impacts == sorted(impacts, reverse=True)
        # Ties keep section order.
        tied = [i.section for i in items if i.impact_points == 10]
        assert tied == [SectionName.HEADLINE, SectionName.EDUCATION, SectionName.RECOMMENDATIONS]

    def test_full_sections_not_listed(self, scorer):
        record = make_record(experience=present("experience", visible=3))
        sections = {i.section for i in scorer.score(record).missing_items}
        assert SectionName.EXPERIENCE not in sections

    def test_messages(self, scorer):
        record = make_record(
            about=present("about", char_count=120),
            skills=present("skills", visible=8),
        )
        by_section = {i.section: i for i in scorer.score(record).missing_items}
        assert by_section[SectionName.ABOUT].message.startswith("Expand your About")
        assert by_section[SectionName.SKILLS].message == "Add 7 more skills"
        assert by_section[SectionName.PHOTO].message == "Add a professional photo"
        assert by_section[SectionName.ABOUT].priority == "critical"


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [(59.5, 60), (59.49, 59), (0.5, 1), (0.0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_levels(self):
        assert level_for(90) == "excellent"
        assert level_for(75) == "good"
        assert level_for(40) == "needs_work"
        assert level_for(39) == "poor"

    def test_priorities(self):
        assert priority_for(25) == "critical"
        assert priority_for(10) == "high"
        assert priority_for(5) == "medium"
        assert priority_for(2) == "low"

    def test_rules_required_for_weights(self):
        with pytest.raises(ValueError, match="No fill rule"):
            CompletenessScorer(weights={SectionName.FEATURED: 5})
