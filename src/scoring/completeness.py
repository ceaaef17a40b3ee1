# src/scoring/completeness.py — v1
"""Deterministic weighted completeness score.

Each section has a fixed weight. A present section earns
``weight * min(1, measure / target)``; an absent one earns nothing. The
total is normalized to 0-100 and rounded half-up for display, while the
breakdown keeps unrounded per-section points.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from profilescope.core.models import (
    CompletenessBreakdown,
    CompletenessLevel,
    ExtractionDepth,
    MissingItem,
    Priority,
    ProfileRecord,
    SectionName,
    SectionResult,
    SectionScore,
)

SECTION_WEIGHTS: dict[SectionName, float] = {
    SectionName.PHOTO: 5,
    SectionName.HEADLINE: 10,
    SectionName.ABOUT: 20,
    SectionName.EXPERIENCE: 25,
    SectionName.SKILLS: 15,
    SectionName.EDUCATION: 10,
    SectionName.RECOMMENDATIONS: 10,
    SectionName.CERTIFICATIONS: 3,
    SectionName.PROJECTS: 2,
}

LEVEL_THRESHOLDS: tuple[tuple[float, CompletenessLevel], ...] = (
    (90, "excellent"),
    (75, "good"),
    (60, "fair"),
    (40, "needs_work"),
)


def _chars(result: SectionResult) -> float:
    # Scan-depth results carry no text measurements; presence counts as full.
    if result.depth is ExtractionDepth.SCAN:
        return math.inf
    return float(result.fields.get("char_count", 0))


def _items(result: SectionResult) -> float:
    return float(result.total_count)


@dataclass(frozen=True)
class FillRule:
    """How a present section's fill ratio is measured and explained."""

    target: float
    measure: Callable[[SectionResult], float]
    message: Callable[[SectionResult, float], str]


def _headline_message(result: SectionResult, measured: float) -> str:
    if measured < 30:
        return "Expand your headline (minimum 50 characters)"
    if result.fields.get("is_generic"):
        return "Make your headline more specific and value-focused"
    return "Optimize your headline with keywords"


def _about_message(result: SectionResult, measured: float) -> str:
    if measured == 0:
        return "Add an About section"
    if measured < 400:
        return "Expand your About section (aim for 800+ characters)"
    return "Add more detail to your About section"


def _experience_message(result: SectionResult, measured: float) -> str:
    if measured == 0:
        return "Add your work experience"
    return "Add more work experiences (at least 2)"


def _skills_message(result: SectionResult, measured: float) -> str:
    if measured == 0:
        return "Add relevant skills"
    if measured < 5:
        return "Add more skills (aim for 15+)"
    return f"Add {15 - int(measured)} more skills"


FILL_RULES: dict[SectionName, FillRule] = {
    SectionName.PHOTO: FillRule(1, lambda r: 1.0, lambda r, m: "Add a professional photo"),
    SectionName.HEADLINE: FillRule(50, _chars, _headline_message),
    SectionName.ABOUT: FillRule(800, _chars, _about_message),
    SectionName.EXPERIENCE: FillRule(2, _items, _experience_message),
    SectionName.SKILLS: FillRule(15, _items, _skills_message),
    SectionName.EDUCATION: FillRule(1, _items, lambda r, m: "Add your education"),
    SectionName.RECOMMENDATIONS: FillRule(
        1, _items, lambda r, m: "Request at least one recommendation",
    ),
    SectionName.CERTIFICATIONS: FillRule(1, _items, lambda r, m: "Add relevant certifications"),
    SectionName.PROJECTS: FillRule(1, _items, lambda r, m: "Showcase projects you've worked on"),
}

ABSENT_MESSAGES: dict[SectionName, str] = {
    SectionName.PHOTO: "Add a professional photo",
    SectionName.HEADLINE: "Add a professional headline",
    SectionName.ABOUT: "Add an About section",
    SectionName.EXPERIENCE: "Add your work experience",
    SectionName.SKILLS: "Add relevant skills",
    SectionName.EDUCATION: "Add your education",
    SectionName.RECOMMENDATIONS: "Request at least one recommendation",
    SectionName.CERTIFICATIONS: "Add relevant certifications",
    SectionName.PROJECTS: "Showcase projects you've worked on",
}


def priority_for(weight: float) -> Priority:
    if weight >= 20:
        return "critical"
    if weight >= 10:
        return "high"
    if weight >= 5:
        return "medium"
    return "low"


def level_for(score: float) -> CompletenessLevel:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "poor"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CompletenessScorer:
    """Pure ProfileRecord -> CompletenessBreakdown function."""

    def __init__(
        self,
        weights: Mapping[SectionName, float] | None = None,
        rules: Mapping[SectionName, FillRule] | None = None,
    ) -> None:
        self._weights = dict(weights if weights is not None else SECTION_WEIGHTS)
        self._rules = dict(rules if rules is not None else FILL_RULES)
        missing = set(self._weights) - set(self._rules)
        if missing:
            raise ValueError(f"No fill rule for: {sorted(m.value for m in missing)}")

    @property
    def total_weight(self) -> float:
        return float(sum(self._weights.values()))

    def fill_ratio(self, result: SectionResult) -> float:
        if not result.exists:
            return 0.0
        rule = self._rules[result.section]
        return min(1.0, max(0.0, rule.measure(result) / rule.target))

    def score(self, record: ProfileRecord) -> CompletenessBreakdown:
        per_section: dict[SectionName, SectionScore] = {}
        missing: list[MissingItem] = []
        earned_total = 0.0

        for name in SectionName:
            if name not in self._weights:
                continue
            weight = float(self._weights[name])
            result = record.section(name)
            ratio = self.fill_ratio(result)
            earned = weight * ratio
            earned_total += earned
            per_section[name] = SectionScore(weight=weight, earned=earned, fill_ratio=ratio)
            if ratio < 1.0:
                missing.append(MissingItem(
                    section=name,
                    message=self._message(result),
                    impact_points=weight - earned,
                    priority=priority_for(weight),
                ))

        # Stable sort: ties keep section order.
        missing.sort(key=lambda item: -item.impact_points)
        total_weight = self.total_weight
        raw = (earned_total / total_weight * 100.0) if total_weight else 0.0
        score = round_half_up(raw)
        return CompletenessBreakdown(
            score=score,
            raw_score=raw,
            per_section=per_section,
            missing_items=missing,
            level=level_for(score),
        )

    def _message(self, result: SectionResult) -> str:
        if not result.exists:
            return ABSENT_MESSAGES.get(result.section, f"Add {result.section.value} section")
        rule = self._rules[result.section]
        return rule.message(result, rule.measure(result))
