# src/scoring/quality.py — v1
"""Quality score (0-10) from AI section scores, bounded by critical-section caps.

Caps are independent upper bounds: the final score is the minimum of the
raw weighted score and every cap that applies to the record.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from profilescope.ai.models import StructuredResult
from profilescope.core.models import ProfileRecord, SectionName

AI_SECTION_WEIGHTS: dict[SectionName, float] = {
    SectionName.ABOUT: 0.30,
    SectionName.EXPERIENCE: 0.30,
    SectionName.SKILLS: 0.20,
    SectionName.HEADLINE: 0.10,
    SectionName.EDUCATION: 0.05,
    SectionName.RECOMMENDATIONS: 0.05,
}


@dataclass(frozen=True)
class CapRule:
    section: SectionName
    cap: float
    reason: str
    applies: Callable[[ProfileRecord], bool]


def _about_missing(record: ProfileRecord) -> bool:
    return not record.exists(SectionName.ABOUT) or record.field(
        SectionName.ABOUT, "char_count", 0) < 100


def _experience_missing(record: ProfileRecord) -> bool:
    return record.section(SectionName.EXPERIENCE).total_count == 0


def _skills_thin(record: ProfileRecord) -> bool:
    return record.section(SectionName.SKILLS).total_count < 5


def _headline_missing(record: ProfileRecord) -> bool:
    return not record.exists(SectionName.HEADLINE) or record.field(
        SectionName.HEADLINE, "char_count", 0) < 30


def _recommendations_missing(record: ProfileRecord) -> bool:
    return record.section(SectionName.RECOMMENDATIONS).total_count == 0


CAP_RULES: tuple[CapRule, ...] = (
    CapRule(SectionName.ABOUT, 7.0, "About section missing or under 100 characters", _about_missing),
    CapRule(SectionName.EXPERIENCE, 6.0, "No work experience listed", _experience_missing),
    CapRule(SectionName.SKILLS, 8.0, "Fewer than 5 skills listed", _skills_thin),
    CapRule(SectionName.HEADLINE, 8.0, "Headline missing or under 30 characters", _headline_missing),
    CapRule(SectionName.RECOMMENDATIONS, 8.0, "No recommendations", _recommendations_missing),
)


class ScoreCap(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: SectionName
    cap: float
    reason: str


class QualityAssessment(BaseModel):
    """AI result combined with the record's caps."""

    raw_score: float
    score: float
    cap: float | None = None
    applied_caps: list[ScoreCap] = Field(default_factory=list)
    structured: StructuredResult


def applicable_caps(record: ProfileRecord) -> list[ScoreCap]:
    return [
        ScoreCap(section=rule.section, cap=rule.cap, reason=rule.reason)
        for rule in CAP_RULES
        if rule.applies(record)
    ]


def apply_caps(raw_score: float, caps: list[ScoreCap]) -> float:
    return min([raw_score, *(c.cap for c in caps)])


def weighted_section_score(result: StructuredResult) -> float:
    """Weighted mean of section scores, renormalized over the sections scored."""
    total_weight = 0.0
    weighted = 0.0
    for name, weight in AI_SECTION_WEIGHTS.items():
        quality = result.section_scores.get(name)
        if quality is None:
            continue
        weighted += quality.score * weight
        total_weight += weight
    if total_weight == 0:
        return result.overall_score
    return weighted / total_weight


def assess_quality(result: StructuredResult, record: ProfileRecord) -> QualityAssessment:
    raw = round(weighted_section_score(result), 1)
    caps = applicable_caps(record)
    score = apply_caps(raw, caps)
    return QualityAssessment(
        raw_score=raw,
        score=score,
        cap=min((c.cap for c in caps), default=None),
        applied_caps=caps,
        structured=result,
    )
