# src/api/models.py — v1
"""API-level models: the serializable report handed to callers and the CLI."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from profilescope.ai.models import AIError, RecommendationSet
from profilescope.coordinator.analysis_coordinator import AnalysisResult, SectionError
from profilescope.coordinator.states import AnalysisState
from profilescope.core.models import CompletenessLevel, MissingItem, SectionName
from profilescope.scoring.quality import ScoreCap


class SectionSummary(BaseModel):
    exists: bool
    visible_count: int
    total_count: int
    earned: float
    weight: float


class QualitySummary(BaseModel):
    score: float
    raw_score: float
    applied_caps: list[ScoreCap] = Field(default_factory=list)
    recommendations: RecommendationSet = Field(default_factory=RecommendationSet)
    summary: str = ""
    provider: str = ""
    model: str = ""


class AnalysisReport(BaseModel):
    """Flat, JSON-friendly view of an AnalysisResult."""

    profile_id: str
    state: AnalysisState
    completeness_score: int
    completeness_level: CompletenessLevel
    sections: dict[SectionName, SectionSummary] = Field(default_factory=dict)
    missing_items: list[MissingItem] = Field(default_factory=list)
    quality: QualitySummary | None = None
    ai_error: AIError | None = None
    from_cache: bool = False
    stale: bool = False
    section_errors: list[SectionError] = Field(default_factory=list)
    completed_at: datetime

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisReport:
        sections: dict[SectionName, SectionSummary] = {}
        if result.record is not None:
            for name, section in result.record.sections.items():
                score = result.breakdown.per_section.get(name)
                sections[name] = SectionSummary(
                    exists=section.exists,
                    visible_count=section.visible_count,
                    total_count=section.total_count,
                    earned=score.earned if score else 0.0,
                    weight=score.weight if score else 0.0,
                )
        quality = None
        if result.quality is not None:
            structured = result.quality.structured
            quality = QualitySummary(
                score=result.quality.score,
                raw_score=result.quality.raw_score,
                applied_caps=list(result.quality.applied_caps),
                recommendations=structured.recommendations,
                summary=structured.summary,
                provider=structured.provider,
                model=structured.model,
            )
        return cls(
            profile_id=result.profile_id,
            state=result.state,
            completeness_score=result.breakdown.score,
            completeness_level=result.breakdown.level,
            sections=sections,
            missing_items=list(result.breakdown.missing_items),
            quality=quality,
            ai_error=result.ai_error,
            from_cache=result.from_cache,
            stale=result.stale,
            section_errors=list(result.section_errors),
            completed_at=result.completed_at,
        )
