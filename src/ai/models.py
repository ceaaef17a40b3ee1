# src/ai/models.py — v1
"""AI capability models: analysis context, structured result, typed errors."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profilescope.core.models import SectionName


class AIErrorType(str, Enum):
    AUTH = "AUTH"
    RATE_LIMIT = "RATE_LIMIT"
    NETWORK = "NETWORK"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


class AIError(BaseModel):
    """Typed AI failure, passed to the caller unmodified."""

    model_config = ConfigDict(frozen=True)

    type: AIErrorType
    message: str
    retry_after: float | None = None


class AnalysisContext(BaseModel):
    """What the AI should judge the profile against."""

    target_role: str = ""
    seniority_level: str = ""
    custom_instructions: str = ""


class Recommendation(BaseModel):
    what: str
    why: str = ""
    how: str = ""
    example: str | None = None


class RecommendationSet(BaseModel):
    critical: list[Recommendation] = Field(default_factory=list)
    important: list[Recommendation] = Field(default_factory=list)
    nice_to_have: list[Recommendation] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.critical) + len(self.important) + len(self.nice_to_have)


class SectionQuality(BaseModel):
    """Quality score for one section on a 0-10 scale."""

    score: float
    weight: float | None = None
    feedback: str = ""

    @field_validator("score")
    @classmethod
    def clamp_score(cls, v: float) -> float:
        return max(0.0, min(10.0, float(v)))


class StructuredResult(BaseModel):
    """Successful AI analysis."""

    overall_score: float
    section_scores: dict[SectionName, SectionQuality] = Field(default_factory=dict)
    recommendations: RecommendationSet = Field(default_factory=RecommendationSet)
    summary: str = ""
    provider: str = ""
    model: str = ""

    @field_validator("overall_score")
    @classmethod
    def clamp_overall(cls, v: float) -> float:
        return max(0.0, min(10.0, float(v)))
