# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

Section results, the canonical profile record and the completeness
breakdown. No module redefines these types; all imports come from
core.models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


# === SECTIONS ===


class SectionName(str, Enum):
    """Logical profile sections. Declaration order is the registry order."""

    PHOTO = "photo"
    HEADLINE = "headline"
    ABOUT = "about"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    RECOMMENDATIONS = "recommendations"
    CERTIFICATIONS = "certifications"
    PROJECTS = "projects"
    FEATURED = "featured"


class ExtractionDepth(str, Enum):
    SCAN = "scan"
    SHALLOW = "shallow"
    DEEP = "deep"


CountSource = Literal["control", "text", "visible", "single", "none"]


def _check_counts(exists: bool, visible: int, total: int) -> None:
    if visible < 0:
        raise ValueError(f"visible_count must be >= 0 (got {visible})")
    if total < visible:
        raise ValueError(
            f"total_count ({total}) must be >= visible_count ({visible})"
        )
    if not exists and (visible or total):
        raise ValueError("absent section must have zero counts")


class ScanResult(BaseModel):
    """Cheapest view of a section: presence and item counts only."""

    model_config = ConfigDict(frozen=True)

    section: SectionName
    exists: bool
    visible_count: int = 0
    total_count: int = 0
    count_source: CountSource = "none"

    @model_validator(mode="after")
    def _validate_counts(self) -> ScanResult:
        _check_counts(self.exists, self.visible_count, self.total_count)
        return self

    @classmethod
    def absent(cls, section: SectionName) -> ScanResult:
        return cls(section=section, exists=False)


class SectionResult(BaseModel):
    """Immutable result of one extractor run for one section.

    ``fields`` holds the normalized values needed for completeness scoring
    and is the part covered by the content hash. ``details`` holds the
    deep payload (full text, itemized entries) and is only populated at
    DEEP depth. A deeper run supersedes a result, it never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    section: SectionName
    exists: bool
    visible_count: int = 0
    total_count: int = 0
    fields: dict[str, Any] = Field(default_factory=dict)
    details: dict[str, Any] = Field(default_factory=dict)
    depth: ExtractionDepth = ExtractionDepth.SHALLOW

    @model_validator(mode="after")
    def _validate_invariants(self) -> SectionResult:
        _check_counts(self.exists, self.visible_count, self.total_count)
        if not self.exists and (self.fields or self.details):
            raise ValueError("absent section must have empty fields")
        if self.details and self.depth is not ExtractionDepth.DEEP:
            raise ValueError("details are only produced at DEEP depth")
        return self

    @classmethod
    def absent(
        cls,
        section: SectionName,
        depth: ExtractionDepth = ExtractionDepth.SHALLOW,
    ) -> SectionResult:
        return cls(section=section, exists=False, depth=depth)

    @classmethod
    def from_scan(cls, scan: ScanResult) -> SectionResult:
        """Wrap a scan as a SCAN-depth result (used for early estimates)."""
        return cls(
            section=scan.section,
            exists=scan.exists,
            visible_count=scan.visible_count,
            total_count=scan.total_count,
            depth=ExtractionDepth.SCAN,
        )

    def deepen(self, details: dict[str, Any]) -> SectionResult:
        """Return a new DEEP result extending this one with a deep payload."""
        return SectionResult(
            section=self.section,
            exists=self.exists,
            visible_count=self.visible_count,
            total_count=self.total_count,
            fields=dict(self.fields),
            details=dict(details) if self.exists else {},
            depth=ExtractionDepth.DEEP,
        )

    def payload(self) -> dict[str, Any]:
        """Flattened view handed to the AI capability."""
        return {
            "exists": self.exists,
            "visible_count": self.visible_count,
            "total_count": self.total_count,
            **self.fields,
            **self.details,
        }


# === PROFILE RECORD ===


class ProfileRecord(BaseModel):
    """Canonical, extractor-agnostic aggregate of all section results."""

    model_config = ConfigDict(frozen=True)

    profile_id: str
    sections: dict[SectionName, SectionResult]
    content_hash: str
    extracted_at: datetime

    def section(self, name: SectionName) -> SectionResult:
        """Result for ``name``; sections never extracted read as absent."""
        result = self.sections.get(name)
        if result is None:
            return SectionResult.absent(name)
        return result

    def exists(self, name: SectionName) -> bool:
        return self.section(name).exists

    def field(self, name: SectionName, key: str, default: Any = None) -> Any:
        return self.section(name).fields.get(key, default)


# === COMPLETENESS ===


Priority = Literal["critical", "high", "medium", "low"]
CompletenessLevel = Literal["excellent", "good", "fair", "needs_work", "poor"]


class SectionScore(BaseModel):
    """Unrounded points for one section."""

    model_config = ConfigDict(frozen=True)

    weight: float
    earned: float
    fill_ratio: float


class MissingItem(BaseModel):
    """A section below full credit and the points recoverable by fixing it."""

    model_config = ConfigDict(frozen=True)

    section: SectionName
    message: str
    impact_points: float
    priority: Priority


class CompletenessBreakdown(BaseModel):
    """Deterministic completeness score derived from a ProfileRecord."""

    model_config = ConfigDict(frozen=True)

    score: int
    raw_score: float
    per_section: dict[SectionName, SectionScore]
    missing_items: list[MissingItem]
    level: CompletenessLevel

    def earned(self, name: SectionName) -> float:
        entry = self.per_section.get(name)
        return entry.earned if entry else 0.0
