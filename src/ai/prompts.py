# src/ai/prompts.py — v1
"""Prompt construction and response parsing for profile quality analysis."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from profilescope.ai.models import (
    AnalysisContext,
    Recommendation,
    RecommendationSet,
    SectionQuality,
    StructuredResult,
)
from profilescope.core.models import SectionName

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 3000
# Bulky payload keys that add tokens without adding signal.
_OMITTED_KEYS = frozenset({"chunks", "text_digest"})

SYSTEM_PROMPT = (
    "You are an extremely experienced career coach with 20+ years of "
    "experience optimizing professional profiles for maximum impact. "
    "Be honest but constructive. Respond only with valid JSON."
)

ANALYSIS_TEMPLATE = """Analyze this professional profile for someone targeting the role below.

Target role: {target_role}
Seniority level: {seniority_level}
{custom_block}
For every section present, first acknowledge what is working, then identify
the gaps preventing this person from landing the target role.

PROFILE SECTIONS:
{sections}

Provide your analysis in EXACT JSON format:

{{
  "overall_score": 7,
  "section_scores": {{
    "about": {{"score": 6, "feedback": "Clear story, but no quantified impact."}}
  }},
  "recommendations": {{
    "critical": [{{"what": "...", "why": "...", "how": "...", "example": "..."}}],
    "important": [],
    "nice_to_have": []
  }},
  "summary": "One paragraph overall assessment."
}}

IMPORTANT:
- Scores are 0-10 where 10 is perfect for landing the target role
- Only score sections from this list: {section_names}
- Each recommendation must have specific "how" guidance, not generic advice
"""


class AnalysisResponse(BaseModel):
    """Schema requested from the provider for structured output."""

    overall_score: float
    section_scores: dict[str, SectionQuality] = Field(default_factory=dict)
    recommendations: RecommendationSet = Field(default_factory=RecommendationSet)
    summary: str = ""


def _compact(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_TEXT_CHARS:
        return value[:MAX_TEXT_CHARS] + "…"
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items() if k not in _OMITTED_KEYS}
    if isinstance(value, list):
        return [_compact(v) for v in value]
    return value


def build_analysis_prompt(
    section_payloads: dict[SectionName, dict[str, Any]],
    context: AnalysisContext,
) -> str:
    """Render the analysis prompt from deep payloads of the present sections."""
    blocks = []
    present = []
    for name, payload in section_payloads.items():
        if not payload.get("exists", True):
            continue
        present.append(name.value)
        body = json.dumps(_compact(payload), indent=2, ensure_ascii=False, default=str)
        blocks.append(f"{name.value.upper()}:\n{body}")
    custom = context.custom_instructions.strip()
    return ANALYSIS_TEMPLATE.format(
        target_role=context.target_role or "general professional",
        seniority_level=context.seniority_level or "any level",
        custom_block=f"Additional context: {custom}\n" if custom else "",
        sections="\n\n".join(blocks) or "(no sections found)",
        section_names=", ".join(present) or "(none)",
    )


def _strip_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [ln for ln in lines if not ln.strip().startswith("```")]
        text = "\n".join(lines)
    return text


def _build_recommendation(raw: Any) -> Recommendation | None:
    if isinstance(raw, str):
        raw = {"what": raw}
    if not isinstance(raw, dict) or not raw.get("what"):
        logger.debug("Skipping malformed recommendation: %r", raw)
        return None
    return Recommendation(
        what=str(raw["what"]),
        why=str(raw.get("why", "")),
        how=str(raw.get("how", "")),
        example=str(raw["example"]) if raw.get("example") else None,
    )


def _build_recommendations(raw: Any) -> RecommendationSet:
    if not isinstance(raw, dict):
        return RecommendationSet()
    groups: dict[str, list[Recommendation]] = {}
    for key, source in (
        ("critical", raw.get("critical")),
        ("important", raw.get("important")),
        ("nice_to_have", raw.get("nice_to_have", raw.get("niceToHave"))),
    ):
        items = [_build_recommendation(r) for r in source or []]
        groups[key] = [r for r in items if r is not None]
    return RecommendationSet(**groups)


def _build_section_scores(raw: Any) -> dict[SectionName, SectionQuality]:
    scores: dict[SectionName, SectionQuality] = {}
    if not isinstance(raw, dict):
        return scores
    for key, value in raw.items():
        try:
            name = SectionName(str(key).lower())
        except ValueError:
            logger.debug("Ignoring score for unknown section %r", key)
            continue
        if isinstance(value, (int, float)):
            value = {"score": value}
        if not isinstance(value, dict) or "score" not in value:
            continue
        scores[name] = SectionQuality(
            score=float(value["score"]),
            weight=value.get("weight"),
            feedback=str(value.get("feedback", "")),
        )
    return scores


def parse_analysis_response(content: str, provider: str = "", model: str = "") -> StructuredResult:
    """Parse a provider response into a StructuredResult.

    Raises:
        ValueError: If the content is not a JSON object with an overall score.
    """
    parsed = json.loads(_strip_fences(content))
    if not isinstance(parsed, dict):
        raise ValueError("AI response is not a JSON object")
    if "overall_score" not in parsed:
        raise ValueError("AI response has no overall_score")
    return StructuredResult(
        overall_score=float(parsed["overall_score"]),
        section_scores=_build_section_scores(parsed.get("section_scores")),
        recommendations=_build_recommendations(parsed.get("recommendations")),
        summary=str(parsed.get("summary", "")),
        provider=provider,
        model=model,
    )
