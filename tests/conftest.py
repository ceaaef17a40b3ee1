# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides profile page builders, settings bound to a temp cache root, mock
LLM clients and a scripted quality analyzer. No network access: every
provider call is mocked.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from profilescope.ai.base_analyzer import BaseQualityAnalyzer
from profilescope.ai.models import (
    AIError,
    AIErrorType,
    AnalysisContext,
    SectionQuality,
    StructuredResult,
)
from profilescope.cache.models import CacheEntry
from profilescope.config.settings import Settings
from profilescope.core.models import SectionName, SectionResult
from profilescope.core.record_builder import ProfileRecordBuilder
from profilescope.dom.document import StaticDocument
from profilescope.llm.models import LLMResponse
from profilescope.scoring.completeness import CompletenessScorer

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# === PAGE BUILDERS ===


def about_text(n: int) -> str:
    """Exactly ``n`` characters of prose, no leading or trailing whitespace."""
    base = ("Engineer " * (n // 9 + 2))[:n]
    if base.endswith(" "):
        base = base[:-1] + "x"
    return base


def about_section(text: str) -> str:
    return (
        '<section class="artdeco-card">'
        '<div id="about" class="pv-profile-card__anchor"></div>'
        '<div class="pvs-header__container"><h2><span aria-hidden="true">About</span></h2></div>'
        '<div><div class="inline-show-more-text--is-collapsed">'
        f'<span aria-hidden="true">{text}</span>'
        "</div></div></section>"
    )


def experience_item(title: str = "Software Engineer", company: str = "Acme",
                    dates: str = "Jan 2020 - Present · 4 yrs") -> str:
    return (
        '<li class="artdeco-list__item">'
        '<div data-view-name="profile-component-entity">'
        f'<div class="t-bold"><span aria-hidden="true">{title}</span></div>'
        f'<span class="t-14 t-normal"><span aria-hidden="true">{company} · Full-time</span></span>'
        f'<span class="t-14 t-normal t-black--light"><span aria-hidden="true">{dates}</span></span>'
        "</div></li>"
    )


def experience_section(count: int) -> str:
    items = "".join(experience_item(title=f"Engineer {i}") for i in range(count))
    return (
        '<section class="artdeco-card">'
        '<div id="experience" class="pv-profile-card__anchor"></div>'
        '<div class="pvs-header__container"><h2><span aria-hidden="true">Experience</span></h2></div>'
        f"<ul>{items}</ul></section>"
    )


def skills_section(visible: int, total: int | None = None) -> str:
    names = ["Python", "SQL", "Kubernetes", "Go", "Rust", "Terraform", "Docker", "Kafka"]
    items = "".join(
        '<li class="artdeco-list__item">'
        '<a data-field="skill_card_skill_topic" href="#">'
        f'<span aria-hidden="true">{names[i % len(names)]} {i}</span></a></li>'
        for i in range(visible)
    )
    footer = ""
    if total is not None:
        footer = (
            '<div class="pvs-list__footer-wrapper">'
            '<a href="https://www.linkedin.com/in/jane-doe/details/skills/">'
            f"<span>Show all {total} skills</span></a></div>"
        )
    return (
        '<section class="artdeco-card">'
        '<div id="skills" class="pv-profile-card__anchor"></div>'
        '<div class="pvs-header__container"><h2><span aria-hidden="true">Skills</span></h2></div>'
        f"<ul>{items}</ul>{footer}</section>"
    )


def top_card(headline: str | None = None, photo: bool = False) -> str:
    parts = ['<div class="pv-top-card">']
    if photo:
        parts.append(
            '<div class="pv-top-card-profile-picture">'
            '<img src="https://media.example.com/jane.jpg" alt="Jane Doe profile photo"></div>'
        )
    parts.append("<h1>Jane Doe</h1>")
    if headline is not None:
        parts.append(f'<div class="text-body-medium">{headline}</div>')
    parts.append("</div>")
    return "".join(parts)


def profile_page(
    about_chars: int | None = None,
    experience_items: int = 0,
    skills_visible: int = 0,
    skills_total: int | None = None,
    headline: str | None = None,
    photo: bool = False,
    url: str = "https://www.linkedin.com/in/jane-doe/",
) -> str:
    """Rendered profile markup with only the requested sections present."""
    body = [top_card(headline=headline, photo=photo)]
    if about_chars is not None:
        body.append(about_section(about_text(about_chars)))
    if experience_items:
        body.append(experience_section(experience_items))
    if skills_visible or skills_total:
        body.append(skills_section(skills_visible, skills_total))
    return (
        "<html><head>"
        f'<link rel="canonical" href="{url}">'
        "</head><body><main>"
        + "".join(body)
        + "</main></body></html>"
    )


def make_record(profile_id: str = "jane-doe", **results: SectionResult):
    """Frozen ProfileRecord from keyword section results (others absent)."""
    builder = ProfileRecordBuilder(profile_id)
    for name, result in results.items():
        builder.set_section(SectionName(name), result)
    return builder.freeze(FIXED_NOW)


def present(name: str, visible: int = 1, total: int | None = None,
            **fields: Any) -> SectionResult:
    return SectionResult(
        section=SectionName(name),
        exists=True,
        visible_count=visible,
        total_count=visible if total is None else total,
        fields=fields,
    )


def make_entry(profile_id: str = "jane-doe", ttl_days: int = 7, char_count: int = 956,
               timestamp: datetime = FIXED_NOW) -> CacheEntry:
    """Cache entry for a record whose only section is About."""
    record = make_record(profile_id, about=present("about", char_count=char_count))
    return CacheEntry(
        profile_id=profile_id,
        profile_record=record,
        completeness=CompletenessScorer().score(record),
        timestamp=timestamp,
        ttl_days=ttl_days,
    )


# === FIXTURES: Settings + documents ===


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from .env with the cache under a temp dir."""
    return Settings(
        _env_file=None,
        cache_root=tmp_path / "cache",
        ai_enabled=False,
        anthropic_api_key="sk-test",
        section_wait_timeout_s=0.2,
        section_poll_interval_s=0.05,
        section_task_timeout_s=2.0,
        log_format="text",
    )


@pytest.fixture
def sample_page() -> str:
    """About 956 chars, 10 experiences, 2 of 53 skills shown."""
    return profile_page(about_chars=956, experience_items=10, skills_visible=2, skills_total=53)


@pytest.fixture
def sample_document(sample_page: str) -> StaticDocument:
    return StaticDocument(sample_page)


# === FIXTURES: Mock LLM ===


ANALYSIS_JSON = (
    '{"overall_score": 7, '
    '"section_scores": {"about": {"score": 8, "feedback": "Clear"}, '
    '"experience": {"score": 7}, "skills": {"score": 6}}, '
    '"recommendations": {"critical": [{"what": "Add a headline", "why": "First impression", '
    '"how": "Write 50+ characters"}], "important": [], "nice_to_have": []}, '
    '"summary": "Solid profile."}'
)


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock LLM response carrying a valid analysis."""
    return LLMResponse(
        content=ANALYSIS_JSON,
        input_tokens=1200,
        output_tokens=300,
        model="claude-sonnet-4-20250514",
        provider="anthropic",
        latency_ms=800,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "anthropic"
    client.model_name = "claude-sonnet-4-20250514"
    return client


# === FIXTURES: Scripted analyzer ===


class ScriptedAnalyzer(BaseQualityAnalyzer):
    """Returns queued outcomes in order; repeats the last one when exhausted."""

    def __init__(self, *outcomes: StructuredResult | AIError | Exception) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[dict[SectionName, dict[str, Any]]] = []
        self.contexts: list[AnalysisContext] = []

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def analyze(self, section_payloads, context):
        self.calls.append(section_payloads)
        self.contexts.append(context)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def structured_result(overall: float = 7.0, **section_scores: float) -> StructuredResult:
    scores = section_scores or {"about": 8.0, "experience": 7.0, "skills": 6.0}
    return StructuredResult(
        overall_score=overall,
        section_scores={SectionName(k): SectionQuality(score=v) for k, v in scores.items()},
        summary="Solid profile.",
        provider="scripted",
        model="test-model",
    )


@pytest.fixture
def good_analyzer() -> ScriptedAnalyzer:
    return ScriptedAnalyzer(structured_result())


@pytest.fixture
def failing_analyzer() -> ScriptedAnalyzer:
    return ScriptedAnalyzer(AIError(type=AIErrorType.SERVICE_UNAVAILABLE, message="overloaded"))
