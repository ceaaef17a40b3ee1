# tests/integration/pipeline/test_int_analysis_pipeline.py — v1
"""End-to-end analysis of saved profile pages through the public facade.

No external services required: the AI capability is an LLMQualityAnalyzer
over a mocked LLM client, and both cache backends run on the temp dir.
"""

from __future__ import annotations

import pytest

from profilescope.ai.llm_analyzer import LLMQualityAnalyzer
from profilescope.ai.rate_limiter import SlidingWindowRateLimiter
from profilescope.api.facade import analyze_html
from profilescope.cache.cache_factory import create_cache_store
from profilescope.coordinator.states import AnalysisState
from profilescope.core.models import SectionName

from conftest import profile_page


@pytest.fixture(params=["json", "sqlite"])
def backend_settings(request, settings):
    return settings.model_copy(update={"cache_backend": request.param})


class TestCompletenessPipeline:
    @pytest.mark.asyncio
    async def test_sample_profile(self, backend_settings, sample_page):
        result = await analyze_html(sample_page, settings=backend_settings)
        assert result.score == 60
        assert result.breakdown.level == "fair"
        assert result.breakdown.earned(SectionName.SKILLS) == pytest.approx(15.0)
        assert result.breakdown.earned(SectionName.ABOUT) == pytest.approx(20.0)

    @pytest.mark.asyncio
    async def test_rerun_served_from_cache(self, backend_settings, sample_page):
        first = await analyze_html(sample_page, settings=backend_settings)
        second = await analyze_html(sample_page, settings=backend_settings)
        assert second.from_cache is True
        assert second.score == first.score
        entry = await create_cache_store(backend_settings).peek("jane-doe")
        assert entry.completeness.score == 60

    @pytest.mark.asyncio
    async def test_complete_profile(self, settings):
        page = profile_page(
            about_chars=1200, experience_items=3, skills_visible=3, skills_total=20,
            headline="Staff Platform Engineer building reliable data infrastructure at scale",
            photo=True,
        )
        result = await analyze_html(page, settings=settings)
        # Missing education, recommendations, certifications and projects.
        assert result.score == 75
        assert result.breakdown.level == "good"
        assert [m.section for m in result.breakdown.missing_items] == [
            SectionName.EDUCATION,
            SectionName.RECOMMENDATIONS,
            SectionName.CERTIFICATIONS,
            SectionName.PROJECTS,
        ]


class TestQualityPipeline:
    @pytest.mark.asyncio
    async def test_llm_analysis(self, settings, sample_page, mock_llm_client):
        analyzer = LLMQualityAnalyzer(
            settings, client=mock_llm_client, rate_limiter=SlidingWindowRateLimiter(10),
        )
        result = await analyze_html(
            sample_page, settings=settings, ai_enabled=True, analyzer=analyzer,
        )
        assert result.state is AnalysisState.DONE
        assert result.quality.structured.recommendations.critical[0].what == "Add a headline"
        assert result.quality.cap == 8.0
        mock_llm_client.complete.assert_awaited_once()

        cached = await analyze_html(
            sample_page, settings=settings, ai_enabled=True, analyzer=analyzer,
        )
        assert cached.from_cache is True
        assert cached.quality.score == result.quality.score
        mock_llm_client.complete.assert_awaited_once()
