# tests/unit/ai/test_unit_llm_analyzer.py — v1
"""Tests for ai/llm_analyzer.py — LLMQualityAnalyzer with a mocked client."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from profilescope.ai.llm_analyzer import LLMQualityAnalyzer, create_quality_analyzer
from profilescope.ai.models import AIError, AIErrorType, AnalysisContext, StructuredResult
from profilescope.ai.prompts import SYSTEM_PROMPT, AnalysisResponse
from profilescope.ai.rate_limiter import SlidingWindowRateLimiter
from profilescope.config.settings import Settings
from profilescope.core.models import SectionName
from profilescope.llm.retry import RetryConfig

PAYLOADS = {
    SectionName.ABOUT: {"exists": True, "char_count": 956, "text": "I build data platforms."},
}

NO_DELAY = {"server_error": RetryConfig(max_retries=2, base_delay_s=0.0, jitter=False)}


class RateLimitError(Exception):
    status_code = 429
    retry_after = 20


class InternalServerError(Exception):
    status_code = 503


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_analyzer(settings, client, max_requests: int = 5, clock=None):
    limiter = SlidingWindowRateLimiter(max_requests, clock=clock or FakeClock())
    analyzer = LLMQualityAnalyzer(
        settings, client=client, rate_limiter=limiter, retry_configs=NO_DELAY,
    )
    return analyzer, limiter


class TestLLMQualityAnalyzer:
    @pytest.mark.asyncio
    async def test_success(self, settings, mock_llm_client):
        analyzer, _ = make_analyzer(settings, mock_llm_client)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext(target_role="Data Engineer"))
        assert isinstance(result, StructuredResult)
        assert result.overall_score == 7
        assert result.section_scores[SectionName.ABOUT].score == 8
        assert result.recommendations.critical[0].what == "Add a headline"
        assert result.provider == "anthropic"

        kwargs = mock_llm_client.complete.await_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["response_format"] is AnalysisResponse
        assert "Target role: Data Engineer" in kwargs["messages"][0].content

    @pytest.mark.asyncio
    async def test_missing_api_key(self, tmp_path):
        settings = Settings(_env_file=None, cache_root=tmp_path, anthropic_api_key="")
        analyzer, _ = make_analyzer(settings, None)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert isinstance(result, AIError)
        assert result.type is AIErrorType.AUTH

    @pytest.mark.asyncio
    async def test_local_rate_limit(self, settings, mock_llm_client):
        analyzer, _ = make_analyzer(settings, mock_llm_client, max_requests=1)
        assert isinstance(await analyzer.analyze(PAYLOADS, AnalysisContext()), StructuredResult)
        refused = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert isinstance(refused, AIError)
        assert refused.type is AIErrorType.RATE_LIMIT
        assert refused.message == "Rate limit exceeded. Please wait 60 seconds."
        assert refused.retry_after == pytest.approx(60.0)
        assert mock_llm_client.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_provider_rate_limit_sets_cooldown(self, settings, mock_llm_client):
        mock_llm_client.complete = AsyncMock(side_effect=RateLimitError("Too many requests"))
        analyzer, limiter = make_analyzer(settings, mock_llm_client)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert result.type is AIErrorType.RATE_LIMIT
        assert result.retry_after == 20
        assert limiter.try_acquire() == pytest.approx(20.0)
        assert mock_llm_client.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_server_error_retried(self, settings, mock_llm_client, mock_llm_response):
        mock_llm_client.complete = AsyncMock(
            side_effect=[InternalServerError("overloaded"), mock_llm_response],
        )
        analyzer, _ = make_analyzer(settings, mock_llm_client)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert isinstance(result, StructuredResult)
        assert mock_llm_client.complete.await_count == 2

    @pytest.mark.asyncio
    async def test_server_error_exhausted(self, settings, mock_llm_client):
        mock_llm_client.complete = AsyncMock(side_effect=InternalServerError("overloaded"))
        analyzer, _ = make_analyzer(settings, mock_llm_client)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert result.type is AIErrorType.SERVICE_UNAVAILABLE
        assert mock_llm_client.complete.await_count == settings.ai_max_retries + 1

    @pytest.mark.asyncio
    async def test_malformed_response(self, settings, mock_llm_client, mock_llm_response):
        mock_llm_client.complete = AsyncMock(
            return_value=mock_llm_response.model_copy(update={"content": "I cannot help"}),
        )
        analyzer, _ = make_analyzer(settings, mock_llm_client)
        result = await analyzer.analyze(PAYLOADS, AnalysisContext())
        assert result.type is AIErrorType.UNKNOWN
        assert result.message.startswith("Malformed AI response")

    def test_factory(self, settings):
        analyzer = create_quality_analyzer(settings)
        assert isinstance(analyzer, LLMQualityAnalyzer)
        assert analyzer.provider_name == "anthropic"
