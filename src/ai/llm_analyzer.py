# src/ai/llm_analyzer.py — v1
"""LLM-backed implementation of the quality-analysis capability."""

from __future__ import annotations

import logging
import math
from typing import Any

from profilescope.ai.base_analyzer import BaseQualityAnalyzer
from profilescope.ai.errors import MissingAPIKeyError, classify_ai_error
from profilescope.ai.models import (
    AIError,
    AIErrorType,
    AnalysisContext,
    StructuredResult,
)
from profilescope.ai.prompts import (
    SYSTEM_PROMPT,
    AnalysisResponse,
    build_analysis_prompt,
    parse_analysis_response,
)
from profilescope.ai.rate_limiter import SlidingWindowRateLimiter, limiter_for
from profilescope.config.settings import Settings
from profilescope.core.models import SectionName
from profilescope.llm.base_client import BaseLLMClient
from profilescope.llm.client_factory import create_client_from_settings
from profilescope.llm.models import Message
from profilescope.llm.retry import RetryConfig, with_retry

logger = logging.getLogger(__name__)


class LLMQualityAnalyzer(BaseQualityAnalyzer):
    """Sends deep section payloads to the configured provider.

    The client is created on first use so a missing SDK or API key surfaces
    as an AIError from ``analyze`` rather than at construction time.
    """

    def __init__(
        self,
        settings: Settings,
        client: BaseLLMClient | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._limiter = rate_limiter or limiter_for(settings.ai_provider)
        self._retry_configs = retry_configs

    @property
    def provider_name(self) -> str:
        if self._client is not None:
            return self._client.provider_name
        return self._settings.ai_provider

    def _get_client(self) -> BaseLLMClient:
        if self._client is None:
            if not self._settings.ai_api_key:
                raise MissingAPIKeyError(
                    f"API key not configured for provider {self._settings.ai_provider!r}"
                )
            self._client = create_client_from_settings(self._settings)
        return self._client

    async def analyze(
        self,
        section_payloads: dict[SectionName, dict[str, Any]],
        context: AnalysisContext,
    ) -> StructuredResult | AIError:
        try:
            client = self._get_client()
        except (MissingAPIKeyError, ImportError) as e:
            logger.warning("AI analysis unavailable: %s", e)
            return classify_ai_error(e)

        wait = self._limiter.try_acquire()
        if wait is not None:
            logger.info("AI request refused by local rate limit (%.1fs)", wait)
            return AIError(
                type=AIErrorType.RATE_LIMIT,
                message=f"Rate limit exceeded. Please wait {math.ceil(wait)} seconds.",
                retry_after=wait,
            )

        prompt = build_analysis_prompt(section_payloads, context)
        try:
            response = await with_retry(
                client.complete,
                label="quality_analysis",
                max_retries=self._settings.ai_max_retries,
                retry_configs=self._retry_configs,
                messages=[Message(role="user", content=prompt)],
                system=SYSTEM_PROMPT,
                max_tokens=self._settings.ai_max_tokens,
                temperature=self._settings.ai_temperature,
                response_format=AnalysisResponse,
            )
        except Exception as e:
            error = classify_ai_error(e)
            if error.type is AIErrorType.RATE_LIMIT and error.retry_after:
                self._limiter.set_cooldown(error.retry_after)
            logger.warning("AI analysis failed (%s): %s", error.type.value, error.message)
            return error

        logger.debug("AI response from %s: %d tokens in %dms",
                     client.provider_name, response.total_tokens, response.latency_ms)
        if response.truncated:
            logger.warning("AI response hit the token limit (%d output tokens)",
                           response.output_tokens)

        try:
            result = parse_analysis_response(
                response.content, provider=response.provider, model=response.model,
            )
        except (ValueError, TypeError) as e:
            logger.warning("AI response could not be parsed: %s", e)
            return AIError(type=AIErrorType.UNKNOWN, message=f"Malformed AI response: {e}")

        logger.info(
            "AI analysis complete: overall=%.1f, sections=%d, recommendations=%d",
            result.overall_score, len(result.section_scores), result.recommendations.total,
        )
        return result


def create_quality_analyzer(settings: Settings) -> BaseQualityAnalyzer:
    """Analyzer for the configured provider."""
    return LLMQualityAnalyzer(settings)
