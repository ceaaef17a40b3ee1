# tests/unit/ai/test_unit_ai_errors.py — v1
"""Tests for ai/errors.py and ai/rate_limiter.py."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from profilescope.ai.errors import (
    DEFAULT_RETRY_AFTER_S,
    MissingAPIKeyError,
    classify_ai_error,
    retry_after_seconds,
)
from profilescope.ai.models import AIErrorType
from profilescope.ai.rate_limiter import (
    PROVIDER_LIMITS,
    SlidingWindowRateLimiter,
    limiter_for,
)
from profilescope.llm.retry import LLMRetryExhausted


class AuthenticationError(Exception):
    status_code = 401


class RateLimitError(Exception):
    def __init__(self, message: str, headers: dict | None = None) -> None:
        super().__init__(message)
        self.status_code = 429
        self.response = SimpleNamespace(headers=headers or {})


class InternalServerError(Exception):
    status_code = 500


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestClassifyAIError:
    def test_auth(self):
        assert classify_ai_error(AuthenticationError("bad key")).type is AIErrorType.AUTH

    def test_missing_key_is_auth(self):
        error = classify_ai_error(MissingAPIKeyError("no key"))
        assert error.type is AIErrorType.AUTH
        assert error.message == "no key"

    def test_rate_limit_header(self):
        error = classify_ai_error(RateLimitError("429", {"retry-after": "12"}))
        assert error.type is AIErrorType.RATE_LIMIT
        assert error.retry_after == 12.0

    def test_rate_limit_default_wait(self):
        error = classify_ai_error(RateLimitError("429"))
        assert error.retry_after == DEFAULT_RETRY_AFTER_S

    @pytest.mark.parametrize("exc", [ConnectionError("reset"), TimeoutError("timed out")])
    def test_network(self, exc):
        assert classify_ai_error(exc).type is AIErrorType.NETWORK

    def test_service_unavailable(self):
        assert classify_ai_error(InternalServerError("oops")).type is AIErrorType.SERVICE_UNAVAILABLE

    def test_unknown(self):
        assert classify_ai_error(RuntimeError("mystery")).type is AIErrorType.UNKNOWN

    def test_unwraps_retry_exhausted(self):
        wrapped = LLMRetryExhausted("analysis", "server_error", 3, InternalServerError("oops"))
        error = classify_ai_error(wrapped)
        assert error.type is AIErrorType.SERVICE_UNAVAILABLE
        assert error.message == "oops"

    def test_retry_after_attribute(self):
        exc = RuntimeError("x")
        exc.retry_after = "7"  # type: ignore[attr-defined]
        assert retry_after_seconds(exc) == 7.0
        assert retry_after_seconds(RuntimeError("x")) is None


class TestSlidingWindowRateLimiter:
    def test_allows_up_to_limit(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(2, window_s=60, clock=clock)
        assert limiter.try_acquire() is None
        clock.now += 10
        assert limiter.try_acquire() is None
        clock.now += 5
        assert limiter.try_acquire() == pytest.approx(45.0)

    def test_window_slides(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(1, window_s=60, clock=clock)
        assert limiter.try_acquire() is None
        clock.now += 60
        assert limiter.try_acquire() is None

    def test_cooldown(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(5, clock=clock)
        limiter.set_cooldown(30)
        assert limiter.try_acquire() == pytest.approx(30.0)
        clock.now += 30
        assert limiter.try_acquire() is None

    def test_reset(self):
        limiter = SlidingWindowRateLimiter(1, clock=FakeClock())
        limiter.try_acquire()
        limiter.set_cooldown(10)
        limiter.reset()
        assert limiter.try_acquire() is None

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(0)

    def test_shared_per_provider(self):
        assert limiter_for("anthropic") is limiter_for("anthropic")
        assert limiter_for("anthropic").max_requests == PROVIDER_LIMITS["anthropic"]
        assert limiter_for("openai").max_requests == PROVIDER_LIMITS["openai"]
