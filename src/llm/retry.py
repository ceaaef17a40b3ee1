# src/llm/retry.py — v1
"""Retry policy with exponential backoff for transient LLM failures.

Only connection problems, timeouts and 5xx/overloaded responses are
retried. Authentication and rate-limit errors are returned to the caller
on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class LLMRetryExhausted(Exception):
    """All retries exhausted for an LLM call."""

    def __init__(self, label: str, error_type: str, attempts: int, last_error: Exception):
        self.label = label
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"'{label}' failed after {attempts} attempts ({error_type}): {last_error}"
        )


@dataclass(frozen=True)
class RetryConfig:
    """Retry configuration for a specific error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "timeout": RetryConfig(max_retries=2, base_delay_s=1.0),
    "connection": RetryConfig(max_retries=2, base_delay_s=1.0),
    "server_error": RetryConfig(max_retries=2, base_delay_s=2.0),
}

_SERVER_CODES = ("500", "502", "503", "504", "529")


def status_code(error: BaseException) -> int | None:
    """HTTP status carried by an SDK error, if any."""
    code = getattr(error, "status_code", None)
    if isinstance(code, int):
        return code
    response = getattr(error, "response", None)
    code = getattr(response, "status_code", None)
    return code if isinstance(code, int) else None


def classify_error(error: BaseException) -> str:
    """Classify an exception into a retry error type."""
    status = status_code(error)
    msg = str(error).lower()
    name = type(error).__name__.lower()

    if status in (401, 403) or "authentication" in name or "permissiondenied" in name:
        return "auth"
    if status == 429 or "ratelimit" in name or "rate limit" in msg or "429" in msg:
        return "rate_limit"
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)) or "timeout" in name or "timed out" in msg:
        return "timeout"
    if isinstance(error, ConnectionError) or "connection" in name:
        return "connection"
    if (status is not None and status >= 500) or "overloaded" in msg or any(
        c in msg for c in _SERVER_CODES
    ):
        return "server_error"
    if "json" in msg or "parse" in msg or "decode" in msg:
        return "parse_error"
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    """Compute delay for a given attempt (0-based)."""
    delay = config.base_delay_s * (config.backoff_factor ** attempt)
    if config.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    label: str = "llm",
    max_retries: int | None = None,
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Args:
        max_retries: Overrides every config's retry count (AI_MAX_RETRIES).

    Raises:
        LLMRetryExhausted: On a non-retryable error or once retries run out.
    """
    configs = retry_configs or DEFAULT_RETRY_CONFIGS
    attempts = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            error_type = classify_error(e)
            attempts += 1
            config = configs.get(error_type)
            limit = config.max_retries if config and max_retries is None else max_retries

            if config is None or attempts > (limit or 0):
                raise LLMRetryExhausted(label, error_type, attempts, e) from e

            delay = _compute_delay(config, attempts - 1)
            logger.warning(
                "'%s' %s (attempt %d/%d), retrying in %.1fs",
                label, error_type, attempts, limit, delay,
            )
            await asyncio.sleep(delay)
