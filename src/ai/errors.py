# src/ai/errors.py — v1
"""Map provider exceptions onto the typed AIError variants."""

from __future__ import annotations

import logging

from profilescope.ai.models import AIError, AIErrorType
from profilescope.llm.retry import LLMRetryExhausted, classify_error

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_S = 60.0

_TYPE_MAP: dict[str, AIErrorType] = {
    "auth": AIErrorType.AUTH,
    "rate_limit": AIErrorType.RATE_LIMIT,
    "timeout": AIErrorType.NETWORK,
    "connection": AIErrorType.NETWORK,
    "server_error": AIErrorType.SERVICE_UNAVAILABLE,
}


class MissingAPIKeyError(Exception):
    """No API key configured for the selected provider."""


def retry_after_seconds(error: BaseException) -> float | None:
    """Retry delay advertised by the provider (header or attribute)."""
    value = getattr(error, "retry_after", None)
    if value is None:
        headers = getattr(getattr(error, "response", None), "headers", None)
        if headers is not None:
            value = headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return None


def classify_ai_error(error: BaseException) -> AIError:
    """Convert any exception raised while talking to the provider into an AIError."""
    if isinstance(error, LLMRetryExhausted):
        error = error.last_error
    if isinstance(error, MissingAPIKeyError):
        return AIError(type=AIErrorType.AUTH, message=str(error) or "API key not configured")

    kind = classify_error(error)
    error_type = _TYPE_MAP.get(kind, AIErrorType.UNKNOWN)
    message = str(error) or type(error).__name__

    if error_type is AIErrorType.RATE_LIMIT:
        wait = retry_after_seconds(error)
        return AIError(
            type=error_type,
            message=message,
            retry_after=DEFAULT_RETRY_AFTER_S if wait is None else wait,
        )
    if error_type is AIErrorType.UNKNOWN:
        logger.debug("Unclassified AI error %s: %s", type(error).__name__, message)
    return AIError(type=error_type, message=message)
