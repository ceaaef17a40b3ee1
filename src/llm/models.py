# src/llm/models.py — v1
"""Provider-neutral request and response types for the analysis call."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

# Stop reasons meaning the output hit the token limit (anthropic, openai).
TRUNCATION_REASONS = frozenset({"max_tokens", "length"})


class Message(BaseModel):
    """One conversation turn. The system prompt is passed separately."""

    role: Literal["user", "assistant"]
    content: str


class LLMResponse(BaseModel):
    """Completion text plus the accounting the analyzer logs."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    stop_reason: str | None = None

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def truncated(self) -> bool:
        return self.stop_reason in TRUNCATION_REASONS
