# src/llm/base_client.py — v1
"""Abstract LLM client used by the quality analyzer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from profilescope.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """One provider/model pair behind a single completion call."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.3,
        response_format: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Run one completion.

        With ``response_format`` the provider is asked for JSON matching the
        model's schema and ``LLMResponse.content`` holds that JSON text.
        Provider SDK exceptions propagate unchanged; the caller classifies them.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (anthropic, openai)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model used for completions."""
