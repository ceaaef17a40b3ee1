# src/llm/adapters/anthropic_adapter.py — v1
"""Anthropic adapter (optional ``anthropic`` extra).

Structured output is a forced call to a single tool whose input schema is
the requested pydantic model; the tool input is returned as JSON text.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from pydantic import BaseModel

from profilescope.llm.base_client import BaseLLMClient
from profilescope.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)

TOOL_NAME = "submit_analysis"


class AnthropicAdapter(BaseLLMClient):

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install profilescope[anthropic]"
                ) from e
            # Retries are handled by llm/retry.py.
            kwargs: dict[str, Any] = {"api_key": self._api_key or "", "max_retries": 0}
            if self._timeout_s is not None:
                kwargs["timeout"] = self._timeout_s
            self.__client = anthropic.AsyncAnthropic(**kwargs)
        return self.__client

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.3,
        response_format: type[BaseModel] | None = None,
    ) -> LLMResponse:
        request: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [m.model_dump() for m in messages],
        }
        if system:
            request["system"] = system
        if response_format is not None:
            request["tools"] = [{
                "name": TOOL_NAME,
                "description": f"Submit the result as a {response_format.__name__} object",
                "input_schema": response_format.model_json_schema(),
            }]
            request["tool_choice"] = {"type": "tool", "name": TOOL_NAME}

        start = time.monotonic()
        response = await self._client.messages.create(**request)
        latency_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Anthropic completion in %dms (stop=%s)",
                     latency_ms, getattr(response, "stop_reason", None))

        return LLMResponse(
            content=_response_text(response, structured=response_format is not None),
            model=response.model,
            provider=self.provider_name,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            latency_ms=latency_ms,
            stop_reason=getattr(response, "stop_reason", None),
        )


def _response_text(response: Any, structured: bool) -> str:
    """Tool input as JSON for structured calls, else the first text block."""
    blocks = list(response.content)
    if structured:
        for block in blocks:
            if getattr(block, "type", None) == "tool_use":
                return json.dumps(block.input)
    for block in blocks:
        if getattr(block, "type", None) == "text":
            return block.text
    return ""
