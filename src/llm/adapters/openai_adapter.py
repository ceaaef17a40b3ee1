# src/llm/adapters/openai_adapter.py — v1
"""OpenAI adapter (optional ``openai`` extra).

Structured output uses the ``json_schema`` response format.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import BaseModel

from profilescope.llm.base_client import BaseLLMClient
from profilescope.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseLLMClient):

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: str | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install profilescope[openai]"
                ) from e
            kwargs: dict[str, Any] = {"api_key": self._api_key or "", "max_retries": 0}
            if self._timeout_s is not None:
                kwargs["timeout"] = self._timeout_s
            self.__client = openai.AsyncOpenAI(**kwargs)
        return self.__client

    @property
    def provider_name(self) -> str:
        return "openai"

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
        chat: list[dict[str, Any]] = []
        if system:
            chat.append({"role": "system", "content": system})
        chat.extend(m.model_dump() for m in messages)

        request: dict[str, Any] = {
            "model": self._model,
            "messages": chat,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if response_format is not None:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": response_format.__name__,
                    "schema": response_format.model_json_schema(),
                },
            }

        start = time.monotonic()
        response = await self._client.chat.completions.create(**request)
        latency_ms = int((time.monotonic() - start) * 1000)

        choice = response.choices[0]
        usage = response.usage
        logger.debug("OpenAI completion in %dms (finish=%s)", latency_ms, choice.finish_reason)
        return LLMResponse(
            content=choice.message.content or "",
            model=getattr(response, "model", None) or self._model,
            provider=self.provider_name,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms,
            stop_reason=choice.finish_reason,
        )
