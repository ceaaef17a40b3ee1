# src/llm/client_factory.py — v1
"""Factory: build the LLM client for the configured AI provider.

Adapters are imported lazily so the provider SDKs stay optional extras.
"""

from __future__ import annotations

import importlib
import logging

from profilescope.config.settings import Settings
from profilescope.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "anthropic": "profilescope.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "openai": "profilescope.llm.adapters.openai_adapter.OpenAIAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def create_llm_client(
    provider: str,
    model: str,
    api_key: str | None = None,
    timeout_s: float | None = None,
) -> BaseLLMClient:
    """Instantiate the adapter registered for ``provider``.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    class_path = _PROVIDER_REGISTRY.get(provider)
    if class_path is None:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(available_providers())}"
        )
    module_path, class_name = class_path.rsplit(".", 1)
    adapter_cls = getattr(importlib.import_module(module_path), class_name)
    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(model=model, api_key=api_key, timeout_s=timeout_s)


def create_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Client for AI_PROVIDER / AI_MODEL with the matching API key."""
    return create_llm_client(
        settings.ai_provider,
        settings.resolved_ai_model,
        api_key=settings.ai_api_key,
        timeout_s=settings.ai_timeout_s,
    )
