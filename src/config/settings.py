# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for cache policy, AI provider access, extraction
timeouts and logging. Values are read, never owned, by the analysis core.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_TTL_DAYS = 1
MAX_TTL_DAYS = 30


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["json", "sqlite"] = "json"
    cache_root: Path = Path("~/.profilescope/cache")
    cache_ttl_days: int = 7

    # === AI analysis ===
    ai_enabled: bool = False
    ai_provider: Literal["anthropic", "openai"] = "anthropic"
    ai_model: str = ""
    ai_max_tokens: int = 4096
    ai_temperature: float = 0.3
    ai_timeout_s: float = 90.0
    ai_max_retries: int = 2

    # Provider API keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Analysis context passed to the AI
    target_role: str = ""
    seniority_level: str = ""
    custom_instructions: str = ""

    # === Extraction ===
    section_wait_timeout_s: float = 3.0
    section_poll_interval_s: float = 0.1
    section_task_timeout_s: float = 15.0
    locator_sibling_lookahead: int = 5

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: str = ""
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("locator_sibling_lookahead")
    @classmethod
    def validate_lookahead(cls, v: int) -> int:
        if v < 1:
            raise ValueError("locator_sibling_lookahead must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not MIN_TTL_DAYS <= self.cache_ttl_days <= MAX_TTL_DAYS:
            errors.append(
                f"CACHE_TTL_DAYS must be between {MIN_TTL_DAYS} and "
                f"{MAX_TTL_DAYS} (got {self.cache_ttl_days})"
            )

        if self.section_poll_interval_s <= 0:
            errors.append("SECTION_POLL_INTERVAL_S must be > 0")

        if self.section_poll_interval_s >= self.section_wait_timeout_s:
            errors.append(
                "SECTION_POLL_INTERVAL_S must be < SECTION_WAIT_TIMEOUT_S"
            )

        if self.section_wait_timeout_s >= self.section_task_timeout_s:
            errors.append(
                "SECTION_WAIT_TIMEOUT_S must be < SECTION_TASK_TIMEOUT_S"
            )

        if self.ai_timeout_s <= 0:
            errors.append("AI_TIMEOUT_S must be > 0")

        if self.ai_max_retries < 0:
            errors.append("AI_MAX_RETRIES must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def ai_api_key(self) -> str:
        """API key of the configured AI provider."""
        if self.ai_provider == "openai":
            return self.openai_api_key
        return self.anthropic_api_key

    @property
    def resolved_ai_model(self) -> str:
        """Configured model, or the provider default when unset."""
        if self.ai_model:
            return self.ai_model
        return DEFAULT_MODELS[self.ai_provider]


DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
