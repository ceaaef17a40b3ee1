# src/ai/base_analyzer.py — v1
"""Abstract AI quality-analysis capability.

The coordinator depends on this interface only. Implementations must not
raise for provider failures: every failure is returned as an AIError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from profilescope.ai.models import AIError, AnalysisContext, StructuredResult
from profilescope.core.models import SectionName


class BaseQualityAnalyzer(ABC):
    """Judges deep section payloads against a target role."""

    @abstractmethod
    async def analyze(
        self,
        section_payloads: dict[SectionName, dict[str, Any]],
        context: AnalysisContext,
    ) -> StructuredResult | AIError:
        """Score the sections and produce categorized recommendations."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier reported in results."""
