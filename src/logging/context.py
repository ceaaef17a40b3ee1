# src/logging/context.py — v1
"""Contextual logging support: attach profile_id, generation, section, phase to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per analysis run; asyncio tasks inherit a copy, so section tasks can
# set their own section without leaking into siblings.
_profile_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_id", default=None
)
_generation: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "generation", default=None
)
_section: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "section", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    profile_id: str | None = None
    generation: int | None = None
    section: str | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        profile_id=_profile_id.get(),
        generation=_generation.get(),
        section=_section.get(),
        phase=_phase.get(),
    )


def set_run_context(profile_id: str, generation: int) -> None:
    """Set run-level context (called once per analysis run)."""
    _profile_id.set(profile_id)
    _generation.set(generation)


def set_phase_context(phase: str | None) -> None:
    """Set the coordinator state currently executing."""
    _phase.set(phase)


def set_section_context(section: str | None) -> None:
    """Set section-level context (called inside each section task)."""
    _section.set(section)


def clear_context() -> None:
    """Reset all context variables."""
    _profile_id.set(None)
    _generation.set(None)
    _section.set(None)
    _phase.set(None)
