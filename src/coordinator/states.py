# src/coordinator/states.py — v1
"""Analysis state machine: states and allowed transitions."""

from __future__ import annotations

from enum import Enum


class AnalysisState(str, Enum):
    INIT = "INIT"
    CACHE_CHECK = "CACHE_CHECK"
    CACHE_HIT = "CACHE_HIT"
    CACHE_MISS = "CACHE_MISS"
    SCANNING = "SCANNING"
    EXTRACTING = "EXTRACTING"
    SCORING = "SCORING"
    AI_DISABLED = "AI_DISABLED"
    AI_ANALYZING = "AI_ANALYZING"
    AI_FAILED = "AI_FAILED"
    DONE = "DONE"
    DONE_WITH_STALE_CACHE = "DONE_WITH_STALE_CACHE"
    DONE_WITHOUT_AI = "DONE_WITHOUT_AI"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES: frozenset[AnalysisState] = frozenset({
    AnalysisState.DONE,
    AnalysisState.DONE_WITH_STALE_CACHE,
    AnalysisState.DONE_WITHOUT_AI,
})

TRANSITIONS: dict[AnalysisState, frozenset[AnalysisState]] = {
    AnalysisState.INIT: frozenset({AnalysisState.CACHE_CHECK}),
    AnalysisState.CACHE_CHECK: frozenset({AnalysisState.CACHE_HIT, AnalysisState.CACHE_MISS}),
    AnalysisState.CACHE_HIT: frozenset({AnalysisState.DONE}),
    AnalysisState.CACHE_MISS: frozenset({AnalysisState.SCANNING}),
    AnalysisState.SCANNING: frozenset({AnalysisState.EXTRACTING}),
    AnalysisState.EXTRACTING: frozenset({AnalysisState.SCORING}),
    AnalysisState.SCORING: frozenset({AnalysisState.AI_DISABLED, AnalysisState.AI_ANALYZING}),
    AnalysisState.AI_DISABLED: frozenset({AnalysisState.DONE}),
    AnalysisState.AI_ANALYZING: frozenset({AnalysisState.DONE, AnalysisState.AI_FAILED}),
    AnalysisState.AI_FAILED: frozenset({
        AnalysisState.DONE_WITH_STALE_CACHE,
        AnalysisState.DONE_WITHOUT_AI,
    }),
}


class InvalidTransitionError(RuntimeError):
    """A run attempted a transition the state machine does not allow."""


def check_transition(current: AnalysisState, target: AnalysisState) -> None:
    if target not in TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(f"{current.value} -> {target.value}")
