# src/coordinator/events.py — v1
"""Immutable progress notifications and their subscriber registry."""

from __future__ import annotations

import inspect
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Union

from pydantic import BaseModel, ConfigDict, Field

from profilescope.coordinator.states import AnalysisState

logger = logging.getLogger(__name__)


class ProgressEvent(BaseModel):
    """One state transition of one analysis run."""

    model_config = ConfigDict(frozen=True)

    generation: int
    profile_id: str
    state: AnalysisState
    timestamp: datetime
    payload: dict[str, Any] = Field(default_factory=dict)


ProgressCallback = Callable[[ProgressEvent], Union[None, Awaitable[None]]]


class EventBus:
    """Delivers events to subscribers in subscription order.

    Callbacks may be sync or async. A failing callback is logged and the
    remaining subscribers still receive the event.
    """

    def __init__(self) -> None:
        self._subscribers: list[ProgressCallback] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register ``callback``. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def publish(self, event: ProgressEvent) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(
                    "Progress subscriber %r failed on %s: %s",
                    callback, event.state.value, e,
                )
