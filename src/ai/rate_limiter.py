# src/ai/rate_limiter.py — v1
"""Per-provider sliding-window request limiter.

A request over the limit is refused locally, before anything is sent, with
the number of seconds until a slot frees up. A provider-reported 429 sets
a cooldown during which every request is refused.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

PROVIDER_LIMITS: dict[str, int] = {
    "anthropic": 5,
    "openai": 10,
}
WINDOW_S = 60.0


class SlidingWindowRateLimiter:
    """At most ``max_requests`` acquisitions per ``window_s`` seconds."""

    def __init__(
        self,
        max_requests: int,
        window_s: float = WINDOW_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        self._max_requests = max_requests
        self._window_s = window_s
        self._clock = clock
        self._requests: deque[float] = deque()
        self._cooldown_until = 0.0

    @property
    def max_requests(self) -> int:
        return self._max_requests

    def try_acquire(self) -> float | None:
        """Take a slot. Returns None on success, else seconds to wait."""
        now = self._clock()
        if now < self._cooldown_until:
            return self._cooldown_until - now
        while self._requests and now - self._requests[0] >= self._window_s:
            self._requests.popleft()
        if len(self._requests) >= self._max_requests:
            return self._requests[0] + self._window_s - now
        self._requests.append(now)
        return None

    def set_cooldown(self, seconds: float) -> None:
        self._cooldown_until = max(self._cooldown_until, self._clock() + seconds)

    def reset(self) -> None:
        self._requests.clear()
        self._cooldown_until = 0.0


_LIMITERS: dict[str, SlidingWindowRateLimiter] = {}


def limiter_for(provider: str) -> SlidingWindowRateLimiter:
    """Process-wide limiter shared by every analyzer of ``provider``."""
    limiter = _LIMITERS.get(provider)
    if limiter is None:
        limiter = SlidingWindowRateLimiter(PROVIDER_LIMITS.get(provider, 10))
        _LIMITERS[provider] = limiter
    return limiter
