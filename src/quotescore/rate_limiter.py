"""Sliding-window rate limiter for outbound provider calls."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

# (max_calls, window_seconds) per provider, kept below each vendor's
# advertised free-tier ceiling.
PROVIDER_BUDGETS: dict[str, tuple[int, float]] = {
    "finnhub": (25, 1.0),      # advertised 30/s
    "twelvedata": (7, 60.0),   # advertised 8/min
    "fmp": (5, 1.0),
    "mock": (1000, 1.0),
}


class SlidingWindowRateLimiter:
    """Allow at most ``max_calls`` in any trailing ``window_seconds``.

    ``acquire`` never rejects; it suspends the caller until a slot frees up.
    The prune/check/record step runs under an ``asyncio.Lock`` so two
    concurrent callers cannot both take the last slot.
    """

    def __init__(
        self,
        max_calls: int,
        window_seconds: float,
        *,
        name: str = "",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_calls < 1:
            raise ValueError("max_calls must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.max_calls = max_calls
        self.window = window_seconds
        self.name = name
        self._clock = clock
        self._sleep = sleep
        self._calls: deque[float] = deque()
        self._lock = asyncio.Lock()

    @classmethod
    def for_provider(cls, name: str) -> "SlidingWindowRateLimiter":
        """Limiter using the documented budget for ``name``."""
        max_calls, window = PROVIDER_BUDGETS.get(name, (10, 1.0))
        return cls(max_calls, window, name=name)

    def _prune(self, now: float) -> None:
        cutoff = now - self.window
        while self._calls and self._calls[0] <= cutoff:
            self._calls.popleft()

    async def acquire(self) -> None:
        """Wait until one more call fits in the window, then record it."""
        async with self._lock:
            while True:
                now = self._clock()
                self._prune(now)
                if len(self._calls) < self.max_calls:
                    self._calls.append(now)
                    return
                wait = self._calls[0] + self.window - now
                logger.debug(
                    "Rate limit reached for %s, waiting %.3fs",
                    self.name or "provider", wait,
                )
                await self._sleep(max(wait, 0.0))

    def in_window(self) -> int:
        """Number of calls recorded in the current window."""
        self._prune(self._clock())
        return len(self._calls)

    @property
    def remaining(self) -> int:
        return max(self.max_calls - self.in_window(), 0)
