"""Sliding-window rate limiter for inbound relay messages."""

from __future__ import annotations

import time
import collections
from collections.abc import Callable

from src.errors import RateLimitError

TimeFn = Callable[[], float]


class SlidingWindowRateLimiter:
    """Count events over a rolling window and refuse the one that overflows it.

    A limit or window of zero (or less) turns the limiter off.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        kind: str = "message",
        now_fn: TimeFn | None = None,
    ) -> None:
        self.kind = kind
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self._now = now_fn or time.monotonic
        self._events: collections.deque[float] = collections.deque()

    @property
    def enabled(self) -> bool:
        return self.limit > 0 and self.window_seconds > 0

    def _evict(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._events and self._events[0] <= cutoff:
            self._events.popleft()

    def consume(self) -> None:
        if not self.enabled:
            return

        now = self._now()
        self._evict(now)

        if len(self._events) >= self.limit:
            raise RateLimitError(
                retry_in=max(0.0, (self._events[0] + self.window_seconds) - now),
                limit=self.limit,
                window_seconds=self.window_seconds,
            )
        self._events.append(now)

    def remaining(self) -> int | None:
        """Events still allowed in the current window; None when disabled."""
        if not self.enabled:
            return None
        self._evict(self._now())
        return max(0, self.limit - len(self._events))


__all__ = ["RateLimitError", "SlidingWindowRateLimiter"]
