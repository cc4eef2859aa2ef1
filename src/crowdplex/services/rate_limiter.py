"""Sliding-window request limiter keyed by client address."""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int = 0


class RateLimiter:
    """Allow at most `max_requests` per client within any `window_seconds` span."""

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: dict[str, list[float]] = {}

    def check(self, key: str) -> RateLimitDecision:
        """Record a request for `key` if it fits in the window."""
        now = self._clock()
        window_start = now - self.window_seconds
        recent = [ts for ts in self._requests.get(key, []) if ts > window_start]

        if len(recent) >= self.max_requests:
            self._requests[key] = recent
            reset = math.ceil(min(recent) + self.window_seconds - now)
            logger.warning(f"Rate limit exceeded for {key}")
            return RateLimitDecision(
                allowed=False,
                limit=self.max_requests,
                remaining=0,
                reset_seconds=reset,
            )

        recent.append(now)
        self._requests[key] = recent
        return RateLimitDecision(
            allowed=True,
            limit=self.max_requests,
            remaining=self.max_requests - len(recent),
        )

    def prune(self, max_age_seconds: float = 3600) -> int:
        """
        Forget timestamps older than max_age_seconds and drop idle clients.

        Returns:
            Number of client keys removed
        """
        cutoff = self._clock() - max_age_seconds
        removed = 0
        for key in list(self._requests):
            recent = [ts for ts in self._requests[key] if ts > cutoff]
            if recent:
                self._requests[key] = recent
            else:
                del self._requests[key]
                removed += 1
        return removed
