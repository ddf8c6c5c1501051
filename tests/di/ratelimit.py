"""Mock rate limit providers for testing."""

import time
from dataclasses import dataclass
from typing import Callable

from dishka import Scope, provide

from fanworks.domain.service import RateLimitDecision, RateLimiter
from fanworks.util.di.infrastructure.ratelimit import RateLimitProvider


@dataclass
class _Window:
    started_at: float
    count: int


class InMemoryRateLimiter(RateLimiter):
    """Fixed-window rate limiter kept in process memory.

    Same budget semantics as the Redis limiter, for tests that run
    without a Redis server.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    async def consume(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now - window.started_at >= window_seconds:
            window = _Window(started_at=now, count=0)
            self._windows[key] = window

        retry_after = max(1, int(window.started_at + window_seconds - now))
        if window.count >= limit:
            return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

        window.count += 1
        return RateLimitDecision(
            allowed=True, remaining=limit - window.count, retry_after=retry_after
        )


class MockRateLimitProvider(RateLimitProvider):
    """Mock rate limit provider with in-process counters.

    APP scope keeps the budget across requests made against one container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_rate_limiter(self) -> RateLimiter:
        """Provide in-memory rate limiter."""
        return InMemoryRateLimiter()
