"""Redis-backed rate limiter.

Counters live in Redis so every API worker draws from the same budget.
"""

import logfire
import redis.asyncio as redis
from redis.exceptions import RedisError

from fanworks.config import RedisSettings
from fanworks.domain.service.rate_limit_service import RateLimitDecision, RateLimiter


def create_redis_client(settings: RedisSettings) -> redis.Redis:
    """Create an async Redis client with a connection pool.

    Args:
        settings: Redis connection settings

    Returns:
        Redis client (connects lazily on first command)
    """
    return redis.from_url(
        settings.url,
        max_connections=settings.max_connections,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_connect_timeout,
        decode_responses=True,
    )


class RedisRateLimiter(RateLimiter):
    """Fixed-window rate limiter using Redis INCR with a TTL.

    The first hit in a window creates the counter and sets its expiry;
    later hits only increment. INCR is atomic on the server, so concurrent
    workers never grant more than the limit.

    When Redis cannot be reached the request is allowed and a warning is
    logged, so an outage of the counter store does not block commenting.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "") -> None:
        """Initialize limiter.

        Args:
            client: Async Redis client
            key_prefix: Namespace prepended to every budget key
        """
        self._client = client
        self._key_prefix = key_prefix

    async def consume(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        """Consume one unit of the budget for key."""
        counter_key = f"{self._key_prefix}{key}"

        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.incr(counter_key)
                pipe.ttl(counter_key)
                count, ttl = await pipe.execute()

            # New counter, or one left without an expiry
            if ttl < 0:
                await self._client.expire(counter_key, window_seconds)
                ttl = window_seconds
        except RedisError as e:
            logfire.warn("Rate limiter unavailable, allowing request", error=str(e))
            return RateLimitDecision(allowed=True, remaining=limit, retry_after=0)

        retry_after = max(1, ttl)
        if count > limit:
            return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

        return RateLimitDecision(
            allowed=True, remaining=limit - count, retry_after=retry_after
        )
