"""Redis fixed-window rate limiter adapter."""

from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from app.application.ports.rate_limiter import RateLimiter
from app.infrastructure.logging.logger import logger


class RedisRateLimiter(RateLimiter):
    """Redis adapter counting requests per key in fixed windows."""

    KEY_PREFIX = "leads:ratelimit:"

    def __init__(self, redis_url: str, max_requests: int, window_seconds: int) -> None:
        """
        Initialize Redis rate limiter.

        Args:
            redis_url: Redis connection URL
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds
        """
        self._redis_url = redis_url
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, key: str) -> str:
        """
        Make Redis key for a client's request counter.

        Args:
            key: Client identifier

        Returns:
            Redis key string
        """
        return f"{self.KEY_PREFIX}{key}"

    async def hit(self, key: str) -> bool:
        """
        Count a request and check it against the window limit.

        Redis errors fail open so an outage never blocks submissions.

        Args:
            key: Client identifier (e.g., remote IP address)

        Returns:
            True if the request is allowed, False if the limit is exceeded
        """
        redis_key = self._make_key(key)
        try:
            client = await self._get_client()
            count = await client.incr(redis_key)
            if count == 1:
                await client.expire(redis_key, self._window_seconds)
        except (RedisError, OSError) as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {str(e)}")
            return True
        return count <= self._max_requests

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
