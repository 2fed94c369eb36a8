"""No-op rate limiter adapter for when rate limiting is disabled."""

from app.application.ports.rate_limiter import RateLimiter


class NoOpRateLimiter(RateLimiter):
    """No-op adapter that allows every request."""

    async def hit(self, key: str) -> bool:
        """
        Always allow.

        Args:
            key: Client identifier (ignored)

        Returns:
            Always True
        """
        return True
