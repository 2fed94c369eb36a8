"""Rate limiter port."""

from abc import ABC, abstractmethod


class RateLimiter(ABC):
    """Port interface for fixed-window submission rate limiting."""

    @abstractmethod
    async def hit(self, key: str) -> bool:
        """
        Record a request for a key and check it against the limit.

        Args:
            key: Client identifier (e.g., remote IP address)

        Returns:
            True if the request is allowed, False if the limit is exceeded
        """
        pass
