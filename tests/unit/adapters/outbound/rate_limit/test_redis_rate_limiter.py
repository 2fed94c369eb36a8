"""Unit tests for the Redis rate limiter adapter."""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.adapters.outbound.rate_limit.noop_rate_limiter import NoOpRateLimiter
from app.adapters.outbound.rate_limit.redis_rate_limiter import RedisRateLimiter

FROM_URL = "app.adapters.outbound.rate_limit.redis_rate_limiter.aioredis.from_url"


@pytest.fixture
def mock_redis_client():
    """Create a mock Redis client."""
    client = AsyncMock()
    client.incr = AsyncMock(return_value=1)
    client.expire = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def rate_limiter():
    """Create rate limiter allowing 3 requests per minute."""
    return RedisRateLimiter("redis://localhost:6379/0", max_requests=3, window_seconds=60)


@pytest.mark.asyncio
async def test_first_hit_starts_window(rate_limiter, mock_redis_client):
    """Test the first request sets the window expiry."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        allowed = await rate_limiter.hit("203.0.113.9")

        assert allowed is True
        mock_redis_client.incr.assert_called_once_with("leads:ratelimit:203.0.113.9")
        mock_redis_client.expire.assert_called_once_with("leads:ratelimit:203.0.113.9", 60)


@pytest.mark.asyncio
async def test_hits_within_limit_do_not_reset_expiry(rate_limiter, mock_redis_client):
    """Test later requests in the window only increment."""
    mock_redis_client.incr.return_value = 3

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        assert await rate_limiter.hit("203.0.113.9") is True
        mock_redis_client.expire.assert_not_called()


@pytest.mark.asyncio
async def test_over_limit_is_rejected(rate_limiter, mock_redis_client):
    """Test the request after the limit is refused."""
    mock_redis_client.incr.return_value = 4

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        assert await rate_limiter.hit("203.0.113.9") is False


@pytest.mark.asyncio
async def test_redis_outage_fails_open(rate_limiter, mock_redis_client):
    """Test Redis errors allow the request."""
    mock_redis_client.incr.side_effect = RedisConnectionError("connection refused")

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        assert await rate_limiter.hit("203.0.113.9") is True


@pytest.mark.asyncio
async def test_client_is_reused(rate_limiter, mock_redis_client):
    """Test the connection is created once."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        await rate_limiter.hit("a")
        await rate_limiter.hit("b")

        mock_from_url.assert_called_once()


@pytest.mark.asyncio
async def test_close(rate_limiter, mock_redis_client):
    """Test close releases the client."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client
        await rate_limiter.hit("a")

    await rate_limiter.close()

    mock_redis_client.close.assert_called_once()
    assert rate_limiter._client is None


@pytest.mark.asyncio
async def test_noop_allows_everything():
    """Test the no-op limiter never blocks."""
    limiter = NoOpRateLimiter()

    assert all([await limiter.hit("203.0.113.9") for _ in range(100)])
