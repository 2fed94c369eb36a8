"""Unit tests for the Discord channel adapter."""

import json

import httpx
import pytest

from app.adapters.outbound.notifications.discord_channel import DiscordChannel

WEBHOOK_URL = "https://discord.com/api/webhooks/1/abc"


@pytest.mark.asyncio
async def test_posts_embed_to_webhook(full_intake_lead):
    """Test the webhook receives content and embeds."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(204)

    channel = DiscordChannel(
        webhook_url=WEBHOOK_URL, style="embed", transport=httpx.MockTransport(handler)
    )
    outcome = await channel.send(full_intake_lead)

    assert outcome.success is True
    assert outcome.channel == "discord"
    assert str(requests[0].url) == WEBHOOK_URL
    body = json.loads(requests[0].content)
    assert set(body) == {"content", "embeds"}
    assert len(body["embeds"]) == 1


@pytest.mark.asyncio
async def test_non_2xx_is_failure(full_intake_lead):
    """Test an error response is reported as a failed outcome."""
    channel = DiscordChannel(
        webhook_url=WEBHOOK_URL,
        transport=httpx.MockTransport(lambda request: httpx.Response(429)),
    )
    outcome = await channel.send(full_intake_lead)

    assert outcome.success is False
    assert outcome.skipped is False
    assert "429" in outcome.error


@pytest.mark.asyncio
async def test_transport_error_is_failure(full_intake_lead):
    """Test network errors do not escape the channel."""

    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    channel = DiscordChannel(webhook_url=WEBHOOK_URL, transport=httpx.MockTransport(handler))
    outcome = await channel.send(full_intake_lead)

    assert outcome.success is False
    assert "Discord request failed" in outcome.error


@pytest.mark.asyncio
async def test_disabled_without_webhook(full_intake_lead):
    """Test a missing webhook URL is a disabled channel, not an error."""
    calls = []
    channel = DiscordChannel(
        webhook_url="",
        transport=httpx.MockTransport(lambda request: calls.append(request)),
    )
    outcome = await channel.send(full_intake_lead)

    assert outcome.success is False
    assert outcome.skipped is True
    assert calls == []
