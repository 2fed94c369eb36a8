"""Discord webhook notification channel adapter."""

from typing import Optional

import httpx

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import NotificationOutcome
from app.application.formatters.discord_formatter import EMBED_STYLE, format_discord
from app.application.ports.notification_channel import NotificationChannel
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event


class DiscordChannel(NotificationChannel):
    """Posts lead notifications to a Discord webhook."""

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        style: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize Discord channel.

        Args:
            webhook_url: Webhook URL (defaults to settings.discord_webhook_url)
            style: 'embed' or 'compact' (defaults to settings.discord_style)
            timeout_seconds: Request timeout (defaults to settings.http_timeout_seconds)
            transport: Optional httpx transport (used by tests)
        """
        self._webhook_url = webhook_url if webhook_url is not None else settings.discord_webhook_url
        self._style = style or settings.discord_style or EMBED_STYLE
        self._timeout = timeout_seconds or settings.http_timeout_seconds
        self._transport = transport

    @property
    def name(self) -> str:
        return "discord"

    async def send(self, lead: LeadRecord) -> NotificationOutcome:
        """
        Post the lead to the webhook.

        Args:
            lead: Lead record to deliver

        Returns:
            NotificationOutcome (disabled when no webhook URL is configured)
        """
        if not self._webhook_url:
            return NotificationOutcome.disabled(self.name, "Discord webhook not configured")

        payload = format_discord(lead, style=self._style)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._webhook_url, json=payload.to_json())
        except httpx.HTTPError as e:
            return NotificationOutcome.failed(self.name, f"Discord request failed: {str(e)}")

        if not response.is_success:
            return NotificationOutcome.failed(
                self.name, f"Discord API error: {response.status_code}"
            )

        log_event(lead.submission_id, component=self.name, status_code=response.status_code)
        return NotificationOutcome.delivered(self.name)
