"""Notification DTOs."""

from typing import Any, Optional

from app.application.dtos.base import DTO


class NotificationOutcome(DTO):
    """Delivery outcome of a single channel."""

    channel: str
    success: bool
    skipped: bool = False
    error: Optional[str] = None

    @classmethod
    def delivered(cls, channel: str) -> "NotificationOutcome":
        """Successful delivery."""
        return cls(channel=channel, success=True)

    @classmethod
    def failed(cls, channel: str, error: str) -> "NotificationOutcome":
        """Failed delivery with error detail."""
        return cls(channel=channel, success=False, error=error)

    @classmethod
    def disabled(cls, channel: str, reason: str) -> "NotificationOutcome":
        """Channel disabled by configuration."""
        return cls(channel=channel, success=False, skipped=True, error=reason)


class DeliverySummary(DTO):
    """Aggregated outcomes of one dispatch."""

    outcomes: tuple[NotificationOutcome, ...] = ()

    @property
    def total(self) -> int:
        """Number of channels attempted."""
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        """Number of channels that delivered."""
        return sum(1 for outcome in self.outcomes if outcome.success)

    def as_ratio(self) -> str:
        """Summary such as '2/3'."""
        return f"{self.succeeded}/{self.total}"


class EmailAttachment(DTO):
    """File to attach to the notification email."""

    filename: str
    path: str
    content_type: str


class EmailPayload(DTO):
    """Formatted notification email."""

    to: Optional[str] = None
    cc: tuple[str, ...] = ()
    subject: str
    html: str
    text: str
    attachments: tuple[EmailAttachment, ...] = ()


class DiscordPayload(DTO):
    """Discord webhook body."""

    content: str
    embeds: tuple[dict[str, Any], ...] = ()

    def to_json(self) -> dict[str, Any]:
        """Webhook JSON body."""
        return {"content": self.content, "embeds": list(self.embeds)}
