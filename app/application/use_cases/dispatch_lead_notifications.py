"""Lead notification fan-out use case."""

import asyncio
import logging
from typing import Sequence

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import DeliverySummary, NotificationOutcome
from app.application.ports.notification_channel import NotificationChannel
from app.infrastructure.logging.logger import (
    log_channel_outcome,
    log_dispatch_summary,
    log_event,
)


class NotificationDispatcher:
    """
    Fans a lead out to every notification channel concurrently.

    Channels are independent: a failure, exception or slow response in one
    never affects the others. Dispatch is best effort and never raises.
    """

    def __init__(self, channels: Sequence[NotificationChannel]) -> None:
        """
        Initialize dispatcher.

        Args:
            channels: Notification channels to deliver to
        """
        self._channels = tuple(channels)

    @property
    def channels(self) -> tuple[NotificationChannel, ...]:
        """Configured channels."""
        return self._channels

    async def dispatch(self, lead: LeadRecord) -> DeliverySummary:
        """
        Send a lead to all channels and wait for every send to settle.

        Args:
            lead: Lead record to deliver

        Returns:
            DeliverySummary with one outcome per channel, in channel order
        """
        log_event(
            lead.submission_id,
            component="dispatch",
            channels=[channel.name for channel in self._channels],
            form_variant=lead.form_variant.value,
        )

        results = await asyncio.gather(
            *(self._send(channel, lead) for channel in self._channels),
            return_exceptions=True,
        )

        outcomes = []
        for channel, result in zip(self._channels, results):
            if isinstance(result, BaseException):
                outcome = NotificationOutcome.failed(
                    channel.name, f"{type(result).__name__}: {str(result)}"
                )
            else:
                outcome = result
            outcomes.append(outcome)
            log_channel_outcome(
                lead.submission_id,
                channel=outcome.channel,
                success=outcome.success,
                skipped=outcome.skipped,
                error=outcome.error,
            )

        summary = DeliverySummary(outcomes=tuple(outcomes))
        log_dispatch_summary(lead.submission_id, summary.succeeded, summary.total)
        return summary

    async def _send(self, channel: NotificationChannel, lead: LeadRecord) -> NotificationOutcome:
        try:
            return await channel.send(lead)
        except Exception as e:
            # Formatter or adapter bug: report it for this channel only
            log_event(
                lead.submission_id,
                component="dispatch",
                level=logging.ERROR,
                channel=channel.name,
                error=f"{type(e).__name__}: {str(e)}",
            )
            raise
