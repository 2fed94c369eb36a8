"""Notification channel port."""

from abc import ABC, abstractmethod

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import NotificationOutcome


class NotificationChannel(ABC):
    """Port interface for a lead notification delivery channel."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name used in outcomes and logs."""
        pass

    @abstractmethod
    async def send(self, lead: LeadRecord) -> NotificationOutcome:
        """
        Format and deliver a lead notification.

        Implementations report failures through the returned outcome instead
        of raising.

        Args:
            lead: Lead record to deliver

        Returns:
            NotificationOutcome for this channel
        """
        pass
