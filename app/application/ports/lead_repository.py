"""Lead repository port."""

from abc import ABC, abstractmethod

from app.application.dtos.lead import LeadRecord, StoredLead


class LeadRepository(ABC):
    """Port interface for lead repository."""

    @abstractmethod
    async def save(self, lead: LeadRecord) -> int:
        """
        Save a lead.

        Args:
            lead: Lead record to save

        Returns:
            Identifier of the stored lead
        """
        pass

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0) -> list[StoredLead]:
        """
        List stored leads, newest first.

        Args:
            limit: Maximum number of leads to return
            offset: Number of leads to skip

        Returns:
            List of stored leads
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """
        Count stored leads.

        Returns:
            Total number of stored leads
        """
        pass
