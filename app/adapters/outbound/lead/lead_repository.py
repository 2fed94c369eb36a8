"""In-memory lead repository adapter."""

from app.application.dtos.lead import LeadRecord, StoredLead
from app.application.ports.lead_repository import LeadRepository


class InMemoryLeadRepository(LeadRepository):
    """In-memory implementation of lead repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: list[StoredLead] = []

    async def save(self, lead: LeadRecord) -> int:
        """
        Save a lead.

        Args:
            lead: Lead record to save

        Returns:
            Sequential identifier of the stored lead
        """
        lead_id = len(self._storage) + 1
        self._storage.append(
            StoredLead(
                id=lead_id,
                first_name=lead.first_name,
                last_name=lead.last_name,
                phone=lead.phone,
                email=lead.email.lower() if lead.email else None,
                zip_code=lead.zip_code,
                preferred_filing=lead.preferred_filing,
                ref_code=lead.ref_code,
                consent=lead.consent,
                wants_advance=lead.wants_advance,
                image_url=lead.id_document_url,
                created_at=lead.submitted_at,
            )
        )
        return lead_id

    async def list(self, limit: int = 100, offset: int = 0) -> list[StoredLead]:
        """
        List stored leads, newest first.

        Args:
            limit: Maximum number of leads to return
            offset: Number of leads to skip

        Returns:
            List of stored leads
        """
        newest_first = list(reversed(self._storage))
        return newest_first[offset : offset + limit]

    async def count(self) -> int:
        """
        Count stored leads.

        Returns:
            Total number of stored leads
        """
        return len(self._storage)
