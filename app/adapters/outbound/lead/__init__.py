"""Lead repository adapters."""

from app.adapters.outbound.lead.lead_repository import InMemoryLeadRepository
from app.adapters.outbound.lead.sql_lead_repository import SqlLeadRepository

__all__ = [
    "InMemoryLeadRepository",
    "SqlLeadRepository",
]
