"""HTTP adapter response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.application.dtos.preparer import Preparer


class LeadSubmissionResponse(BaseModel):
    """Response returned once a lead has been accepted."""

    success: bool = True
    message: str
    leadId: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Thank you! Your tax intake form has been submitted successfully.",
                "leadId": 42,
            }
        }
    )


class PreparerCard(BaseModel):
    """Public preparer details shown on the intake form (no contact email)."""

    code: str
    firstName: str
    lastName: str
    title: str
    avatarUrl: str
    fullName: str

    @classmethod
    def from_preparer(cls, preparer: Preparer) -> "PreparerCard":
        """Build the public card for a preparer."""
        return cls(
            code=preparer.code,
            firstName=preparer.first_name,
            lastName=preparer.last_name,
            title=preparer.title,
            avatarUrl=preparer.avatar_url,
            fullName=f"{preparer.first_name} {preparer.last_name}".strip(),
        )


class PreparerCardResponse(BaseModel):
    """Response of the public preparer lookup."""

    success: bool = True
    preparer: PreparerCard


class PreparerSummary(BaseModel):
    """Preparer entry in the admin listing."""

    code: str
    firstName: str
    lastName: str
    email: str


class PreparerListResponse(BaseModel):
    """Response of the admin preparer listing."""

    success: bool = True
    total: int
    defaultCode: str
    preparers: list[PreparerSummary]


class StoredLeadResponse(BaseModel):
    """Stored lead in the admin listing."""

    id: int
    firstName: str
    lastName: str
    phone: Optional[str] = None
    email: Optional[str] = None
    zipCode: Optional[str] = None
    preferredFiling: Optional[str] = None
    refCode: Optional[str] = None
    consent: bool
    wantsAdvance: bool
    imageUrl: Optional[str] = None
    createdAt: datetime


class LeadListResponse(BaseModel):
    """Response of the admin lead listing."""

    total: int
    leads: list[StoredLeadResponse]
