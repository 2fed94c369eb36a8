"""Field rendering shared by the notification formatters."""

import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.application.dtos.lead import LeadRecord

NOT_PROVIDED = "Not provided"
NOT_SPECIFIED = "Not specified"

FILING_STATUS_DISPLAY = {
    "single": "Single",
    "married_joint": "Married Filing Jointly",
    "married_separate": "Married Filing Separately",
    "head_household": "Head of Household",
}


def or_fallback(value: Optional[str], fallback: str = NOT_PROVIDED) -> str:
    """Return the stripped value, or the fallback when it is empty."""
    value = (value or "").strip()
    return value or fallback


def full_name(lead: LeadRecord) -> str:
    return " ".join(
        part.strip() for part in (lead.first_name, lead.middle_name, lead.last_name) if part
    )


def full_address(lead: LeadRecord) -> str:
    parts = (lead.address1, lead.address2, lead.city, lead.state, lead.zip_code)
    return ", ".join(part.strip() for part in parts if part and part.strip())


def filing_status_display(lead: LeadRecord) -> str:
    return FILING_STATUS_DISPLAY.get(lead.filing_status) or or_fallback(
        lead.filing_status, NOT_SPECIFIED
    )


def filing_method_display(lead: LeadRecord) -> str:
    return "In-Person" if lead.preferred_filing == "in-person" else "Remote"


def yes_no(value: Optional[str]) -> str:
    return "Yes" if (value or "").strip().lower() == "yes" else "No"


def dependents_display(lead: LeadRecord) -> str:
    if yes_no(lead.has_dependents) == "Yes":
        return f"Yes ({or_fallback(lead.num_dependents, '0')})"
    return "No"


def mask_ssn(ssn: Optional[str]) -> Optional[str]:
    """
    Mask an SSN down to its last four digits.

    Args:
        ssn: SSN as submitted, with or without separators

    Returns:
        '***-**-NNNN', or None when no SSN was provided
    """
    digits = re.sub(r"\D", "", ssn or "")
    if not digits:
        return None
    return f"***-**-{digits[-4:]}"


def phone_digits(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def assigned_to(lead: LeadRecord) -> str:
    """Preparer name and referral code, e.g. 'Owliver Owl (ow)'."""
    code = lead.ref_code or lead.preparer.code
    return f"{lead.preparer.full_name} ({code})"


def eastern_time(moment: datetime) -> datetime:
    """Convert a timestamp to US Eastern time, where the preparers work."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.astimezone(ZoneInfo("America/New_York"))
    except ZoneInfoNotFoundError:
        # No tz database on this host; keep UTC
        return moment.astimezone(timezone.utc)
