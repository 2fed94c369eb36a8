"""Form variant value object."""

from enum import Enum
from typing import Optional


class FormVariant(str, Enum):
    """Structural variant of a submitted lead form."""

    SIMPLE_ADVANCE = "simple_advance"
    FULL_INTAKE = "full_intake"

    @property
    def is_simple(self) -> bool:
        """Whether this is the minimal cash-advance request form."""
        return self is FormVariant.SIMPLE_ADVANCE


def classify_form_variant(
    wants_advance: bool,
    dob: Optional[str],
    ssn: Optional[str],
    address1: Optional[str],
) -> FormVariant:
    """
    Classify a lead as a simple advance request or a full intake.

    A lead is a simple advance request when the client asked for a cash advance
    and supplied none of date of birth, SSN or street address.

    Args:
        wants_advance: Whether the client asked for a tax advance
        dob: Date of birth as submitted
        ssn: Social security number as submitted
        address1: Street address line 1 as submitted

    Returns:
        FormVariant for the lead
    """
    has_intake_details = any((value or "").strip() for value in (dob, ssn, address1))
    if wants_advance and not has_intake_details:
        return FormVariant.SIMPLE_ADVANCE
    return FormVariant.FULL_INTAKE
