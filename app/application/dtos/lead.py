"""Lead DTOs."""

import re
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from app.application.dtos.base import DTO
from app.application.dtos.preparer import Preparer
from app.domain.value_objects.form_variant import FormVariant, classify_form_variant


class TaxDocument(DTO):
    """Uploaded tax document descriptor."""

    name: str
    url: str
    path: Optional[str] = None


class LeadRecord(DTO):
    """
    Lead record flowing from submission to notification.

    Constructed once per form submission, enriched with the assigned preparer
    and discarded after dispatch.
    """

    # Identity
    first_name: str
    middle_name: str = ""
    last_name: str
    dob: str = ""
    ssn: str = ""
    phone: str = ""
    email: str = ""

    # Address
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip_code: str

    # Tax context
    filing_status: str = ""
    employment_type: str = ""
    occupation: str = ""
    has_dependents: str = "no"
    num_dependents: str = "0"
    dependents_under_24: str = "no"
    dependents_in_college: str = "no"
    child_care: str = "no"
    claimed_as_dependent: str = "no"
    in_college: str = "no"
    has_mortgage: str = "no"
    denied_eitc: str = "no"
    has_irs_pin: str = "no"
    irs_pin: str = ""

    # Identity document
    license_number: str = ""
    license_expiration: str = ""
    id_document_url: Optional[str] = None
    id_document_path: Optional[str] = None
    tax_documents: tuple[TaxDocument, ...] = ()

    # Routing and preferences
    preferred_filing: str = "remote"
    ref_code: str = ""
    consent: bool = True
    wants_advance: bool = False
    lang: str = "en"
    preparer: Preparer

    submission_id: str = Field(default_factory=lambda: str(uuid4()))
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def form_variant(self) -> FormVariant:
        """Simple advance request or full intake, derived from the submitted fields."""
        return classify_form_variant(self.wants_advance, self.dob, self.ssn, self.address1)


class StoredLead(DTO):
    """Persisted lead row as returned by the lead repository."""

    id: int
    first_name: str
    last_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    zip_code: Optional[str] = None
    preferred_filing: Optional[str] = None
    ref_code: Optional[str] = None
    consent: bool = False
    wants_advance: bool = False
    image_url: Optional[str] = None
    created_at: datetime


_PHONE_PATTERN = re.compile(r"^[\d\s\-()+]+$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

# Max lengths of optional free-text fields
_MAX_LENGTHS = {
    "middle_name": 50,
    "address1": 100,
    "address2": 50,
    "city": 50,
    "state": 2,
    "occupation": 100,
    "license_number": 50,
}


class LeadSubmission(DTO):
    """
    Intake form as submitted by the browser wizard.

    Field aliases are the wizard's camelCase form names (e.g. ``zipCode``).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    dob: str = ""
    ssn: str = ""
    phone: str = ""
    email: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    filing_status: str = ""
    employment_type: str = ""
    occupation: str = ""
    has_dependents: str = ""
    num_dependents: str = ""
    dependents_under_24: str = ""
    dependents_in_college: str = ""
    child_care: str = ""
    claimed_as_dependent: str = ""
    in_college: str = ""
    has_mortgage: str = ""
    denied_eitc: str = Field("", alias="deniedEITC")
    has_irs_pin: str = ""
    irs_pin: str = ""
    license_number: str = ""
    license_expiration: str = ""
    preferred_filing: str = ""
    ref_code: str = ""
    consent: bool = False
    wants_advance: bool = False
    lang: str = ""

    @field_validator("first_name", "last_name")
    @classmethod
    def _validate_name(cls, value: str, info: ValidationInfo) -> str:
        label = "First name" if info.field_name == "first_name" else "Last name"
        if not value:
            raise ValueError(f"{label} is required")
        if len(value) > 50:
            raise ValueError(f"{label} too long")
        return value

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str) -> str:
        if not value:
            raise ValueError("Phone is required")
        if not _PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone format")
        if not 10 <= len(value) <= 20:
            raise ValueError("Phone must be 10-20 characters")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        if not value:
            raise ValueError("Email is required")
        if not _EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email format")
        return value.lower()

    @field_validator("zip_code")
    @classmethod
    def _validate_zip_code(cls, value: str) -> str:
        if not value:
            raise ValueError("Zip code is required")
        if not _ZIP_PATTERN.match(value):
            raise ValueError("Invalid zip code (use 5 digits)")
        return value

    @field_validator("consent", mode="before")
    @classmethod
    def _validate_consent(cls, value: Any) -> bool:
        if value is True or value in ("true", "on"):
            return True
        raise ValueError("You must agree to be contacted")

    @field_validator("wants_advance", mode="before")
    @classmethod
    def _parse_wants_advance(cls, value: Any) -> bool:
        return value is True or value == "true"

    @field_validator("ref_code")
    @classmethod
    def _validate_ref_code(cls, value: str) -> str:
        if len(value) > 10:
            raise ValueError("Invalid ref code")
        return value

    @field_validator(*_MAX_LENGTHS)
    @classmethod
    def _validate_max_length(cls, value: str, info: ValidationInfo) -> str:
        if len(value) > _MAX_LENGTHS[info.field_name]:
            raise ValueError(f"{info.field_name} too long")
        return value
