"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from app.application.dtos.lead import LeadRecord
from app.application.dtos.preparer import Preparer

SUBMITTED_AT = datetime(2025, 2, 10, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def preparer() -> Preparer:
    """Assigned preparer used by most leads."""
    return Preparer(
        code="ray",
        first_name="Ray",
        last_name="Hamilton",
        email="ray.hamilton@example.com",
        phone="1 (404) 555-0142",
        title="Enrolled Agent",
    )


@pytest.fixture
def make_lead(preparer):
    """Factory building lead records with sensible defaults."""

    def _make_lead(**overrides) -> LeadRecord:
        fields = {
            "first_name": "Jane",
            "last_name": "Doe",
            "phone": "5551234567",
            "email": "jane.doe@example.com",
            "zip_code": "30301",
            "ref_code": preparer.code,
            "preparer": preparer,
            "submitted_at": SUBMITTED_AT,
            "submission_id": "sub-123",
        }
        fields.update(overrides)
        return LeadRecord(**fields)

    return _make_lead


@pytest.fixture
def simple_advance_lead(make_lead) -> LeadRecord:
    """Advance request with no DOB, SSN or address."""
    return make_lead(wants_advance=True)


@pytest.fixture
def full_intake_lead(make_lead) -> LeadRecord:
    """Complete intake with SSN, address and tax answers."""
    return make_lead(
        middle_name="Q",
        dob="1990-01-01",
        ssn="123456789",
        address1="123 Main St",
        city="Atlanta",
        state="GA",
        filing_status="head_household",
        employment_type="W2",
        occupation="Nurse",
        has_dependents="yes",
        num_dependents="2",
        child_care="yes",
        has_irs_pin="yes",
        irs_pin="123456",
        license_number="GA-1234",
        license_expiration="2027-05-01",
        id_document_url="https://leads.example.com/uploads/lead-1.jpg",
    )
