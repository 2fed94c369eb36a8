"""Unit tests for the submit lead use case."""

from unittest.mock import AsyncMock

import pytest

from app.adapters.outbound.lead import InMemoryLeadRepository
from app.adapters.outbound.preparers.static_preparer_directory import StaticPreparerDirectory
from app.application.dtos.lead import LeadSubmission
from app.application.dtos.preparer import Preparer
from app.application.ports.upload_storage import StoredFile
from app.application.use_cases.submit_lead_use_case import SubmitLeadUseCase
from app.domain.value_objects.form_variant import FormVariant


@pytest.fixture
def directory():
    """Directory with a default and one referring preparer."""
    return StaticPreparerDirectory(
        [
            Preparer(code="ow", first_name="Owliver", last_name="Owl", email="owliver@example.com"),
            Preparer(code="ray", first_name="Ray", last_name="Hamilton", email="ray@example.com"),
        ],
        default_code="ow",
    )


@pytest.fixture
def repository():
    return InMemoryLeadRepository()


@pytest.fixture
def use_case(directory, repository):
    return SubmitLeadUseCase(directory, repository)


def _submission(**overrides) -> LeadSubmission:
    fields = {
        "firstName": "Jane",
        "lastName": "Doe",
        "phone": "(555) 123-4567",
        "email": "Jane.Doe@Example.com",
        "zipCode": "30301",
        "consent": "true",
    }
    fields.update(overrides)
    return LeadSubmission.model_validate(fields)


@pytest.mark.asyncio
async def test_assigns_referring_preparer(use_case):
    """Test the referral code picks the preparer case-insensitively."""
    result = await use_case.execute(_submission(refCode="RAY"))

    assert result.lead.preparer.code == "ray"
    assert result.lead.ref_code == "ray"


@pytest.mark.asyncio
async def test_unknown_code_falls_back_to_default(use_case):
    """Test an unknown referral code is assigned to the default preparer."""
    result = await use_case.execute(_submission(refCode="nobody"))

    assert result.lead.preparer.code == "ow"


@pytest.mark.asyncio
async def test_missing_answers_get_defaults(use_case):
    """Test unanswered questions are stored with their defaults."""
    result = await use_case.execute(_submission())
    lead = result.lead

    assert lead.has_dependents == "no"
    assert lead.num_dependents == "0"
    assert lead.preferred_filing == "remote"
    assert lead.lang == "en"
    assert lead.consent is True
    assert lead.email == "jane.doe@example.com"


@pytest.mark.asyncio
async def test_advance_request_is_simple_variant(use_case):
    """Test an advance request without personal details is a simple lead."""
    result = await use_case.execute(_submission(wantsAdvance="true"))

    assert result.lead.form_variant == FormVariant.SIMPLE_ADVANCE


@pytest.mark.asyncio
async def test_uploads_are_attached(use_case):
    """Test stored uploads are carried on the lead."""
    id_document = StoredFile(
        name="license.jpg", url="https://x.example/uploads/lead-1.jpg", path="/tmp/lead-1.jpg"
    )
    w2 = StoredFile(name="w2.pdf", url="https://x.example/uploads/lead-2.pdf", path="/tmp/lead-2.pdf")

    result = await use_case.execute(_submission(), id_document, [w2])

    assert result.lead.id_document_url == "https://x.example/uploads/lead-1.jpg"
    assert result.lead.id_document_path == "/tmp/lead-1.jpg"
    assert [doc.name for doc in result.lead.tax_documents] == ["w2.pdf"]


@pytest.mark.asyncio
async def test_lead_is_stored(use_case, repository):
    """Test the lead is saved and its id returned."""
    result = await use_case.execute(_submission())

    assert result.lead_id == 1
    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_storage_failure_still_returns_lead(directory):
    """Test a repository error does not fail the submission."""
    repository = AsyncMock()
    repository.save.side_effect = RuntimeError("database down")
    use_case = SubmitLeadUseCase(directory, repository)

    result = await use_case.execute(_submission())

    assert result.lead_id is None
    assert result.lead.first_name == "Jane"
