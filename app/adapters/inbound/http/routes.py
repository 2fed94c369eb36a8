"""HTTP routes."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Header, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile

from app.adapters.inbound.http.schemas import (
    LeadListResponse,
    LeadSubmissionResponse,
    PreparerCard,
    PreparerCardResponse,
    PreparerListResponse,
    PreparerSummary,
    StoredLeadResponse,
)
from app.application.dtos.lead import LeadSubmission
from app.application.ports.upload_storage import StoredFile, UploadRejectedError
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger
from app.infrastructure.wiring.dependencies import (
    create_lead_repository,
    create_notification_dispatcher,
    create_preparer_directory,
    create_rate_limiter,
    create_submit_lead_use_case,
    create_upload_storage,
)

router = APIRouter()

# Wired once at import; the directory and channel credentials are read-only afterwards
_preparer_directory = create_preparer_directory()
_lead_repository = create_lead_repository()
_submit_lead_use_case = create_submit_lead_use_case(_preparer_directory, _lead_repository)
_dispatcher = create_notification_dispatcher()
_upload_storage = create_upload_storage()
_rate_limiter = create_rate_limiter()

MAX_TAX_DOCUMENTS = 10
SUCCESS_MESSAGE = "Thank you! Your tax intake form has been submitted successfully."


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _is_authorized(api_key: Optional[str]) -> bool:
    return bool(settings.admin_api_key) and api_key == settings.admin_api_key


def _validation_messages(error: ValidationError) -> list[str]:
    """Human-readable validation messages, without pydantic's 'Value error, ' prefix."""
    return [str(detail["msg"]).removeprefix("Value error, ") for detail in error.errors()]


def _uploads(form: FormData, field: str) -> list[UploadFile]:
    return [
        item
        for item in form.getlist(field)
        if isinstance(item, UploadFile) and item.filename
    ]


async def _store(upload: UploadFile, base_url: str) -> StoredFile:
    return await _upload_storage.save(
        upload.filename or "upload",
        upload.content_type,
        upload.file,
        base_url,
    )


async def _store_uploads(
    form: FormData, base_url: str
) -> tuple[Optional[StoredFile], list[StoredFile]]:
    """
    Store the ID document and tax documents of a submission.

    The legacy ``image`` field is used as the ID document when ``idDocument``
    is absent. Either every file is stored or none is: when one upload is
    rejected, the files already written are removed.
    """
    tax_uploads = _uploads(form, "taxDocuments")
    if len(tax_uploads) > MAX_TAX_DOCUMENTS:
        raise UploadRejectedError(f"Too many tax documents (max {MAX_TAX_DOCUMENTS}).")

    id_uploads = _uploads(form, "idDocument")[:1] or _uploads(form, "image")[:1]

    stored: list[StoredFile] = []
    try:
        for upload in id_uploads + tax_uploads:
            stored.append(await _store(upload, base_url))
    except UploadRejectedError:
        for stored_file in stored:
            await _upload_storage.delete(stored_file)
        raise

    if id_uploads:
        return stored[0], stored[1:]
    return None, stored


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status and server time
    """
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.post(
    "/api/leads",
    status_code=status.HTTP_200_OK,
    response_model=LeadSubmissionResponse,
)
async def submit_lead(request: Request, background_tasks: BackgroundTasks):
    """
    Accept a tax intake or advance request form.

    The lead is stored and the response returned before any notification is
    sent; notifications are dispatched as a background task afterwards.

    Args:
        request: Multipart form request from the intake wizard
        background_tasks: Tasks run after the response is sent

    Returns:
        Submission acknowledgment with the stored lead id
    """
    client_ip = request.client.host if request.client else "unknown"
    if not await _rate_limiter.hit(client_ip):
        return _error(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many submissions, please try again later.",
        )

    form = await request.form()
    fields = {key: value for key, value in form.multi_items() if isinstance(value, str)}

    try:
        submission = LeadSubmission.model_validate(fields)
    except ValidationError as e:
        details = _validation_messages(e)
        logger.info(f"Lead submission rejected: {details}")
        return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", details=details)

    base_url = settings.public_base_url or str(request.base_url)
    try:
        id_document, tax_documents = await _store_uploads(form, base_url)
    except UploadRejectedError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    result = await _submit_lead_use_case.execute(submission, id_document, tax_documents)

    background_tasks.add_task(_dispatcher.dispatch, result.lead)

    return LeadSubmissionResponse(message=SUCCESS_MESSAGE, leadId=result.lead_id)


@router.get("/api/leads", status_code=status.HTTP_200_OK, response_model=LeadListResponse)
async def list_leads(x_api_key: Optional[str] = Header(None)):
    """
    List the 100 most recent leads (requires the admin API key).

    Args:
        x_api_key: Value of the x-api-key header

    Returns:
        Total count and recent leads
    """
    if not _is_authorized(x_api_key):
        return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    try:
        leads = await _lead_repository.list(limit=100, offset=0)
        total = await _lead_repository.count()
    except Exception as e:
        logger.error(f"Error fetching leads: {str(e)}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch leads")

    return LeadListResponse(
        total=total,
        leads=[
            StoredLeadResponse(
                id=lead.id,
                firstName=lead.first_name,
                lastName=lead.last_name,
                phone=lead.phone,
                email=lead.email,
                zipCode=lead.zip_code,
                preferredFiling=lead.preferred_filing,
                refCode=lead.ref_code,
                consent=lead.consent,
                wantsAdvance=lead.wants_advance,
                imageUrl=lead.image_url,
                createdAt=lead.created_at,
            )
            for lead in leads
        ],
    )


@router.get(
    "/api/preparer/by-code",
    status_code=status.HTTP_200_OK,
    response_model=PreparerCardResponse,
)
async def get_preparer_by_code(code: Optional[str] = None) -> PreparerCardResponse:
    """
    Public preparer card for a referral code.

    Unknown or missing codes resolve to the default preparer.

    Args:
        code: Referral code (case-insensitive)

    Returns:
        Preparer card without contact email
    """
    preparer = _preparer_directory.resolve(code)
    return PreparerCardResponse(preparer=PreparerCard.from_preparer(preparer))


@router.get(
    "/api/preparer/all",
    status_code=status.HTTP_200_OK,
    response_model=PreparerListResponse,
)
async def list_preparers(x_api_key: Optional[str] = Header(None)):
    """
    List all preparers with their emails (requires the admin API key).

    Args:
        x_api_key: Value of the x-api-key header

    Returns:
        Directory listing
    """
    if not _is_authorized(x_api_key):
        return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    preparers = _preparer_directory.list()
    return PreparerListResponse(
        total=len(preparers),
        defaultCode=_preparer_directory.default_code,
        preparers=[
            PreparerSummary(
                code=preparer.code,
                firstName=preparer.first_name,
                lastName=preparer.last_name,
                email=preparer.email,
            )
            for preparer in preparers
        ],
    )
