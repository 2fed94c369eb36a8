"""Submit lead use case."""

import logging
from typing import Optional, Sequence

from app.application.dtos.base import DTO
from app.application.dtos.lead import LeadRecord, LeadSubmission, TaxDocument
from app.application.ports.lead_repository import LeadRepository
from app.application.ports.preparer_directory import PreparerDirectory
from app.application.ports.upload_storage import StoredFile
from app.infrastructure.logging.logger import log_event


class SubmissionResult(DTO):
    """Outcome of a lead submission."""

    lead_id: Optional[int] = None
    lead: LeadRecord


class SubmitLeadUseCase:
    """
    Turn a validated form submission into a lead record.

    Resolves the assigned preparer, builds the record and stores it. Storage
    is best effort: a repository failure is logged and the submission still
    succeeds so notifications can go out.
    """

    def __init__(
        self,
        preparer_directory: PreparerDirectory,
        lead_repository: LeadRepository,
    ) -> None:
        """
        Initialize use case.

        Args:
            preparer_directory: Referral code lookup
            lead_repository: Lead storage
        """
        self._preparer_directory = preparer_directory
        self._lead_repository = lead_repository

    def build_lead(
        self,
        submission: LeadSubmission,
        id_document: Optional[StoredFile] = None,
        tax_documents: Sequence[StoredFile] = (),
    ) -> LeadRecord:
        """
        Build the lead record for a submission.

        Args:
            submission: Validated form fields
            id_document: Stored ID document, if uploaded
            tax_documents: Stored tax documents

        Returns:
            LeadRecord with the assigned preparer
        """
        preparer = self._preparer_directory.resolve(submission.ref_code)

        return LeadRecord(
            first_name=submission.first_name,
            middle_name=submission.middle_name,
            last_name=submission.last_name,
            dob=submission.dob,
            ssn=submission.ssn,
            phone=submission.phone,
            email=submission.email,
            address1=submission.address1,
            address2=submission.address2,
            city=submission.city,
            state=submission.state,
            zip_code=submission.zip_code,
            filing_status=submission.filing_status,
            employment_type=submission.employment_type,
            occupation=submission.occupation,
            has_dependents=submission.has_dependents or "no",
            num_dependents=submission.num_dependents or "0",
            dependents_under_24=submission.dependents_under_24 or "no",
            dependents_in_college=submission.dependents_in_college or "no",
            child_care=submission.child_care or "no",
            claimed_as_dependent=submission.claimed_as_dependent or "no",
            in_college=submission.in_college or "no",
            has_mortgage=submission.has_mortgage or "no",
            denied_eitc=submission.denied_eitc or "no",
            has_irs_pin=submission.has_irs_pin or "no",
            irs_pin=submission.irs_pin,
            license_number=submission.license_number,
            license_expiration=submission.license_expiration,
            id_document_url=id_document.url if id_document else None,
            id_document_path=id_document.path if id_document else None,
            tax_documents=tuple(
                TaxDocument(name=doc.name, url=doc.url, path=doc.path) for doc in tax_documents
            ),
            preferred_filing=submission.preferred_filing or "remote",
            ref_code=preparer.code,
            consent=True,
            wants_advance=submission.wants_advance,
            lang=submission.lang or "en",
            preparer=preparer,
        )

    async def execute(
        self,
        submission: LeadSubmission,
        id_document: Optional[StoredFile] = None,
        tax_documents: Sequence[StoredFile] = (),
    ) -> SubmissionResult:
        """
        Build and store a lead.

        Args:
            submission: Validated form fields
            id_document: Stored ID document, if uploaded
            tax_documents: Stored tax documents

        Returns:
            SubmissionResult with the stored id (None if storage failed)
        """
        lead = self.build_lead(submission, id_document, tax_documents)

        log_event(
            lead.submission_id,
            component="submit",
            preparer=lead.preparer.code,
            requested_code=submission.ref_code or None,
            wants_advance=lead.wants_advance,
            form_variant=lead.form_variant.value,
            tax_documents=len(lead.tax_documents),
        )

        lead_id: Optional[int] = None
        try:
            lead_id = await self._lead_repository.save(lead)
        except Exception as e:
            log_event(
                lead.submission_id,
                component="submit",
                level=logging.ERROR,
                error=f"Lead storage failed, continuing with notifications: {str(e)}",
            )
        else:
            log_event(lead.submission_id, component="submit", lead_id=lead_id)

        return SubmissionResult(lead_id=lead_id, lead=lead)
