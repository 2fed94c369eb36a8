"""SQL-backed lead repository adapter (MySQL in production)."""

from datetime import timezone

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.dtos.lead import LeadRecord, StoredLead
from app.application.ports.lead_repository import LeadRepository
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .models import LeadModel


class SqlLeadRepository(LeadRepository):
    """SQLAlchemy implementation of lead repository."""

    def _model_to_dto(self, model: LeadModel) -> StoredLead:
        """
        Convert LeadModel to StoredLead DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            StoredLead DTO
        """
        # Ensure created_at is timezone-aware (MySQL and SQLite return naive datetimes)
        created_at = model.created_at
        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return StoredLead(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            email=model.email,
            zip_code=model.zip_code,
            preferred_filing=model.preferred_filing,
            ref_code=model.ref_code,
            consent=bool(model.consent),
            wants_advance=bool(model.wants_advance),
            image_url=model.image_url,
            created_at=created_at,
        )

    def _dto_to_model(self, lead: LeadRecord) -> LeadModel:
        """
        Convert LeadRecord to a new LeadModel.

        Only the contact and routing columns are stored; sensitive intake
        fields travel with the notifications and are not persisted.

        Args:
            lead: Lead record

        Returns:
            LeadModel instance
        """
        return LeadModel(
            first_name=lead.first_name,
            last_name=lead.last_name,
            phone=lead.phone or None,
            email=lead.email.lower() if lead.email else None,
            zip_code=lead.zip_code,
            preferred_filing=lead.preferred_filing or "remote",
            ref_code=lead.ref_code or None,
            consent=lead.consent,
            wants_advance=lead.wants_advance,
            image_url=lead.id_document_url,
            created_at=lead.submitted_at,
        )

    async def save(self, lead: LeadRecord) -> int:
        """
        Insert a lead.

        Args:
            lead: Lead record to save

        Returns:
            Auto-increment id of the new row
        """
        db: Session = get_db_session()
        try:
            model = self._dto_to_model(lead)
            db.add(model)
            db.commit()
            db.refresh(model)
            return model.id
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Database error while saving lead for submission {lead.submission_id}: {str(e)}"
            )
            raise
        finally:
            db.close()

    async def list(self, limit: int = 100, offset: int = 0) -> list[StoredLead]:
        """
        List stored leads, newest first.

        Args:
            limit: Maximum number of leads to return
            offset: Number of leads to skip

        Returns:
            List of stored leads
        """
        db: Session = get_db_session()
        try:
            models = (
                db.query(LeadModel)
                .order_by(LeadModel.created_at.desc(), LeadModel.id.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )
            return [self._model_to_dto(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing leads: {str(e)}")
            raise
        finally:
            db.close()

    async def count(self) -> int:
        """
        Count stored leads.

        Returns:
            Total number of stored leads
        """
        db: Session = get_db_session()
        try:
            return db.query(func.count(LeadModel.id)).scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Database error while counting leads: {str(e)}")
            raise
        finally:
            db.close()
