"""SQLAlchemy ORM models for leads."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class LeadModel(Base):
    """SQLAlchemy model for leads table."""

    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    zip_code = Column(String(10), nullable=True)
    preferred_filing = Column(String(20), nullable=True)  # "remote" or "in-person"
    ref_code = Column(String(10), nullable=True, index=True)
    consent = Column(Boolean, nullable=False, default=False)
    wants_advance = Column(Boolean, nullable=False, default=False)
    image_url = Column(String(500), nullable=True)  # Uploaded ID document
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
