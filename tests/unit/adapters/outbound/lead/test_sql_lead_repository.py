"""Unit tests for the SQL lead repository using SQLite in-memory."""

from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.adapters.outbound.lead import SqlLeadRepository
from app.adapters.outbound.lead.models import Base, LeadModel


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session_factory(sqlite_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


@pytest.fixture
def repository(session_factory, monkeypatch):
    """Create SQL repository backed by the in-memory database."""
    monkeypatch.setattr(
        "app.adapters.outbound.lead.sql_lead_repository.get_db_session",
        session_factory,
    )
    return SqlLeadRepository()


@pytest.mark.asyncio
async def test_save_and_list_round_trip(repository, full_intake_lead):
    """Test that saving and listing leads works correctly."""
    lead_id = await repository.save(full_intake_lead)

    leads = await repository.list()

    assert lead_id == 1
    assert len(leads) == 1
    stored = leads[0]
    assert stored.id == 1
    assert stored.first_name == "Jane"
    assert stored.last_name == "Doe"
    assert stored.phone == "5551234567"
    assert stored.email == "jane.doe@example.com"
    assert stored.zip_code == "30301"
    assert stored.preferred_filing == "remote"
    assert stored.ref_code == "ray"
    assert stored.consent is True
    assert stored.wants_advance is False
    assert stored.image_url == "https://leads.example.com/uploads/lead-1.jpg"
    assert stored.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_email_is_stored_lowercase(repository, make_lead, session_factory):
    """Test emails are normalised before insert."""
    await repository.save(make_lead(email="Jane.Doe@Example.COM"))

    db = session_factory()
    try:
        assert db.query(LeadModel).one().email == "jane.doe@example.com"
    finally:
        db.close()


@pytest.mark.asyncio
async def test_list_newest_first_with_pagination(repository, make_lead):
    """Test ordering by creation time and limit/offset."""
    base = make_lead().submitted_at
    for minutes, name in ((0, "Ann"), (2, "Cal"), (1, "Bob")):
        await repository.save(
            make_lead(first_name=name, submitted_at=base + timedelta(minutes=minutes))
        )

    leads = await repository.list()
    assert [lead.first_name for lead in leads] == ["Cal", "Bob", "Ann"]

    page = await repository.list(limit=2, offset=1)
    assert [lead.first_name for lead in page] == ["Bob", "Ann"]


@pytest.mark.asyncio
async def test_count(repository, make_lead):
    """Test count reflects stored rows."""
    assert await repository.count() == 0

    await repository.save(make_lead())
    await repository.save(make_lead())

    assert await repository.count() == 2


@pytest.mark.asyncio
async def test_empty_optional_columns_are_null(repository, make_lead):
    """Test empty phone and ref code are stored as NULL."""
    await repository.save(make_lead(phone="", ref_code=""))

    stored = (await repository.list())[0]

    assert stored.phone is None
    assert stored.ref_code is None
