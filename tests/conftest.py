"""Pytest configuration and shared fixtures.

Set DATABASE_URL before any app module imports to use SQLite for tests.
Provides reusable fixtures: db session, API client, stage record factories.
"""
import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Force SQLite before any app import
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///./test.db"

# Importing the session module registers the SQLite foreign-key listener for every engine
import app.db.session  # noqa: F401
from app.db.crud.registry import STAGES
from app.db.crud.stages import create_record
from app.models import Base


# ── Database fixtures ────────────────────────────────────────────────

@pytest.fixture()
def db_engine():
    """In-memory SQLite engine with all tables."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(db_engine):
    """SQLAlchemy session bound to in-memory SQLite."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture()
def client():
    """TestClient against the app, with tables created on its engine and dropped afterwards."""
    from fastapi.testclient import TestClient

    from app.db.session import engine
    from app.main import app

    Base.metadata.create_all(bind=engine)
    try:
        yield TestClient(app)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


# ── Record payloads ──────────────────────────────────────────────────

def identification_payload(**kwargs) -> dict:
    defaults = {
        "procurement_division": "Central Procurement",
        "division": "Works",
        "financial_year": 2024,
        "manager_email": "manager@agency.org",
        "division_manager_phone": "0111",
        "contract_manager_phone": "0112",
        "tender_title": "Road Repair",
        "category": "Works",
        "quantity": 1,
        "budget": 500000,
        "estimated_amount": 480000,
        "technical_specification": "Resurface 12 km of road",
        "timeline_for_delivery": "2024-12-31",
        "status": "Approved",
    }
    defaults.update(kwargs)
    return defaults


def planning_payload(**kwargs) -> dict:
    defaults = {
        "tender_title": "Road Repair",
        "tender_final_given_title": "Road Repair Lot 1",
        "tender_methods": "Open tender",
        "estimated_budget": 450000,
        "tender_type": "National",
        "framework_type": "Single",
        "planned_tender_document_preparation": "2024-02-01",
        "planned_publication_date": "2024-03-01",
        "planned_bid_opening_date": "2024-04-01",
        "planned_evaluation_date": "2024-04-15",
        "planned_notification_date": "2024-05-01",
        "planned_contract_closure_date": "2024-12-01",
        "planning_status": "Approved",
    }
    defaults.update(kwargs)
    return defaults


def publication_payload(**kwargs) -> dict:
    defaults = {
        "tender_title": "Road Repair",
        "initial_procurement_plan_publication": "2024-03-01",
        "quarter_ii_procurement_plan_publication": "2024-04-01",
        "quarter_iii_procurement_plan_publication": "2024-07-01",
        "revision": "Initial",
        "tat_publication": 14,
    }
    defaults.update(kwargs)
    return defaults


def publication_tender_payload(**kwargs) -> dict:
    defaults = {
        "tender_title": "Road Repair",
        "date_of_preparation_of_tender_document": "2024-03-05",
        "date_of_submission_of_the_document_committee_for_approval": "2024-03-10",
        "date_of_cbm_approval": "2024-03-15",
        "date_of_tender_publication": "2024-03-20",
    }
    defaults.update(kwargs)
    return defaults


# ── Record factories ─────────────────────────────────────────────────

@pytest.fixture()
def make_identification(db):
    def _make(**kwargs):
        return create_record(db, STAGES["identification"], identification_payload(**kwargs))
    return _make


@pytest.fixture()
def make_planning(db):
    def _make(identification=None, **kwargs):
        if identification is not None:
            kwargs["identification_id"] = identification.id
        return create_record(db, STAGES["planning"], planning_payload(**kwargs))
    return _make


@pytest.fixture()
def make_publication(db):
    def _make(planning=None, **kwargs):
        if planning is not None:
            kwargs["planning_id"] = planning.id
        return create_record(db, STAGES["publication"], publication_payload(**kwargs))
    return _make


@pytest.fixture()
def make_publication_tender(db):
    def _make(publication=None, **kwargs):
        if publication is not None:
            kwargs["publication_id"] = publication.id
        return create_record(db, STAGES["publicationTender"], publication_tender_payload(**kwargs))
    return _make


# ── Markers ──────────────────────────────────────────────────────────

def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks slow tests")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "unit: marks unit tests")
