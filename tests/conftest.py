"""Shared test fixtures for the consultation desk test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, CSRF off)
- client: Flask test client
- db_session: clean database per test (tables created/dropped)
- seed_data: admin user plus a handful of consultations in different states
- booking_form: a valid intake payload with a future preferred date
- make_consultation: factory for extra consultation rows
"""

import secrets
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from werkzeug.security import generate_password_hash

from consultdesk import create_app
from consultdesk.extensions import db as _db
from consultdesk.models.consultation import ConsultationRequest
from consultdesk.models.user import User


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def no_emails():
    """Stub out booking emails so booking tests don't depend on SMTP config."""
    with patch("consultdesk.services.booking_service.send_booking_emails") as mock_send:
        yield mock_send


@pytest.fixture
def booking_form():
    """A complete, valid booking payload."""
    return {
        "first_name": "Dana",
        "last_name": "Reyes",
        "email": "dana@northwindradio.com",
        "phone": "555-123-4567",
        "company": "Northwind Radio",
        "title": "VP Content",
        "industry": "Radio",
        "company_size": "51-100 employees",
        "timezone": "Pacific Time (PT)",
        "preferred_date": (date.today() + timedelta(days=7)).isoformat(),
        "preferred_time": "10:00 AM",
        "urgency": "medium",
        "current_challenges": "Too much manual work producing show notes.",
        "specific_interests": ["Content Automation", "Personalization"],
        "hear_about_us": "Conference talk",
    }


def _build_consultation(**overrides):
    fields = {
        "consultation_id": f"CONS-1700000000000-{secrets.token_hex(5)[:9]}",
        "first_name": "Sam",
        "last_name": "Lee",
        "email": "sam@example.com",
        "company": "Example Media",
        "title": "CEO",
        "industry": "Digital Media",
        "company_size": "11-50 employees",
        "timezone": "Eastern Time (ET)",
        "preferred_date": date.today() + timedelta(days=3),
        "preferred_time": "2:00 PM",
        "urgency": "medium",
        "current_challenges": "Scaling content production.",
        "specific_interests": [],
        "estimated_value": 40000,
        "priority_score": 80,
        "status": "pending",
    }
    fields.update(overrides)
    return ConsultationRequest(**fields)


@pytest.fixture
def make_consultation(db_session):
    """Factory that adds and commits a ConsultationRequest."""

    def _make(**overrides):
        consultation = _build_consultation(**overrides)
        _db.session.add(consultation)
        _db.session.commit()
        return consultation

    return _make


@pytest.fixture
def seed_data(db_session):
    """Seed the database with an admin user and three consultations.

    Returns a dict with the created objects and their plain IDs.
    """
    # --- Admin user ---
    admin = User(
        email="admin@tasakadigital.com",
        password_hash=generate_password_hash("admin123"),
        full_name="Admin User",
        is_admin=True,
    )
    _db.session.add(admin)

    # --- Consultations ---
    now = datetime.now(timezone.utc)
    pending = _build_consultation(
        consultation_id="CONS-1700000000000-pending01",
        first_name="Priya",
        last_name="Shah",
        email="priya@harborpress.com",
        company="Harbor Press",
        industry="Publishing",
        urgency="high",
        estimated_value=78000,
        priority_score=100,
        created_at=now - timedelta(days=1),
    )
    confirmed = _build_consultation(
        consultation_id="CONS-1700000000001-confirm01",
        first_name="Marco",
        last_name="Diaz",
        email="marco@brightstream.tv",
        company="BrightStream TV",
        industry="Television",
        urgency="low",
        status="confirmed",
        estimated_value=32000,
        priority_score=60,
        created_at=now - timedelta(days=10),
    )
    completed = _build_consultation(
        consultation_id="CONS-1700000000002-complet01",
        first_name="Ava",
        last_name="Chen",
        email="ava@podhouse.fm",
        company="PodHouse",
        industry="Podcasting",
        status="completed",
        estimated_value=25000,
        priority_score=55,
        preferred_date=date.today() - timedelta(days=5),
        created_at=now - timedelta(days=40),
    )
    _db.session.add_all([pending, confirmed, completed])
    _db.session.commit()

    return {
        "admin": admin,
        "admin_id": admin.id,
        "pending": pending,
        "pending_id": pending.id,
        "confirmed": confirmed,
        "confirmed_id": confirmed.id,
        "completed": completed,
        "completed_id": completed.id,
    }

