"""Pytest fixtures — SQLite-backed API client plus an in-memory repository."""
import os

# The app's own engine is only used by the startup hook; keep it off disk.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, get_db
from app.main import app
from app.models.user import User, UserRole
from app.models.venue import Venue
from app.services.locks import KeyedLock
from app.services.notifications import BroadcastRelay
from app.services.booking_service import BookingWorkflow
from tests.fakes import InMemoryBookingRepository, RecordingRelay

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# In-memory workflow (no database)
# ---------------------------------------------------------------------------
@pytest.fixture
def repo():
    return InMemoryBookingRepository()


@pytest.fixture
def events():
    return RecordingRelay()


@pytest.fixture
def workflow(repo, events):
    return BookingWorkflow(repo, events, booking_lock=KeyedLock(), venue_lock=KeyedLock())


@pytest.fixture
def people(repo):
    """One user per role, stored in the fake repository."""
    return {
        role: repo.put_user(User(
            user_id=f"{role.value}-id",
            username=role.value,
            email=f"{role.value}@example.org",
            first_name=role.value.title(),
            last_name="Tester",
            role=role,
            department="Research",
        ))
        for role in UserRole
    }


@pytest.fixture
def hall(repo):
    return repo.put_venue(Venue(
        venue_id="hall-a",
        name="Lecture Hall - Alpha",
        capacity=150,
        floor="Ground",
        amenities=["AC", "Projector"],
    ))


@pytest.fixture
def broadcast():
    return BroadcastRelay()


# ---------------------------------------------------------------------------
# Helpers: create records via the API, return the JSON response dict
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, username: str = "user", role: str = "user") -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={
        "username": username,
        "email": f"{username}@example.org",
        "password": "admin123",
        "first_name": username.title(),
        "last_name": "Tester",
        "role": role,
        "department": "Research & Development",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_venue(client: TestClient, name: str = "Main Auditorium", capacity: int = 500) -> dict:
    """Helper — POST /api/venues and return response JSON."""
    resp = client.post("/api/venues/", json={
        "name": name,
        "capacity": capacity,
        "floor": "Ground",
        "amenities": ["AC", "Audio System"],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def booking_payload(venue_id: str, event_date: str = "2024-03-01", start: str = "10:00",
                    end: str = "12:00", title: str = "Quarterly Review") -> dict:
    return {
        "venue_id": venue_id,
        "event_title": title,
        "event_description": "Review of programme milestones",
        "meeting_type": "offline",
        "event_date": event_date,
        "start_time": start,
        "end_time": end,
        "expected_attendees": 40,
        "department": "Research & Development",
        "requested_resources": ["Projector & Screen", "Microphone System"],
    }
