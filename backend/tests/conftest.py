"""Pytest fixtures — file-backed SQLite database, fresh for every test."""
import os

SQLITE_URL = "sqlite:///./test.db"

# Must be set before the application reads its settings.
os.environ["DATABASE_URL"] = SQLITE_URL
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from campus_events.database import Base, build_engine, get_db  # noqa: E402
from campus_events.main import app  # noqa: E402
from campus_events.models.account import Role  # noqa: E402
from campus_events.services import directory_service  # noqa: E402
from campus_events.services.notification_service import get_notifier  # noqa: E402

DEFAULT_PASSWORD = "initial-pass-1"


class RecordingNotifier:
    """Stands in for SMTP; remembers every notice it was asked to send."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent = []

    def send_approval_notice(self, email, full_name, temporary_password):
        self.sent.append({
            "email": email,
            "full_name": full_name,
            "temporary_password": temporary_password,
        })
        return self.succeed


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = build_engine(SQLITE_URL)
    Base.metadata.drop_all(bind=engine)
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
def notifier():
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(db_engine, notifier):
    """FastAPI TestClient with the database and notifier dependencies overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def create_test_account(
    db,
    name: str = "Test User",
    email: str = None,
    role: str = "student",
    approved: bool = True,
    password: str = DEFAULT_PASSWORD,
) -> dict:
    """Sign an account up directly and optionally approve it; returns a plain dict."""
    email = email or f"{name.lower().replace(' ', '.')}@x.edu"
    account = directory_service.signup(
        db, full_name=name, email=email, password=password, role=Role(role),
    )
    if approved:
        account.is_approved = True
        db.commit()
    account_id = account.account_id
    return {
        "account_id": account_id,
        "email": email,
        "password": password,
        "headers": {"X-Account-Id": account_id},
    }


def event_payload(
    title: str = "Test Event",
    start_offset_hours: int = 24,
    duration_hours: int = 2,
    **overrides,
) -> dict:
    start = datetime.now(timezone.utc) + timedelta(hours=start_offset_hours)
    end = start + timedelta(hours=duration_hours)
    payload = {
        "title": title,
        "description": "An event on campus",
        "category": "social",
        "start_time": start.isoformat(),
        "end_time": end.isoformat(),
    }
    payload.update(overrides)
    return payload


def create_test_event(client: TestClient, organizer: dict, **overrides) -> dict:
    """Helper — POST /api/events and return response JSON."""
    resp = client.post("/api/events/", json=event_payload(**overrides), headers=organizer["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_approved_event(client: TestClient, organizer: dict, admin: dict, **overrides) -> dict:
    event = create_test_event(client, organizer, **overrides)
    resp = client.post(f"/api/events/{event['event_id']}/approve", headers=admin["headers"])
    assert resp.status_code == 200, resp.text
    return resp.json()
