"""Pytest fixtures — per-test SQLite database, fake mailer, and data helpers."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone
from typing import Optional

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from glimmer.database import Base, get_db
from glimmer.main import app
from glimmer.routers.checkins import get_encourager
from glimmer.routers.cron import get_mailer
from glimmer.services.mailer import SendResult

# Import all models so they register with Base.metadata
from glimmer.models.user import User                          # noqa: F401
from glimmer.models.check_in import CheckIn                   # noqa: F401
from glimmer.models.reminder_settings import ReminderSettings  # noqa: F401
from glimmer.models.emergency_contact import EmergencyContact  # noqa: F401
from glimmer.models.notification_log import NotificationLog, NotificationStatus, NotificationType  # noqa: F401


class FakeMailer:
    """Records every send; recipients in ``failing`` get a failed result."""

    def __init__(self, failing: Optional[set] = None, raise_for: Optional[set] = None):
        self.sent: list[dict] = []
        self.failing = failing or set()
        self.raise_for = raise_for or set()

    def send_email(self, to, subject, text, html=None):
        if to in self.raise_for:
            raise ConnectionError(f"connection to mail server lost while sending to {to}")
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        if to in self.failing:
            return SendResult(success=False, error="550 mailbox unavailable")
        return SendResult(success=True, message_id=f"<{len(self.sent)}@test>")

    def recipients(self) -> list[str]:
        return [m["to"] for m in self.sent]


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})

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
    """Yield a database session bound to the per-test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def mailer():
    return FakeMailer()


@pytest.fixture(scope="function")
def client(db_engine, mailer):
    """FastAPI TestClient with database, mailer and encourager overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_encourager] = lambda: (lambda mood: f"gentle words for {mood}")
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: build rows directly in the database
# ---------------------------------------------------------------------------
def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_user(
    db,
    email: Optional[str] = "user@example.com",
    name: Optional[str] = "Test User",
    enabled: bool = True,
    self_enabled: bool = True,
    self_days: int = 3,
    contact_enabled: bool = False,
    contact_days: int = 7,
    with_settings: bool = True,
) -> User:
    """Create a user, optionally with reminder settings."""
    user = User(email=email, display_name=name)
    db.add(user)
    db.flush()
    if with_settings:
        db.add(ReminderSettings(
            user_id=user.user_id,
            enabled=enabled,
            self_reminder_enabled=self_enabled,
            self_reminder_days=self_days,
            contact_reminder_enabled=contact_enabled,
            contact_reminder_days=contact_days,
        ))
    db.commit()
    db.refresh(user)
    return user


def add_contact(db, user: User, email: str, name: str = "Friend", enabled: bool = True) -> EmergencyContact:
    contact = EmergencyContact(user_id=user.user_id, name=name, email=email, enabled=enabled)
    db.add(contact)
    db.commit()
    return contact


def add_check_in(db, user: User, at: datetime, mood: str = "positive") -> CheckIn:
    check_in = CheckIn(
        user_id=user.user_id,
        date=datetime(at.year, at.month, at.day, tzinfo=timezone.utc),
        emoji="🙂",
        mood=mood,
        created_at=at,
    )
    db.add(check_in)
    db.commit()
    return check_in


def add_log(
    db,
    user: User,
    at: datetime,
    log_type: NotificationType = NotificationType.self_,
    log_status: NotificationStatus = NotificationStatus.sent,
) -> NotificationLog:
    log = NotificationLog(
        user_id=user.user_id,
        type=log_type,
        status=log_status,
        content="reminder",
        recipient=user.email,
        created_at=at,
    )
    db.add(log)
    db.commit()
    return log


def create_test_user(client: TestClient, name: str = "Test User", email: str = "test@example.com") -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={"display_name": name, "email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()
