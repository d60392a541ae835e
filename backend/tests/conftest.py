import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables for tests before the app reads its settings
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')
os.environ.setdefault("PYTEST_RUN", "1")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from hire_api.api.dependencies import get_db  # noqa: E402
from hire_api.core.config import settings  # noqa: E402
from hire_api.database import Base  # noqa: E402
from hire_api.main import app  # noqa: E402

ADMIN_HEADERS = {"X-Admin-Token": "test-admin"}


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture outgoing email instead of talking to an SMTP server."""
    sent = []

    def fake_send(recipient, subject, body, html=None):
        sent.append({"to": recipient, "subject": subject, "body": body})
        return True

    monkeypatch.setattr("hire_api.api.api_inquiry.send_email", fake_send)
    monkeypatch.setattr("hire_api.services.inquiry_notifications.send_email", fake_send)
    return sent


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    yield Session
    engine.dispose()


@pytest.fixture
def client(monkeypatch, db_session_factory):
    def override_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "test-admin")
    app.dependency_overrides[get_db] = override_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_db, None)
