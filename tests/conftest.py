import os
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PAYMENT_SANDBOX", "true")
os.environ.pop("CAMP_YEAR", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from summercamp.db.session import Base, get_db
from summercamp.api.deps import get_payment_gateway, get_today
from summercamp.main import app
from summercamp.models import booking, child, consent_form, email_log, payment  # noqa: F401
from summercamp.services import email_service
from summercamp.services.payment_gateway import SandboxGateway

# Saturday before the 2026 camp season; July 1 2026 is a Wednesday
TODAY = date(2026, 6, 20)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def sent_emails(monkeypatch):
    outbox = []

    def fake_send(to_email, subject, body, attachments):
        outbox.append({"to": to_email, "subject": subject, "body": body, "attachments": attachments})

    monkeypatch.setattr(email_service, "send_email", fake_send)
    return outbox


@pytest.fixture
def gateway():
    return SandboxGateway()


@pytest.fixture
def client(db_session, gateway, sent_emails):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def booking_payload(**overrides):
    body = {
        "product": "kidsCamp",
        "location": "abuDhabi",
        "plan": "1-Day Access",
        "parentName": "Mariam Al Hashimi",
        "parentEmail": "mariam@example.com",
        "parentPhone": "0501234567",
        "parentAddress": "Villa 12, Khalifa City, Abu Dhabi",
        "children": [
            {"name": "Omar", "dateOfBirth": "2018-03-14", "gender": "boy"},
        ],
        "startDate": "2026-07-01",
    }
    body.update(overrides)
    return body
