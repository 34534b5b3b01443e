import os

# Must be set before readytowork.core.config is imported
os.environ["DATABASE_URI"] = "sqlite://"
os.environ["RESEND_API_KEY"] = ""
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from readytowork.core.config import settings
from readytowork.core.security import get_password_hash
from readytowork.db.base import Base
from readytowork.db.session import get_db
from readytowork.main import app
from readytowork.models import Candidate, Employer, User
from readytowork.services import mailer
from readytowork.services.session import Principal, issue_session

PASSWORD = "Abcdef1!"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeOutbox:
    """Stands in for the Resend transport and records every send."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, params):
        if self.fail:
            raise RuntimeError("provider down")
        self.sent.append(params)
        return {"id": f"email_{len(self.sent)}"}

    def to(self, address):
        return [p for p in self.sent if address in p["to"]]

    @property
    def subjects(self):
        return [p["subject"] for p in self.sent]


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(tmp_path / "media"))

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def outbox(monkeypatch):
    fake = FakeOutbox()
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test_key")
    monkeypatch.setattr(mailer.resend.Emails, "send", staticmethod(fake.send))
    return fake


def make_candidate(db, email="ahmed@example.com", password=PASSWORD, **overrides):
    fields = {
        "first_name": "Ahmed",
        "last_name": "Khan",
        "phone": "+966501234567",
        "whatsapp": "+966501234567",
        "gender": "male",
        "nationality": "Pakistan",
        "languages": "English, Urdu",
        "job_title": "Electrician",
        "location": "Riyadh",
        "terms_accepted": True,
    }
    fields.update(overrides)
    candidate = Candidate(email=email, hashed_password=get_password_hash(password), **fields)
    db.add(candidate)
    db.commit()
    db.refresh(candidate)
    return candidate


def make_employer(db, email="hr@gulfbuilders.com", password=PASSWORD, **overrides):
    fields = {
        "responsible_person": "Fatimah Al-Harbi",
        "company_name": "Gulf Builders",
        "terms_accepted": True,
    }
    fields.update(overrides)
    employer = Employer(email=email, hashed_password=get_password_hash(password), **fields)
    db.add(employer)
    db.commit()
    db.refresh(employer)
    return employer


def make_user(db, email="user@example.com", password=PASSWORD, **overrides):
    user = User(email=email, hashed_password=get_password_hash(password), **overrides)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login_as(client, record):
    """Put a session cookie for ``record`` on the test client."""
    grant = issue_session(record)
    client.cookies.set(settings.SESSION_COOKIE_NAME, grant.token)
    return Principal.of(record)
