"""
Shared pytest fixtures: in-memory database, API client, user/event factories.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_USERS"] = "false"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"

from datetime import time, timedelta

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.application.services import event_service
from app.domain.models.event import Event
from app.domain.models.user import User, UserRole
from app.domain.schemas.event import EventCreate
from app.infrastructure.database import Base, SessionLocal, engine
from app.infrastructure.repositories.event_repository import SQLAlchemyEventRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


@pytest.fixture(autouse=True)
def schema():
    """Fresh tables for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def event_repo(db):
    return SQLAlchemyEventRepository(db, Event)


@pytest.fixture
def user_repo(db):
    return SQLAlchemyUserRepository(db, User)


@pytest.fixture
def make_user(user_repo):
    """Create a user directly, skipping password hashing"""
    counter = {"n": 0}

    def _make(role=UserRole.STUDENT, email=None, name=None):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@college.edu",
            password_hash="not-a-real-hash",
            name=name or f"User {counter['n']}",
            role=role,
            active=True,
        )
        return user_repo.save(user)

    return _make


@pytest.fixture
def event_payload():
    """Build an EventCreate scheduled relative to today in the app timezone"""

    def _payload(days_ahead=1, start=time(10, 0), max_participants=2, **overrides):
        fields = dict(
            title="Tech Talk",
            description="An evening of lightning talks",
            date=event_service.get_current_date() + timedelta(days=days_ahead),
            time=start,
            department="Computer Science",
            location="Auditorium A",
            max_participants=max_participants,
            image="talk.png",
        )
        fields.update(overrides)
        return EventCreate(**fields)

    return _payload


@pytest.fixture
def client():
    """Create a test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register an account through the API and return (token, user json)"""

    def _register(email, role="STUDENT", password="secret123", name="Test User", **extra):
        body = {"email": email, "password": password, "name": name, "role": role, **extra}
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 200, response.text
        data = response.json()
        return data["token"], data["user"]

    return _register


@pytest.fixture
def bearer():
    def _bearer(token):
        return {"Authorization": f"Bearer {token}"}

    return _bearer
