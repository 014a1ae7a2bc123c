"""Pytest fixtures for API tests."""

import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LLM_MAX_RETRIES", "1")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.db import models  # noqa: F401  # Imported for side effects
from app.db.base import Base
from app.db.models import FlashCard, StudySession, StudySet, User, study_set_flash_cards
from app.main import create_app
from app.services.stats import StudyCalendar

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
DEFAULT_PASSWORD = "Secret123!"

TABLES = [
    User.__table__,
    StudySet.__table__,
    FlashCard.__table__,
    study_set_flash_cards,
    StudySession.__table__,
]


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def fixed_calendar() -> StudyCalendar:
    return StudyCalendar(clock=lambda: FIXED_NOW)


@pytest.fixture()
def client(db_session: Session, fixed_calendar: StudyCalendar) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_study_calendar] = lambda: fixed_calendar
    with TestClient(app) as test_client:
        yield test_client


def signup_payload(email: str, password: str = DEFAULT_PASSWORD) -> dict:
    return {
        "firstName": "Ada",
        "lastName": "Learner",
        "email": email,
        "password1": password,
        "dateOfBirth": "1990-05-01",
    }


def register_and_login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Sign up a user and return an Authorization header for them."""

    client.post("/api/auth/signup", json=signup_payload(email, password))
    login_response = client.post("/api/auth/login", json={"email": email, "password": password})
    token = login_response.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(client: TestClient) -> dict:
    return register_and_login(client, "learner@example.com")


@pytest.fixture()
def create_study_set(client: TestClient) -> Callable[..., str]:
    """Return a helper creating a study set and returning its id."""

    def _create(headers: dict, title: str = "Spanish basics", cards: int = 2) -> str:
        payload = {
            "title": title,
            "description": "Everyday words",
            "language": "es-ES",
            "flashCards": [
                {"question": f"Question {index}", "answer": f"Answer {index}"}
                for index in range(cards)
            ],
        }
        response = client.post("/api/studysets", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
