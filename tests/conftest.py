"""
Shared pytest fixtures.

In-memory database, mocked chat model, a TestClient over the app factory and a
bearer-token helper.
"""

import json
from collections.abc import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from jobseeker.agents import ResumeAnalyzer
from jobseeker.api.app import create_app
from jobseeker.config import Settings
from jobseeker.db import Database, User
from jobseeker.services import PipelineRunner
from jobseeker.utils.security import create_access_token, hash_password

VALID_ANALYSIS = {
    "skills": {
        "Programming Languages": ["Go", "Python"],
        "Databases": ["PostgreSQL"],
    },
    "summary": "Backend engineer with five years of production Go and Python services.",
    "jobKeywords": ["Backend Engineer", "Software Engineer", "Platform Engineer"],
}

RESUME_TEXT = (
    "Jane Doe\nBackend Engineer\n\nExperience: built payment services in Go and Python, "
    "operated PostgreSQL clusters, owned CI pipelines.\n"
)


# ==================== Settings / Database ====================

@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        deepseek_api_key="test-key",
        jwt_secret="test-secret",
        rate_limit_enabled=False,
        analysis_base_delay=1.0,
    )


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Fresh in-memory database per test."""
    db = Database("sqlite://")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def session(database: Database) -> Generator[Session, None, None]:
    db_session = database.session()
    yield db_session
    db_session.close()


# ==================== Mock LLM ====================

@pytest.fixture
def mock_llm():
    """Chat model stand-in returning a valid analysis."""
    mock = Mock()
    mock.invoke.return_value = Mock(content=json.dumps(VALID_ANALYSIS))
    return mock


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the retry loop, recorded instead of slept."""
    return []


@pytest.fixture
def analyzer(mock_llm, sleeps) -> ResumeAnalyzer:
    return ResumeAnalyzer(mock_llm, max_attempts=3, base_delay=1.0, sleep=sleeps.append)


# ==================== API ====================

@pytest.fixture
def pipeline_runner() -> Mock:
    runner = Mock(spec=PipelineRunner)
    runner.status.return_value = {"isRunning": False}
    runner.try_start.return_value = "2026-01-01T00:00:00+00:00"
    return runner


@pytest.fixture
def app(settings, database, analyzer, pipeline_runner):
    return create_app(settings, database=database, analyzer=analyzer, pipeline_runner=pipeline_runner)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(session: Session):
    """Create a verified user and return it."""

    def _make_user(email: str = "owner@example.com", password: str = "password123") -> User:
        user = User(email=email, password_hash=hash_password(password), email_verified=True)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers(settings, make_user):
    """Bearer headers for a (new) verified user."""

    def _auth_headers(email: str = "owner@example.com") -> dict[str, str]:
        user = make_user(email)
        token = create_access_token(
            user.id, user.email, settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expires_minutes
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
