"""Pytest fixtures and configuration for TaskWise tests."""

import os
import tempfile

# The app module builds its engine and event log path at import time.
_TEST_DIR = tempfile.mkdtemp(prefix="taskwise-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TASKWISE_EVENT_LOG_PATH", os.path.join(_TEST_DIR, "analytics.log"))

import pytest
import uuid
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from taskwise.database.database import Base
from taskwise.database.repository import TaskRepository
from taskwise.eventlog.event_log import EventLog
from taskwise.integrations.openai_client import OpenAIClient
from taskwise.models.task import Task, TaskPriority, TaskStatus


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    from taskwise.database import models  # noqa: F401

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def event_log_path(tmp_path):
    return tmp_path / "analytics.log"


@pytest.fixture
def event_log(event_log_path):
    """EventLog writing to a per-test file (not created until first append)."""
    return EventLog(event_log_path)


@pytest.fixture
def mock_openai_sdk():
    """Stand-in for the OpenAI SDK client; set chat.completions.create per test."""
    return MagicMock()


@pytest.fixture
def make_completion():
    """Factory for fake chat completion responses carrying the given content."""
    return _completion


@pytest.fixture
def ai_client(mock_openai_sdk):
    """OpenAIClient wired to the mocked SDK (no network)."""
    return OpenAIClient(api_key="test-key", model="test-model", client=mock_openai_sdk)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "description": "Test description",
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.TODO,
        "time_estimate": 30,
        "due_date": None,
        "created_at": now,
        "updated_at": now,
        "completed_at": None,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def test_client(db_session: Session, event_log: EventLog, ai_client: OpenAIClient):
    """Create a FastAPI test client with database, event log and AI client overridden."""
    from taskwise.api.app import app
    from taskwise.api.dependencies import get_ai_client, get_event_log
    from taskwise.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_log] = lambda: event_log
    app.dependency_overrides[get_ai_client] = lambda: ai_client

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
