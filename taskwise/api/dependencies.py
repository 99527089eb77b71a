"""FastAPI dependencies for TaskWise.

Handlers receive the repository, event log and model client through these
providers; tests replace them with ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from taskwise.database.database import get_db
from taskwise.database.repository import TaskRepository
from taskwise.eventlog.event_log import EventLog
from taskwise.integrations.openai_client import OpenAIClient


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_event_log() -> EventLog:
    """Event log at TASKWISE_EVENT_LOG_PATH."""
    return EventLog()


def get_ai_client() -> OpenAIClient:
    """OpenAI client; a missing API key surfaces when a request uses it."""
    return OpenAIClient()
