"""FastAPI web application for TaskWise."""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskwise.api.dependencies import get_ai_client, get_event_log, get_task_repository
from taskwise.api.schemas import (
    ChatQueryRequest,
    ChatQueryResponse,
    HealthResponse,
    ReportResponse,
    SuggestTaskRequest,
    TaskCreateRequest,
    TaskUpdateRequest,
)
from taskwise.api.ui import INDEX_HTML
from taskwise.database.database import init_db
from taskwise.database.repository import TaskRepository
from taskwise.engine.assistant import answer_question, generate_report, suggest_task
from taskwise.engine.calendar import project_tasks
from taskwise.engine.task_updates import apply_task_update
from taskwise.errors import ErrorKind, NotFoundError, TaskWiseError
from taskwise.eventlog.event_log import EventLog
from taskwise.integrations.openai_client import OpenAIClient
from taskwise.models.calendar import CalendarEvent
from taskwise.models.event import EventType
from taskwise.models.task import Task
from taskwise.models.task_factory import create_task_base

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="TaskWise API",
    description="Personal task manager with AI-assisted task creation, reports and chat",
    version=APP_VERSION,
    lifespan=lifespan,
)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@app.exception_handler(TaskWiseError)
async def handle_taskwise_error(request: Request, exc: TaskWiseError):
    """Map application errors to HTTP status codes and a JSON error body."""
    status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind.value}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    body = {"error": exc.message}
    if exc.details is not None:
        body["details"] = jsonable_encoder(exc.details)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    # Database detail stays in the server log.
    logger.error(f"{request.method} {request.url.path} storage failure: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


@app.get("/", response_class=HTMLResponse)
async def root():
    """Web UI: task list, calendar, report dashboard and chat."""
    return INDEX_HTML


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=APP_VERSION)


@app.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    request: Optional[TaskCreateRequest] = None,
    repo: TaskRepository = Depends(get_task_repository),
    event_log: EventLog = Depends(get_event_log),
):
    """Create a task and record a TASK_CREATED event."""
    if request is None:
        request = TaskCreateRequest()
    task = create_task_base(
        title=request.title,
        description=request.description,
        priority=request.priority,
        time_estimate=request.time_estimate,
        due_date=request.due_date,
    )
    created = repo.create(task)
    event_log.record(EventType.TASK_CREATED, created.id, created.to_record())
    return created


@app.get("/tasks", response_model=List[Task])
def list_tasks(repo: TaskRepository = Depends(get_task_repository)):
    """List all tasks, newest first."""
    return repo.get_all()


@app.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str, repo: TaskRepository = Depends(get_task_repository)):
    """Get a single task."""
    task = repo.get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


@app.patch("/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    repo: TaskRepository = Depends(get_task_repository),
    event_log: EventLog = Depends(get_event_log),
):
    """Apply a partial update; completing a task stamps completedAt."""
    task = repo.get(task_id)
    if task is None:
        raise NotFoundError("Task not found")

    updated, event = apply_task_update(task, request.changes())
    saved = repo.update(updated)
    event_log.record(event, saved.id, saved.to_record())
    return saved


@app.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
    event_log: EventLog = Depends(get_event_log),
):
    """Permanently delete a task."""
    if not repo.delete(task_id):
        raise NotFoundError("Task not found")
    event_log.record(EventType.TASK_DELETED, task_id, {"id": task_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/events", response_model=List[CalendarEvent])
def list_calendar_events(repo: TaskRepository = Depends(get_task_repository)):
    """Tasks projected onto the calendar (due date, else creation time)."""
    return project_tasks(repo.get_all())


@app.get("/raw-logs")
def raw_logs(event_log: EventLog = Depends(get_event_log)):
    """Every parseable event log line; [] when the log is missing or empty."""
    return event_log.read_entries()


@app.get("/analyze-logs", response_model=ReportResponse)
def analyze_logs(
    event_log: EventLog = Depends(get_event_log),
    ai_client: OpenAIClient = Depends(get_ai_client),
):
    """AI productivity report built from the event log."""
    return ReportResponse(report=generate_report(ai_client, event_log))


@app.post("/chat-query", response_model=ChatQueryResponse)
def chat_query(
    request: ChatQueryRequest,
    repo: TaskRepository = Depends(get_task_repository),
    event_log: EventLog = Depends(get_event_log),
    ai_client: OpenAIClient = Depends(get_ai_client),
):
    """Answer a question about the stored tasks and their history."""
    answer = answer_question(ai_client, repo.get_all(), event_log, request.question)
    return ChatQueryResponse(answer=answer)


@app.post("/suggest-task")
def suggest_task_endpoint(
    request: SuggestTaskRequest,
    ai_client: OpenAIClient = Depends(get_ai_client),
):
    """Turn a free-text idea into a structured task draft."""
    return suggest_task(ai_client, request.user_input)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
