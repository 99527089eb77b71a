"""Request/response models for the TaskWise API.

Request fields are typed loosely on purpose: required-field and format checks
happen in the task factory so callers get plain 400 messages such as
"Title is required".
"""

from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field


class TaskCreateRequest(BaseModel):
    """Request model for POST /tasks."""
    title: Optional[Any] = Field(None, description="Task title (required)")
    description: Optional[str] = Field(None, description="Task description")
    priority: Optional[str] = Field(None, description="LOW, MEDIUM, HIGH or URGENT (default MEDIUM)")
    time_estimate: Optional[Any] = Field(None, alias="timeEstimate", description="Minutes (default 30)")
    due_date: Optional[str] = Field(None, alias="dueDate", description="ISO 8601 due date")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class TaskUpdateRequest(BaseModel):
    """Request model for PATCH /tasks/{task_id}. Only provided fields change."""
    title: Optional[Any] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    time_estimate: Optional[Any] = Field(None, alias="timeEstimate")
    due_date: Optional[str] = Field(None, alias="dueDate")
    completed_at: Optional[str] = Field(None, alias="completedAt")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True

    def changes(self) -> Dict[str, Any]:
        """Provided fields keyed by wire name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class SuggestTaskRequest(BaseModel):
    """Request model for POST /suggest-task."""
    user_input: Optional[Any] = Field(None, alias="userInput", description="Raw task idea")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class ChatQueryRequest(BaseModel):
    """Request model for POST /chat-query."""
    question: Optional[Any] = Field(None, description="Natural language question about tasks")


class ChatQueryResponse(BaseModel):
    """Response model for POST /chat-query."""
    answer: str


class ReportResponse(BaseModel):
    """Response model for GET /analyze-logs."""
    report: Union[str, Dict[str, Any]]


class HealthResponse(BaseModel):
    """Response model for GET /health."""
    status: str
    version: str
