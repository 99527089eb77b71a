"""Task data model for TaskWise."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, field_serializer


def format_utc(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 with a trailing ``Z``; stored timestamps are naive UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.isoformat() + "Z"
    return value.isoformat()


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Task(BaseModel):
    """Canonical Task model.

    Field names are snake_case in Python; the wire format uses the camelCase aliases.
    """

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    time_estimate: int = Field(30, gt=0, alias="timeEstimate", description="Estimated time in minutes")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="Task due date")
    created_at: datetime = Field(..., alias="createdAt", description="Task creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Task last update timestamp")
    completed_at: Optional[datetime] = Field(None, alias="completedAt", description="Completion timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True

    @field_serializer("due_date", "created_at", "updated_at", "completed_at", when_used="json")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return format_utc(value)

    def to_record(self) -> dict:
        """Serialize to the JSON wire shape (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True)
