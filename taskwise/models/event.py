"""Event log entry model for TaskWise."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Task lifecycle event enumeration."""
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_DELETED = "TASK_DELETED"


class EventLogEntry(BaseModel):
    """One line of the analytics event log."""

    event: EventType = Field(..., description="Type of lifecycle event")
    task_id: str = Field(..., alias="taskId", description="ID of the task this event relates to")
    details: Optional[Dict[str, Any]] = Field(None, description="Event payload (usually the task record)")
    timestamp: Optional[datetime] = Field(None, description="Set by the log writer when appended")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for appending; the writer stamps the timestamp."""
        return self.model_dump(mode="json", by_alias=True, exclude={"timestamp"})
