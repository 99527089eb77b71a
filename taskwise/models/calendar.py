"""CalendarEvent data model for TaskWise."""

from datetime import datetime
from pydantic import BaseModel, Field, field_serializer

from taskwise.models.task import format_utc


class CalendarEvent(BaseModel):
    """A task projected onto the calendar (derived, never persisted)."""

    id: str = Field(..., description="ID of the projected task")
    title: str = Field(..., description="Task title")
    start: datetime = Field(..., description="Event start (due date, or creation time)")
    end: datetime = Field(..., description="Event end (same as start)")

    @field_serializer("start", "end", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_utc(value)
