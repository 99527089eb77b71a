"""Data models for TaskWise."""

from taskwise.models.task import Task, TaskPriority, TaskStatus
from taskwise.models.event import EventLogEntry, EventType
from taskwise.models.calendar import CalendarEvent
from taskwise.models.assistant import TaskSuggestion, ProductivityReport

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatus",
    "EventLogEntry",
    "EventType",
    "CalendarEvent",
    "TaskSuggestion",
    "ProductivityReport",
]
