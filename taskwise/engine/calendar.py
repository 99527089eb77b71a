"""Calendar projection of tasks."""

from typing import Iterable, List

from taskwise.models.calendar import CalendarEvent
from taskwise.models.task import Task


def project_task(task: Task) -> CalendarEvent:
    """Place a task on its due date, or on its creation time when it has none."""
    anchor = task.due_date if task.due_date else task.created_at
    return CalendarEvent(id=task.id, title=task.title, start=anchor, end=anchor)


def project_tasks(tasks: Iterable[Task]) -> List[CalendarEvent]:
    return [project_task(task) for task in tasks]
