"""Task logic for TaskWise: categorization, calendar projection, updates, AI assistant."""

from taskwise.engine.categorizer import classify_category, CATEGORY_KEYWORDS, GENERAL_CATEGORY
from taskwise.engine.calendar import project_task, project_tasks
from taskwise.engine.task_updates import apply_task_update

__all__ = [
    "classify_category",
    "CATEGORY_KEYWORDS",
    "GENERAL_CATEGORY",
    "project_task",
    "project_tasks",
    "apply_task_update",
]
