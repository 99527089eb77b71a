"""Partial updates and status lifecycle for tasks.

Only the fields in ``PATCHABLE_FIELDS`` can change; ``id`` and ``createdAt``
are immutable. Moving a task into COMPLETED stamps ``completedAt`` (unless the
caller supplies one), a COMPLETED task never loses it, and moving out clears
it. Any status may move to any other status.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from taskwise.errors import ValidationError
from taskwise.models.constants import PATCHABLE_FIELDS
from taskwise.models.event import EventType
from taskwise.models.task import Task, TaskStatus
from taskwise.models.task_factory import (
    normalize_time_estimate,
    parse_priority,
    parse_timestamp,
    require_title,
)

logger = logging.getLogger(__name__)


def parse_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(str(value).upper())
    except ValueError:
        raise ValidationError("Invalid status")


def apply_task_update(
    task: Task,
    changes: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Tuple[Task, EventType]:
    """Merge a partial update (wire field names) into a task.

    Args:
        task: Current task
        changes: Fields to change, keyed by wire name (e.g. ``timeEstimate``)
        now: Timestamp for ``updatedAt``/``completedAt`` (defaults to utcnow)

    Returns:
        Tuple of (updated task, lifecycle event to log)

    Raises:
        ValidationError: If a provided value is invalid
    """
    now = now or datetime.utcnow()
    updates: Dict[str, Any] = {}

    ignored = set(changes) - set(PATCHABLE_FIELDS)
    if ignored:
        logger.debug(f"Ignoring non-patchable fields for task {task.id}: {sorted(ignored)}")

    if "title" in changes:
        updates["title"] = require_title(changes["title"])
    if "description" in changes:
        updates["description"] = changes["description"]
    if "priority" in changes and changes["priority"] is not None:
        updates["priority"] = parse_priority(changes["priority"])
    if "timeEstimate" in changes:
        updates["time_estimate"] = normalize_time_estimate(changes["timeEstimate"])
    if "dueDate" in changes:
        updates["due_date"] = parse_timestamp(changes["dueDate"], "dueDate")
    if "completedAt" in changes:
        updates["completed_at"] = parse_timestamp(changes["completedAt"], "completedAt")

    previous_status = TaskStatus(task.status)
    new_status = previous_status
    if "status" in changes and changes["status"] is not None:
        new_status = parse_status(changes["status"])
        updates["status"] = new_status

    event = EventType.TASK_UPDATED
    if new_status == TaskStatus.COMPLETED and previous_status != TaskStatus.COMPLETED:
        if updates.get("completed_at") is None:
            updates["completed_at"] = now
        event = EventType.TASK_COMPLETED
    elif new_status == TaskStatus.COMPLETED:
        # A completed task always keeps a completion time.
        if "completed_at" in updates and updates["completed_at"] is None:
            updates["completed_at"] = task.completed_at or now
    elif previous_status == TaskStatus.COMPLETED:
        updates["completed_at"] = None

    updates["updated_at"] = now
    updated = Task(**{**task.model_dump(), **updates})
    return updated, event
