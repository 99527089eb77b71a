"""Task creation factory for TaskWise.

This module centralizes task creation and input normalization so the API
and maintenance scripts apply the same defaults.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from taskwise.errors import ValidationError
from taskwise.models.task import Task, TaskPriority
from taskwise.models.constants import (
    DEFAULT_TIME_ESTIMATE_MINUTES,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def normalize_time_estimate(value: Any) -> int:
    """Coerce a time estimate to a positive integer number of minutes.

    Numbers are truncated; strings are read up to their first non-digit
    (``"45min"`` -> 45). Anything that does not yield a positive integer
    falls back to the default.

    Args:
        value: Raw value from the request body

    Returns:
        Positive integer minutes
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_TIME_ESTIMATE_MINUTES

    parsed: Optional[int] = None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if value == value and value not in (float("inf"), float("-inf")):
            parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            parsed = int(match.group(1))

    if parsed is None or parsed <= 0:
        return DEFAULT_TIME_ESTIMATE_MINUTES
    return parsed


def parse_timestamp(value: Any, field_name: str = "dueDate") -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into a naive UTC datetime.

    Empty values map to None. Timezone-aware inputs are converted to UTC.

    Raises:
        ValidationError: If the value is not a valid timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ValidationError(f"Invalid {field_name}")
    else:
        raise ValidationError(f"Invalid {field_name}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_priority(value: Any) -> TaskPriority:
    """Map a priority string to TaskPriority (default MEDIUM when absent)."""
    if value is None or value == "":
        return DEFAULT_PRIORITY
    try:
        return TaskPriority(str(value).upper())
    except ValueError:
        raise ValidationError("Invalid priority")


def require_title(title: Any) -> str:
    """Return the title or raise if it is missing/blank."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required")
    return title


def create_task_base(
    title: Any,
    description: Optional[str] = None,
    priority: Any = None,
    time_estimate: Any = None,
    due_date: Any = None,
) -> Task:
    """Create a new TODO task with defaults applied.

    Args:
        title: Task title (required, non-empty)
        description: Optional description
        priority: One of LOW/MEDIUM/HIGH/URGENT (defaults to MEDIUM)
        time_estimate: Minutes; normalized to a positive integer (defaults to 30)
        due_date: Optional ISO 8601 timestamp or datetime

    Returns:
        Task object with a fresh id and creation timestamps

    Raises:
        ValidationError: If title is missing or priority/dueDate are invalid
    """
    now = datetime.utcnow()
    return Task(
        id=str(uuid.uuid4()),
        title=require_title(title),
        description=description,
        priority=parse_priority(priority),
        status=DEFAULT_STATUS,
        time_estimate=normalize_time_estimate(time_estimate),
        due_date=parse_timestamp(due_date),
        created_at=now,
        updated_at=now,
        completed_at=None,
    )
