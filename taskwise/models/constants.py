"""Constants for TaskWise.

This module centralizes magic numbers and default values used throughout the application.
"""

from taskwise.models.task import TaskPriority, TaskStatus


# Task defaults
DEFAULT_TIME_ESTIMATE_MINUTES = 30
DEFAULT_PRIORITY = TaskPriority.MEDIUM
DEFAULT_STATUS = TaskStatus.TODO

# Due-date backfill
BACKFILL_DUE_DATE_DAYS = 7

# Fields a PATCH request may change (wire names)
PATCHABLE_FIELDS = (
    "title",
    "description",
    "priority",
    "status",
    "timeEstimate",
    "dueDate",
    "completedAt",
)

# Reporting
EMPTY_LOG_REPORT_MESSAGE = "No activity logged yet. Complete some tasks to generate a report."
MIN_REPORT_INSIGHTS = 5
