"""Tests for partial task updates and the completion lifecycle."""

import pytest
from datetime import datetime, timedelta

from taskwise.engine.task_updates import apply_task_update
from taskwise.errors import ValidationError
from taskwise.models.event import EventType
from taskwise.models.task import Task, TaskPriority, TaskStatus

NOW = datetime(2024, 3, 1, 9, 0, 0)


class TestApplyTaskUpdate:
    """Test merging partial updates into a task."""

    def test_only_provided_fields_change(self, sample_task):
        updated, event = apply_task_update(sample_task, {"title": "Renamed"}, now=NOW)

        assert updated.title == "Renamed"
        assert updated.description == sample_task.description
        assert updated.priority == sample_task.priority
        assert updated.updated_at == NOW
        assert event == EventType.TASK_UPDATED

    def test_id_and_created_at_are_immutable(self, sample_task):
        updated, _ = apply_task_update(
            sample_task,
            {"id": "other-id", "createdAt": "2000-01-01T00:00:00Z"},
            now=NOW,
        )

        assert updated.id == sample_task.id
        assert updated.created_at == sample_task.created_at

    def test_completing_stamps_completed_at(self, sample_task):
        updated, event = apply_task_update(sample_task, {"status": "COMPLETED"}, now=NOW)

        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at == NOW
        assert event == EventType.TASK_COMPLETED

    def test_completing_keeps_supplied_completed_at(self, sample_task):
        updated, _ = apply_task_update(
            sample_task,
            {"status": "COMPLETED", "completedAt": "2024-02-28T17:00:00Z"},
            now=NOW,
        )

        assert updated.completed_at == datetime(2024, 2, 28, 17, 0)

    def test_reopening_clears_completed_at(self, sample_task_base):
        done = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED,
                       "completed_at": NOW - timedelta(days=1)})

        updated, event = apply_task_update(done, {"status": "IN_PROGRESS"}, now=NOW)

        assert updated.status == TaskStatus.IN_PROGRESS
        assert updated.completed_at is None
        assert event == EventType.TASK_UPDATED

    def test_completed_task_keeps_completed_at_when_cleared(self, sample_task_base):
        """Nulling completedAt on a COMPLETED task keeps the original stamp."""
        stamped = NOW - timedelta(days=1)
        done = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED, "completed_at": stamped})

        updated, event = apply_task_update(done, {"completedAt": None}, now=NOW)

        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at == stamped
        assert event == EventType.TASK_UPDATED

    def test_completed_task_without_stamp_gets_one(self, sample_task_base):
        done = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED, "completed_at": None})

        updated, _ = apply_task_update(done, {"completedAt": None, "status": "COMPLETED"}, now=NOW)

        assert updated.completed_at == NOW

    def test_completed_task_accepts_new_completed_at(self, sample_task_base):
        done = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED, "completed_at": NOW})

        updated, _ = apply_task_update(done, {"completedAt": "2024-02-01T08:00:00Z"}, now=NOW)

        assert updated.completed_at == datetime(2024, 2, 1, 8, 0)

    def test_any_status_transition_is_allowed(self, sample_task_base):
        done = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED, "completed_at": NOW})
        updated, _ = apply_task_update(done, {"status": "todo"}, now=NOW)
        assert updated.status == TaskStatus.TODO

    def test_time_estimate_is_normalized(self, sample_task):
        updated, _ = apply_task_update(sample_task, {"timeEstimate": "abc"}, now=NOW)
        assert updated.time_estimate == 30

        updated, _ = apply_task_update(sample_task, {"timeEstimate": "75"}, now=NOW)
        assert updated.time_estimate == 75

    def test_due_date_can_be_cleared(self, sample_task_base):
        task = Task(**{**sample_task_base, "due_date": NOW})
        updated, _ = apply_task_update(task, {"dueDate": None}, now=NOW)
        assert updated.due_date is None

    def test_null_priority_is_ignored(self, sample_task):
        updated, _ = apply_task_update(sample_task, {"priority": None}, now=NOW)
        assert updated.priority == TaskPriority.MEDIUM

    def test_invalid_status(self, sample_task):
        with pytest.raises(ValidationError, match="Invalid status"):
            apply_task_update(sample_task, {"status": "DONE"}, now=NOW)

    def test_blank_title_rejected(self, sample_task):
        with pytest.raises(ValidationError, match="Title is required"):
            apply_task_update(sample_task, {"title": "  "}, now=NOW)
