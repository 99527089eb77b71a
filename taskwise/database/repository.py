"""Repository layer for database operations."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from taskwise.models.task import Task
from taskwise.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks sorted by creation date (newest first)."""
        tasks_db = self.db.query(TaskDB).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_without_due_date(self) -> List[Task]:
        """Get all tasks that have no due date."""
        tasks_db = self.db.query(TaskDB).filter(TaskDB.due_date.is_(None)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def update(self, task: Task) -> Task:
        """Persist every mutable field of an existing task."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task.id).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.title = task.title
        task_db.description = task.description
        task_db.priority = enum_to_value(task.priority)
        task_db.status = enum_to_value(task.status)
        task_db.time_estimate = task.time_estimate
        task_db.due_date = task.due_date
        task_db.updated_at = task.updated_at
        task_db.completed_at = task.completed_at

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: str) -> bool:
        """Permanently delete a task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise
