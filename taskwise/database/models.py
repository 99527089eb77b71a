"""SQLAlchemy database models for TaskWise."""

from datetime import datetime
import uuid
from typing import Type, TypeVar, Union
from sqlalchemy import Column, String, Integer, DateTime

from taskwise.database.database import Base
from taskwise.models.task import TaskPriority, TaskStatus

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert a stored string to an enum, falling back to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.upper())
    except (ValueError, AttributeError):
        return default


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    status = Column(String, nullable=False, default=TaskStatus.TODO.value, index=True)
    time_estimate = Column(Integer, nullable=False, default=30)

    due_date = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskwise.models.task import Task

        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            priority=value_to_enum(self.priority, TaskPriority, TaskPriority.MEDIUM),
            status=value_to_enum(self.status, TaskStatus, TaskStatus.TODO),
            time_estimate=self.time_estimate,
            due_date=self.due_date,
            created_at=self.created_at,
            updated_at=self.updated_at,
            completed_at=self.completed_at,
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=enum_to_value(task.priority),
            status=enum_to_value(task.status),
            time_estimate=task.time_estimate,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
            completed_at=task.completed_at,
        )
