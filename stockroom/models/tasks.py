"""
Task board models.
"""
from sqlalchemy import Column, String, DateTime, Text, Enum
import enum

from stockroom.core.database import Base, enum_values, new_id, utcnow


class TaskStatus(enum.Enum):
    """Board column of a task."""
    BACKLOG = "backlog"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    """Model for tasks on the board."""
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(80), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum(TaskStatus, values_callable=enum_values, native_enum=False),
        default=TaskStatus.BACKLOG,
        nullable=False
    )
    priority = Column(
        Enum(TaskPriority, values_callable=enum_values, native_enum=False),
        default=TaskPriority.MEDIUM,
        nullable=False
    )
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status={self.status})>"
