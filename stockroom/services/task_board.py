"""
Task Board service.
"""
import logging
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import as_utc
from stockroom.core.exceptions import NotFoundError
from stockroom.models.tasks import Task, TaskStatus, TaskPriority

logger = logging.getLogger(__name__)

TITLE_LENGTH = 80


def title_from_description(description: str) -> str:
    """First line of the description, cut to the title length."""
    return description.strip().split("\n")[0][:TITLE_LENGTH]


def serialize_task(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "priority": task.priority.value,
        "due_date": task.due_date,
        "created_at": task.created_at,
    }


class TaskBoard:
    """Service for the backlog / in progress / completed task board."""

    def _get(self, db: Session, task_id: str) -> Task:
        task = db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise NotFoundError("Task not found")
        return task

    async def list_tasks(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        tasks = db.query(Task).order_by(Task.created_at.desc()).limit(limit or settings.list_limit).all()
        return [serialize_task(task) for task in tasks]

    async def create_task(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a task in the backlog; the title is taken from the description."""
        description = data.get("description")
        if not description or not description.strip():
            raise ValueError("Task description is required")

        task = Task(
            title=title_from_description(description),
            description=description.strip(),
            status=TaskStatus.BACKLOG,
            priority=self._priority(data.get("priority") or TaskPriority.MEDIUM.value),
            due_date=as_utc(data.get("due_date")),
        )
        db.add(task)
        db.commit()
        db.refresh(task)

        logger.info(f"Task created: {task.id}")
        return serialize_task(task)

    async def update_task(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update to a task.

        ``status`` and ``priority`` are applied when truthy; ``description``
        and ``due_date`` whenever present (a null due date clears it).
        """
        task_id = data.get("id")
        if not task_id:
            raise ValueError("Task id is required")

        changes: Dict[str, Any] = {}
        if data.get("status"):
            changes["status"] = self._status(data["status"])
        if data.get("priority"):
            changes["priority"] = self._priority(data["priority"])
        if data.get("description") is not None:
            description = data["description"].strip()
            if not description:
                raise ValueError("Task description is required")
            changes["description"] = description
            changes["title"] = title_from_description(description)
        if "due_date" in data:
            changes["due_date"] = as_utc(data["due_date"])

        if not changes:
            raise ValueError("No fields provided to update")

        task = self._get(db, task_id)
        for field, value in changes.items():
            setattr(task, field, value)
        db.commit()
        db.refresh(task)
        return serialize_task(task)

    async def delete_task(self, db: Session, task_id: Optional[str]) -> None:
        if not task_id:
            raise ValueError("Task id is required")
        task = self._get(db, task_id)
        db.delete(task)
        db.commit()
        logger.info(f"Task deleted: {task_id}")

    def _status(self, value: str) -> TaskStatus:
        try:
            return TaskStatus(value)
        except ValueError:
            raise ValueError(f"Invalid status: {value}")

    def _priority(self, value: str) -> TaskPriority:
        try:
            return TaskPriority(value)
        except ValueError:
            raise ValueError(f"Invalid priority: {value}")
