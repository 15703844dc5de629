"""
Pydantic schemas for the task endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from database.models import Task, TaskStatus


class TaskCreate(BaseModel):
    # Title presence is checked by the route so the message is stable.
    title: Optional[str] = None
    description: Optional[str] = None


class TaskUpdate(BaseModel):
    """
    Partial update; only these fields are writable (never the owner).

    ``status`` is a plain string here and checked against ``TaskStatus``
    after the ownership guard, so non-owners get 403 rather than 400.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class TaskView(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    userId: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_row(cls, task: Task) -> "TaskView":
        return cls(
            id=str(task.task_id),
            title=task.title,
            description=task.description,
            status=TaskStatus(task.status),
            userId=str(task.owner_id),
            createdAt=task.created_at,
            updatedAt=task.updated_at,
        )
