"""
Database helper functions — user lookup/creation and task persistence.

None of these helpers check ownership; callers go through
``tasks.guard.load_owned_task`` before touching a single task.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, TaskStatus, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse *value* as a UUID, returning ``None`` when it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


# ── Users ───────────────────────────────────────────────────────────


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    email: str,
    display_name: str,
    password_hash: str,
) -> User:
    """Insert a ``User`` row and flush so the unique constraint is checked now."""
    user = User(
        user_id=uuid.uuid4(),
        email=email,
        display_name=display_name,
        password_hash=password_hash,
    )
    session.add(user)
    await session.flush()
    return user


# ── Tasks ───────────────────────────────────────────────────────────


async def list_tasks_for_user(session: AsyncSession, owner_id: uuid.UUID) -> List[Task]:
    result = await session.execute(
        select(Task)
        .where(Task.owner_id == owner_id)
        .order_by(Task.created_at.desc())
    )
    return list(result.scalars().all())


async def get_task(session: AsyncSession, task_id: str | uuid.UUID) -> Optional[Task]:
    tid = _to_uuid(task_id)
    if tid is None:
        return None
    result = await session.execute(select(Task).where(Task.task_id == tid))
    return result.scalar_one_or_none()


async def create_task(
    session: AsyncSession,
    owner_id: uuid.UUID,
    title: str,
    description: str | None = None,
) -> Task:
    task = Task(
        task_id=uuid.uuid4(),
        owner_id=owner_id,
        title=title,
        description=description,
        status=TaskStatus.PENDING.value,
    )
    session.add(task)
    await session.flush()
    await session.refresh(task)
    return task


async def update_task(session: AsyncSession, task: Task, changes: Dict[str, Any]) -> Task:
    """
    Apply *changes* to an already-authorised task.

    Only ``title``, ``description`` and ``status`` are writable; anything
    else in *changes* is ignored so the owner can never be reassigned.
    """
    for field in ("title", "description", "status"):
        if field in changes:
            value = changes[field]
            if isinstance(value, TaskStatus):
                value = value.value
            setattr(task, field, value)
    await session.flush()
    await session.refresh(task)
    return task


async def delete_task(session: AsyncSession, task: Task) -> None:
    await session.delete(task)
    await session.flush()
