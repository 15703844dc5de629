"""
Ownership guard for single-task operations.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from database.helpers import get_task
from database.models import Task
from utils.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


async def load_owned_task(
    session: AsyncSession,
    task_id: str | uuid.UUID,
    caller_id: uuid.UUID,
) -> Task:
    """
    Return the task if *caller_id* owns it.

    A missing (or unparsable) id is ``NotFoundError`` for every caller;
    an existing task owned by someone else is ``ForbiddenError``.  Must be
    awaited before the operation reads or mutates anything.
    """
    task = await get_task(session, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    if task.owner_id != caller_id:
        logger.warning(
            "User %s denied access to task %s owned by another user",
            caller_id, task.task_id,
        )
        raise ForbiddenError("You do not have permission to access this task")
    return task
