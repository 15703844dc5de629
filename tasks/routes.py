"""
Task API routes.

Route prefix: /api/tasks

Every route requires a bearer token.  Single-task routes run
``load_owned_task`` before doing anything else.  Concurrent updates to
the same task are last-write-wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from database.helpers import create_task, delete_task, list_tasks_for_user, update_task
from database.models import TaskStatus
from tasks.guard import load_owned_task
from tasks.schemas import TaskCreate, TaskUpdate, TaskView
from utils.errors import ValidationError
from utils.schemas import envelope
from utils.validators import validate_title

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


@router.get("")
async def list_tasks(
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Return the caller's tasks, newest first."""
    tasks = await list_tasks_for_user(session, user_id)
    return envelope(200, [TaskView.from_row(t) for t in tasks], "Tasks fetched")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create(
    req: TaskCreate,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> JSONResponse:
    title = validate_title(req.title)
    task = await create_task(session, user_id, title, req.description)
    await session.commit()
    logger.info("User %s created task %s", user_id, task.task_id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=envelope(201, TaskView.from_row(task), "Task created"),
    )


@router.get("/{task_id}")
async def get_one(
    task_id: str,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    task = await load_owned_task(session, task_id, user_id)
    return envelope(200, TaskView.from_row(task), "Task fetched")


@router.api_route("/{task_id}", methods=["PUT", "PATCH"])
async def update(
    task_id: str,
    req: TaskUpdate,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Partially update a task the caller owns."""
    task = await load_owned_task(session, task_id, user_id)

    changes = req.model_dump(exclude_unset=True)
    if "title" in changes:
        if changes["title"] is None or not changes["title"].strip():
            raise ValidationError("Title cannot be empty")
        changes["title"] = changes["title"].strip()
    if "status" in changes:
        if changes["status"] is None:
            del changes["status"]
        else:
            try:
                changes["status"] = TaskStatus(changes["status"])
            except ValueError:
                raise ValidationError(
                    "Status must be one of: " + ", ".join(s.value for s in TaskStatus)
                )

    task = await update_task(session, task, changes)
    await session.commit()
    logger.info("User %s updated task %s (%s)", user_id, task.task_id, ", ".join(changes) or "no changes")
    return envelope(200, TaskView.from_row(task), "Task updated")


@router.delete("/{task_id}")
async def delete(
    task_id: str,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    task = await load_owned_task(session, task_id, user_id)
    deleted_id = str(task.task_id)
    await delete_task(session, task)
    await session.commit()
    logger.info("User %s deleted task %s", user_id, deleted_id)
    return envelope(200, {"id": deleted_id}, "Task successfully deleted")
