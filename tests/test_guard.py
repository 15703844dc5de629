"""
Tests for the task ownership guard.
"""

import uuid

import pytest

from database.helpers import create_task, create_user
from tasks.guard import load_owned_task
from utils.errors import ForbiddenError, NotFoundError


async def _owner_and_task(session):
    owner = await create_user(session, "owner@x.com", "Owner", "$2b$04$placeholder")
    task = await create_task(session, owner.user_id, "Write tests")
    await session.commit()
    return owner, task


class TestLoadOwnedTask:
    @pytest.mark.asyncio
    async def test_owner_gets_task(self, session):
        owner, task = await _owner_and_task(session)
        loaded = await load_owned_task(session, str(task.task_id), owner.user_id)
        assert loaded.task_id == task.task_id

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, session):
        _, task = await _owner_and_task(session)
        with pytest.raises(ForbiddenError):
            await load_owned_task(session, task.task_id, uuid.uuid4())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("task_id", [uuid.uuid4(), "garbage", ""])
    async def test_missing_task_not_found_for_any_caller(self, session, task_id):
        owner, _ = await _owner_and_task(session)
        for caller in (owner.user_id, uuid.uuid4()):
            with pytest.raises(NotFoundError):
                await load_owned_task(session, task_id, caller)
