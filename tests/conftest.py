"""
Shared pytest fixtures.

The app runs against an in-memory SQLite database (aiosqlite + StaticPool
so every session sees the same connection) with a cheap bcrypt cost.
"""

import os

# Must be set before any project module reads config.settings.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from typing import Any, Dict

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.models import Base
from database.session import get_db_session
from main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        jwt_expiry_seconds=3600,
        bcrypt_rounds=4,
        database_url="sqlite+aiosqlite://",
    )


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def app(test_settings, session_factory):
    application = create_app(test_settings)

    async def _override_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── helpers ────────────────────────────────────────────────────────────────────


async def register(
    client: httpx.AsyncClient,
    email: str,
    password: str = "secret1",
    name: str = "Test User",
) -> Dict[str, Any]:
    """Register a user and return the envelope ``data`` ({token, user})."""
    resp = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
