"""
TechNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Service unit tests (no database):
    ├── note_repo / user_repo: AsyncMock repositories
    ├── hasher: real Argon2 hasher with minimal cost
    └── make_note / make_user: lean record factories

    API tests (real SQL against in-memory SQLite):
    ├── db_engine: aiosqlite engine with tables created
    ├── db_session: one AsyncSession for direct repository checks
    └── test_client: HTTPX AsyncClient, get_db_session overridden
"""

import os

# Override settings for testing BEFORE any technotes imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_TIME_COST"] = "1"
os.environ["PASSWORD_MEMORY_COST"] = "1024"

from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import technotes.models  # noqa: F401
from technotes.database import Base, get_db_session
from technotes.repositories.note_repository import NoteRecord, NoteRepository
from technotes.repositories.user_repository import UserRecord, UserRepository
from technotes.security import PasswordHasher


# ══════════════════════════════════════════════════════════════════════════
# Service Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def note_repo():
    """
    Mock NoteRepository.

    Async methods (find_by_id, find_one, create, ...) are AsyncMocks because
    the spec class declares them async. Default: nothing found.
    """
    repo = AsyncMock(spec=NoteRepository)
    repo.find_by_id.return_value = None
    repo.find_one.return_value = None
    repo.find_all.return_value = []
    return repo


@pytest.fixture
def user_repo():
    """Mock UserRepository. Default: nothing found."""
    repo = AsyncMock(spec=UserRepository)
    repo.find_by_id.return_value = None
    repo.find_one.return_value = None
    repo.find_all.return_value = []
    return repo


@pytest.fixture
def hasher():
    """Real Argon2 hasher with the cheapest parameters argon2 accepts comfortably."""
    return PasswordHasher(time_cost=1, memory_cost=1024)


@pytest.fixture
def make_note():
    """Factory for lean NoteRecord snapshots."""

    def _make(**overrides) -> NoteRecord:
        now = datetime.now(timezone.utc)
        values = {
            "id": uuid4(),
            "user": uuid4(),
            "title": "Fix printer",
            "text": "Printer on floor 2 jams on duplex jobs.",
            "completed": False,
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return NoteRecord(**values)

    return _make


@pytest.fixture
def make_user():
    """Factory for lean UserRecord snapshots."""

    def _make(**overrides) -> UserRecord:
        now = datetime.now(timezone.utc)
        values = {
            "id": uuid4(),
            "username": "jdoe",
            "roles": ("Employee",),
            "active": True,
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return UserRecord(**values)

    return _make


# ══════════════════════════════════════════════════════════════════════════
# Database / API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps one connection alive so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for inspecting the database directly from a test."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGI.

    get_db_session is overridden with the same commit/rollback semantics,
    bound to the test database.
    """
    from technotes.main import app

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
