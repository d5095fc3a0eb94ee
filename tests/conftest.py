"""
Note Pad API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── sample_note: transient Note ORM instance
    ├── sqlite_settings: Settings pointing at a temp SQLite file (aiosqlite)
    ├── db_engine: engine on that file with the schema created
    ├── db_session: real AsyncSession on db_engine
    ├── notes_app: FastAPI app with its lifespan entered
    └── test_client: HTTPX AsyncClient bound to notes_app
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

# Keep tests away from any real database before notepad.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notepad.config import Settings
from notepad.database import Base, create_db_engine, create_session_factory
from notepad.main import create_app
from notepad.models.note import Note


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.get_note(mock_db_session, note_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def sample_note():
    """A Note as it would come back from the database."""
    now = datetime.now(timezone.utc)
    return Note(
        id=uuid4(),
        title="Groceries",
        content="Milk, eggs",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sqlite_settings(tmp_path):
    """Settings for a throwaway on-disk SQLite database."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db_engine(sqlite_settings):
    """Engine with the notes table created from the ORM metadata."""
    engine = create_db_engine(sqlite_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """A real session; everything runs in one uncommitted transaction."""
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def notes_app(sqlite_settings, db_engine):
    """
    The application with its lifespan running.

    ASGITransport does not send lifespan events, so the fixture enters the
    lifespan context itself; this opens the pool exactly as at startup.
    """
    app = create_app(sqlite_settings)
    async with app.router.lifespan_context(app):
        yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(notes_app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/v1/healthcheck")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=notes_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
