"""
Note Pad API: Database Engine & Session Management
===================================================

What:  Async SQLAlchemy engine (the connection pool), session factory, ORM
       base class, and the per-request session dependency.
Why:   Centralizes all database connection logic in one place.
How:   The application lifespan builds the engine from Settings and stores it
       on `app.state`; route handlers receive a session through FastAPI's
       dependency injection, which reads the factory from `request.app.state`.
Who:   main.py (lifespan) creates/disposes the engine; routes depend on
       get_db_session().
When:  Engine is created once at startup; sessions are created per request.

Connection Pooling Strategy:
    pool_size=5:      At most five simultaneous connections
    max_overflow=0:   No temporary connections beyond the pool
    pool_pre_ping:    Validates connections before use
    A request that finds every connection checked out waits on the pool
    until one is released; no acquire timeout is configured here.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notepad.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic and the test suite use
    to create the schema.
    """
    pass


def create_db_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine (and with it the connection pool) from settings.

    SQLite URLs (used by the test suite) skip the pool sizing arguments,
    which the SQLite pool classes do not accept.
    """
    url = make_url(settings.database_url)
    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = 0

    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the AsyncSession factory bound to `engine`.

    expire_on_commit=False: returned rows stay readable after the commit that
    happens when the request finishes.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def check_connection(engine: AsyncEngine) -> None:
    """
    Open one connection and run SELECT 1.

    Raises whatever the driver raises; the lifespan lets it propagate so the
    process refuses to start without a reachable datastore.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory stored on app.state
        2. Yields it to the route handler (the handler performs one statement)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns the connection to the pool)

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
