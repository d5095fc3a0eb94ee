"""
Note Pad API: FastAPI Application Factory & Entry Point
========================================================

What:  Creates and configures the FastAPI application instance and starts
       the HTTP listener.
How:   create_app() returns a configured FastAPI instance; run() hands the
       module-level `app` to uvicorn bound to BACKEND_HOST:BACKEND_PORT.
Who:   `uvicorn notepad.main:app`, the `notepad` console script, or
       `python -m notepad`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes (/api/v1):                                  │
    │  ┌──────────────┐ ┌───────────────────────────────┐ │
    │  │ /healthcheck │ │ /notes, /notes/{id}  (CRUD)   │ │
    │  └──────────────┘ └───────────────────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the engine (connection pool) from settings
    3. Run SELECT 1; any failure aborts startup
    4. Store engine and session factory on app.state

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from notepad import __version__
from notepad.config import Settings, settings as default_settings
from notepad.database import (
    check_connection,
    create_db_engine,
    create_session_factory,
    dispose_engine,
)
from notepad.exceptions import DatabaseError, NotFoundError
from notepad.middleware.logging import RequestLoggingMiddleware
from notepad.middleware.request_id import RequestIDMiddleware, request_id_var
from notepad.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the connection pool on startup and close it on shutdown.

    There is no degraded mode: if the datastore cannot be reached the
    exception propagates and uvicorn aborts startup.
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Note Pad API %s starting up...", __version__)

    engine = create_db_engine(settings)
    try:
        await check_connection(engine)
    except Exception as e:
        logger.critical("Could not connect to the database: %s", str(e))
        await dispose_engine(engine)
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info(
        "Connection pool ready (size=%d); serving at http://%s:%d",
        settings.db_pool_size,
        settings.backend_host,
        settings.backend_port,
    )

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Note Pad API shutting down...")
    await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a uniform JSON body.

    Handler hierarchy:
        RequestValidationError  → 400 (malformed path id, query or body)
        NotFoundError           → 404
        DatabaseError           → 500, message carries the backend's error text
        Exception (fallback)    → 500, stack trace logged server-side only
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Path/body parsing failed before the handler ran; no backend access happened."""
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                "Request validation failed",
                jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("database_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the module-level
                  singleton loaded from the environment.

    The settings object is stored on app.state so the lifespan and handlers
    read configuration from the app they belong to.
    """
    app = FastAPI(
        title="Note Pad API",
        description="Create, read, update and delete notes stored in PostgreSQL.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or default_settings

    # Middleware executes in REVERSE order of addition:
    # RequestID runs first, then Logging sees the id.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(notes.router)

    return app


# uvicorn expects `notepad.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: bind the listener and serve until interrupted."""
    settings: Settings = app.state.settings
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
