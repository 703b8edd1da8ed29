"""
TechNotes Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn technotes.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /notes       │ │ /users       │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation/NotFound/Empty→400 │ Conflict→409 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from technotes import __version__
from technotes.config import settings
from technotes.database import create_tables, dispose_engine
from technotes.exceptions import (
    ConflictError,
    DatabaseError,
    EmptyResultError,
    NotFoundError,
    PersistenceError,
    TechNotesError,
    ValidationError,
)
from technotes.middleware.logging import RequestLoggingMiddleware
from technotes.middleware.request_id import RequestIDMiddleware, request_id_var
from technotes.routes import health, notes, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # These log every statement / connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create tables when DB_CREATE_TABLES is set (local development)
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("TechNotes Backend %s starting up...", __version__)

    if settings.db_create_tables:
        logger.info("DB_CREATE_TABLES set, creating missing tables")
        await create_tables()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("TechNotes Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, exc: TechNotesError) -> JSONResponse:
    content = {
        "error": error,
        "message": exc.message,
        "request_id": request_id_var.get(""),
    }
    if exc.context:
        content["details"] = exc.context
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed body / wrong types)
        NotFoundError           → 400 Bad Request
        EmptyResultError        → 400 Bad Request
        PersistenceError        → 400 Bad Request
        ConflictError           → 409 Conflict
        DatabaseError           → 500 Internal Server Error
        TechNotesError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Security: handlers never put stack traces or SQL in the response body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body failed schema parsing, e.g. a string where a boolean belongs."""
        rid = request_id_var.get("")
        fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
        logger.warning("[%s] Malformed request body: %s", rid, fields)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body is missing or has fields of the wrong type",
                "details": {"fields": fields},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(400, "not_found", exc)

    @app.exception_handler(EmptyResultError)
    async def handle_empty_result(request: Request, exc: EmptyResultError):
        return _error_response(400, "empty_result", exc)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error("[%s] Store rejected write: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "persistence_error", exc)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return _error_response(409, "conflict", exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Database error: generic message to user, details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(TechNotesError)
    async def handle_app_error(request: Request, exc: TechNotesError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s", rid, exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "server_error", "message": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="TechNotes API",
        description="Users and notes CRUD backend for the TechNotes application.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID runs first so the logging middleware sees the id.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


# uvicorn expects `technotes.main:app` to be importable
app = create_app()
