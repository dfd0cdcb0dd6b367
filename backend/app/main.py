"""
Bookmarks Service: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                     FastAPI App                         │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌──────┐ ┌────────┐ ┌─────────┐ ┌─────────────┐       │
    │  │ CORS │→│ Req ID │→│ Logging │→│ Bearer Auth │       │
    │  └──────┘ └────────┘ └─────────┘ └─────────────┘       │
    │                                                         │
    │  Routes:                                                │
    │  ┌──────────────────────────────┐ ┌─────────────┐       │
    │  │ GET/POST /bookmarks          │ │ GET /health │       │
    │  │ GET/DELETE /bookmarks/{id}   │ └─────────────┘       │
    │  └──────────────────────────────┘                       │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ ValidationError→400 │ NotFound→404 │ other→500    │  │
    │  └───────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, optional table creation
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import create_tables, dispose_engine
from app.exceptions import BookmarksError
from app.middleware.auth import BearerAuthMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import bookmarks, health

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Report missing configuration (the server still starts; the auth
           gate rejects everything while API_TOKEN is empty)
        3. Create the bookmarks table when DB_CREATE_TABLES is set
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("Bookmarks service %s starting up (%s)", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if settings.db_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Bookmarks service shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str) -> dict:
    return {"error": {"message": message}}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to `{"error": {"message": ...}}` responses.

    Handler hierarchy:
        ValidationError  → 400 with the missing-field message
        NotFoundError    → 404 "Bookmark doesn't exist"
        DatabaseError    → 500
        BookmarksError   → its status_code
        HTTPException    → its status_code (unknown route, wrong method)
        Exception        → 500 (catch-all)

    5xx messages are replaced with "server error" in production; the real
    cause is always logged server-side.
    """

    def server_error_message(message: str) -> str:
        return GENERIC_SERVER_ERROR if settings.is_production else message

    @app.exception_handler(BookmarksError)
    async def handle_bookmarks_error(request: Request, exc: BookmarksError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
            message = server_error_message(exc.message)
        else:
            logger.info("[%s] %s | Context: %s", rid, exc.message, exc.context)
            message = exc.message
        return JSONResponse(status_code=exc.status_code, content=_error_body(message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs outside RequestIDMiddleware, so the header is set here
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(server_error_message(str(exc))),
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(api_token: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        api_token: Bearer secret for the auth gate. Defaults to
                   settings.api_token (the API_TOKEN environment variable).

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Bookmarks API",
        description="Store, list and delete bookmarks behind a static bearer token.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute:
    # CORS → RequestID → Logging → BearerAuth → route
    app.add_middleware(
        BearerAuthMiddleware,
        api_token=settings.api_token if api_token is None else api_token,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookmarks.router)
    app.include_router(health.router)

    return app


app = create_app()
