"""
NoteKeeper Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the stores, registers middleware, exception
       handlers and routers, and returns the app.
Who:   uvicorn (notekeeper.main:app), `python -m notekeeper`, and the tests.
When:  Once at process start; tests call create_app() for a fresh instance.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware: RequestID → Logging → RateLimit → GZip/CORS │
    │                                                          │
    │  Routes:  /user/*      /note/*        /health            │
    │                                                          │
    │  app.state:                                              │
    │    credential_store  session_manager  memo_store         │
    │                                                          │
    │  Exception Handlers:                                     │
    │    AlreadyExists→400  AuthFailure→400  Unauth→401        │
    │    InvalidIndex→404/422  InvalidMemo→400/422  other→500  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check cookie settings, stamp the start time
    Shutdown: flush pending spans; nothing is persisted
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.sdk.trace import TracerProvider

from notekeeper import __version__
from notekeeper.config import settings
from notekeeper.exceptions import (
    NoteKeeperError,
    AlreadyExistsError,
    AuthFailureError,
    UnauthenticatedError,
    InvalidIndexError,
    InvalidMemoError,
)
from notekeeper.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.rate_limit import RateLimitMiddleware
from notekeeper.routes import health, memo, user
from notekeeper.routes.user import clear_session_cookie
from notekeeper.services import CredentialStore, MemoStore, SessionManager
from notekeeper.tracing import setup_tracing, shutdown_tracing

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates notekeeper.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    app.state.started_at = time.time()
    logger.info("=" * 60)
    logger.info("NoteKeeper Backend %s starting up (%s)...", __version__, settings.environment)

    try:
        settings.validate_for_production()
    except ValueError as e:
        # Reported, not fatal
        logger.error("Configuration error: %s", str(e))

    logger.info("Memo store seeded with %d memo(s)", app.state.memo_store.count())
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "NoteKeeper Backend shutting down; discarding %d memo(s) and %d session(s)",
        app.state.memo_store.count(),
        app.state.session_manager.active_count(),
    )
    shutdown_tracing(app)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# Status for an invalid index depends on the route: reads are "not found",
# writes are "unprocessable".
INVALID_INDEX_STATUS = {"GET": 404}
INVALID_MEMO_STATUS = {"PATCH": 422}


def _error_response(
    status_code: int,
    error: str,
    exc: NoteKeeperError,
    details: Optional[dict] = None,
) -> JSONResponse:
    content = {
        "success": False,
        "error": error,
        "message": exc.message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto HTTP responses.

    Handler hierarchy:
        AlreadyExistsError    → 400
        AuthFailureError      → 400
        UnauthenticatedError  → 401 (and clears a stale session cookie)
        InvalidIndexError     → 404 for GET, 422 otherwise
        InvalidMemoError      → 422 for PATCH, 400 otherwise
        NoteKeeperError       → 500
        Exception             → 500, traceback logged, generic message returned
    """

    @app.exception_handler(AlreadyExistsError)
    async def handle_already_exists(request: Request, exc: AlreadyExistsError):
        logger.info("[%s] Sign-up rejected: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "already_exists", exc)

    @app.exception_handler(AuthFailureError)
    async def handle_auth_failure(request: Request, exc: AuthFailureError):
        # Context (username) stays in the logs; the response does not say
        # whether the user exists.
        return _error_response(400, "auth_failure", exc)

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        response = _error_response(401, "unauthenticated", exc)
        if settings.session_cookie_name in request.cookies:
            clear_session_cookie(response)
        return response

    @app.exception_handler(InvalidIndexError)
    async def handle_invalid_index(request: Request, exc: InvalidIndexError):
        status = INVALID_INDEX_STATUS.get(request.method, 422)
        return _error_response(status, "invalid_index", exc, details=exc.context)

    @app.exception_handler(InvalidMemoError)
    async def handle_invalid_memo(request: Request, exc: InvalidMemoError):
        status = INVALID_MEMO_STATUS.get(request.method, 400)
        return _error_response(status, "invalid_memo", exc, details=exc.context)

    @app.exception_handler(NoteKeeperError)
    async def handle_notekeeper_error(request: Request, exc: NoteKeeperError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "server_error", exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    memo_store: Optional[MemoStore] = None,
    credential_store: Optional[CredentialStore] = None,
    session_manager: Optional[SessionManager] = None,
    tracer_provider: Optional[TracerProvider] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        memo_store, credential_store, session_manager:
            Pre-built stores to use instead of fresh ones (tests pass these
            to start from a known state).
        tracer_provider:
            Receives the request spans. Without one, a provider is built
            from settings when TRACING_ENABLED is on.

    Returns:
        Fully configured FastAPI instance owning its stores.
    """
    app = FastAPI(
        title="NoteKeeper API",
        description="Shared memo board with cookie-based user sessions.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "User", "description": "User authentication and profile management"},
            {"name": "Note", "description": "Note management operations"},
            {"name": "Health", "description": "Service liveness"},
        ],
        lifespan=lifespan,
    )

    # ── Stores ────────────────────────────────────────────────────────────
    # One instance of each per app, reached through notekeeper.dependencies
    app.state.memo_store = memo_store if memo_store is not None else MemoStore()
    app.state.credential_store = (
        credential_store if credential_store is not None else CredentialStore()
    )
    app.state.session_manager = (
        session_manager if session_manager is not None else SessionManager()
    )
    # Reset by the lifespan when the server actually starts
    app.state.started_at = time.time()

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID, Logging, RateLimit.
    # A 429 still gets an X-Request-ID and an access log line.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(user.router)
    app.include_router(memo.router)
    app.include_router(health.router)

    setup_tracing(app, tracer_provider)

    return app


app = create_app()
