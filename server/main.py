"""
SecureVote API Server

FastAPI application factory. Routes, dependencies and middleware live in
focused modules; this file wires them together and maps the exception
hierarchy onto HTTP responses.
"""

import secrets
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import config, get_logger
from database.db import ElectionDatabase
from exceptions import (
    BallotRejected,
    ConfigurationError,
    ConflictError,
    DatabaseConnectionError,
    ElectionNotFound,
    NotAuthenticated,
    NotAuthorized,
    NotFoundError,
    SecureVoteError,
    ValidationError,
)
from server.metrics import metrics
from server.middleware.logging import get_request_id, log_requests
from server.middleware.metrics import metrics_middleware
from server.routes import admin, auth, chat, clubs, elections, monitoring, votes
from server.utils.responses import error_response
from userland.auth import init_jwt, is_initialized

logger = get_logger(__name__)

# First match wins, so subclasses come before their bases
_STATUS_BY_ERROR = (
    (ElectionNotFound, 404),
    (BallotRejected, 400),
    (NotAuthenticated, 401),
    (NotAuthorized, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
    (ConfigurationError, 503),
    (DatabaseConnectionError, 503),
)


def status_for(exc: SecureVoteError) -> int:
    for error_class, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def securevote_error_handler(request: Request, exc: SecureVoteError):
    status_code = status_for(exc)
    if status_code >= 500:
        metrics.record_error("api", exc)
        logger.error(
            "request failed",
            path=request.url.path,
            error=str(exc),
            request_id=get_request_id(request),
        )
        message = "Service temporarily unavailable" if status_code == 503 else "Internal server error"
        if isinstance(exc, ConfigurationError):
            message = exc.message
    else:
        message = exc.message
    return JSONResponse(status_code=status_code, content=error_response(exc.kind, message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return JSONResponse(
        status_code=422,
        content=error_response("ValidationError", message),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response("HTTPError", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def create_app(database: Optional[ElectionDatabase] = None) -> FastAPI:
    """Build the API application

    Args:
        database: Pre-built database (tests); defaults to config.DB_PATH.
                  A database passed in is left open on shutdown.
    """
    owns_database = database is None
    db = database or ElectionDatabase()

    if not is_initialized():
        secret = config.JWT_SECRET
        if not secret:
            logger.warning("SECUREVOTE_JWT_SECRET not set, using an ephemeral session secret")
            secret = secrets.token_urlsafe(32)
        init_jwt(secret)
        logger.info("JWT authentication initialized")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting SecureVote API", config_summary=config.summary())
        yield
        if owns_database:
            db.close()

    app = FastAPI(title="SecureVote API", description="Student club elections", lifespan=lifespan)
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    # Last registered runs first: metrics wraps logging, which binds the request ID
    @app.middleware("http")
    async def log_requests_middleware(request, call_next):
        return await log_requests(request, call_next)

    @app.middleware("http")
    async def metrics_middleware_wrapper(request, call_next):
        return await metrics_middleware(request, call_next)

    app.add_exception_handler(SecureVoteError, securevote_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(monitoring.router)  # Root, health and metrics
    app.include_router(auth.router)        # Register, login, session
    app.include_router(clubs.router)       # Clubs and positions
    app.include_router(elections.router)   # Live elections, rosters, candidacy
    app.include_router(votes.router)       # Ballot submission
    app.include_router(admin.router)       # Election management and results
    app.include_router(chat.router)        # Scripted assistant

    return app


if __name__ == "__main__":
    import uvicorn

    config.ensure_data_dir()
    logger.info("configuration", config_summary=config.summary())

    uvicorn.run(
        create_app(),
        host=config.API_HOST,
        port=config.API_PORT,
        access_log=False,  # Custom middleware logs requests
    )
