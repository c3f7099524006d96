"""FastAPI application entry point."""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, comments, health, messages, movies, profile, ratings, users
from core.auth import verify_token
from core.config import get_settings
from core.errors import ApiError
from core.logging_config import configure_logging
from core.redis import RedisClient, set_redis_client
from core.security import dummy_password_hash
from core.sessions import SessionMiddleware, SessionStore, set_session_store
from db.session import Database, engine_options, set_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    configure_logging(app_settings)

    # Startup: relational store
    database = Database(app_settings.database_url, **engine_options(app_settings))
    database.connect()
    set_database(database)

    # Startup: Redis-backed sessions
    redis_client = RedisClient(
        url=app_settings.redis_url,
        enabled=app_settings.redis_enabled,
        pool_size=app_settings.redis_pool_size,
    )
    await redis_client.connect()
    set_redis_client(redis_client)
    set_session_store(SessionStore(redis_client, app_settings.session_ttl_seconds))

    # Startup: hash used for unknown-account sign-ins, built off the event loop
    await run_in_threadpool(dummy_password_hash)

    logger.info("Application startup complete")
    yield

    # Shutdown: release pools in reverse order
    set_session_store(None)
    await redis_client.close()
    set_redis_client(None)
    await database.dispose()
    set_database(None)
    logger.info("Application shutdown complete")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Write one access log line per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log method, path, status and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


app_settings = get_settings()

app = FastAPI(
    title="Movies API",
    description="Movie catalog with accounts, sessions, bearer tokens and ratings.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ApiError)
async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    """Render ApiError bodies as-is."""
    return JSONResponse(status_code=exc.status_code, content=exc.body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed bodies and parameters are plain bad requests."""
    # Log locations only; inputs may contain passwords
    problems = [(".".join(map(str, e["loc"])), e["type"]) for e in exc.errors()]
    logger.warning("Rejected request %s %s: %s", request.method, request.url.path, problems)
    return JSONResponse(status_code=400, content={"error": "Bad request"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Unknown routes get the legacy not-found body; other HTTP errors keep `detail`."""
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": {"message": "Not Found"}})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected; the server keeps running."""
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.add_middleware(
    SessionMiddleware,
    cookie_name=app_settings.session_cookie_name,
    secure=app_settings.session_cookie_secure,
)

# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

protected = [Depends(verify_token)]

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(movies.router, dependencies=protected)
app.include_router(ratings.router, dependencies=protected)
app.include_router(profile.router, dependencies=protected)
app.include_router(comments.router, dependencies=protected)
app.include_router(messages.router, dependencies=protected)


def run() -> None:
    """Serve the application with uvicorn (console script entry point)."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run("api.main:app", host="0.0.0.0", port=8080)
