# blogapi/middleware/middleware.py
"""
Middleware components and the lifespan handler.

Request logging binds a request ID into the structured logging context for
the duration of each request. The lifespan handler configures logging and
prepares the configured blog store.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from blogapi.configs import settings
from blogapi.db import close_db, init_db
from blogapi.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from blogapi.repositories import MemoryBlogStore
from blogapi.utils.helpers import get_summary, host, time_taken

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown."""
    configure_logging()
    logger.info(f"Starting {app.title}...", backend=settings.STORE_BACKEND)

    try:
        if settings.STORE_BACKEND == "memory":
            app.state.memory_store = MemoryBlogStore()
            logger.info("In-memory blog store initialized")
        else:
            await init_db()

        logger.info("Services initialized successfully")
        logger.info(f"  - Backend API: http://{settings.HOST}:{settings.PORT}")
        logger.info(f"  - API Documentation: http://{settings.HOST}:{settings.PORT}/docs")
        logger.info(f"  - Health Check: http://{settings.HOST}:{settings.PORT}/health")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        if settings.STORE_BACKEND == "postgres":
            await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing, tagged with a request ID."""

        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()

        try:
            route_info = get_summary(request) or f"{request.method} {request.url.path}"
            logger.info(f"Request: {route_info}", ip=host(request))

            response = await call_next(request)
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path}",
                duration=time_taken(start_time),
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
