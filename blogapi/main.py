# blogapi/main.py

"""Blog Backend - publishing, search and pagination API for blog posts."""

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from blogapi.configs import settings
from blogapi.errors import (
    BaseAppError,
    DatabaseError,
    create_exception_handler,
    database_exception_handler,
)
from blogapi.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blogapi.monitoring import get_logger
from blogapi.routes import blog_router
from blogapi.schemas import HealthCheckResponse
from blogapi.utils.helpers import today_str

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog publishing API with search, filtering and pagination",
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(blog_router)

errors = [
    (DatabaseError, database_exception_handler),
    (BaseAppError, create_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 00:00:00",
                        "store": "postgres",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> ORJSONResponse:
    """
    Liveness probe.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "store": "memory"}
    """
    response = HealthCheckResponse(
        version=app.version,
        status="ok",
        timestamp=today_str(),
        store=settings.STORE_BACKEND,
    )
    return ORJSONResponse(response.model_dump())
