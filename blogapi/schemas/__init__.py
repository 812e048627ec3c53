from blogapi.schemas.blog import (
    AuthorResponse,
    BlogCreate,
    BlogPageResponse,
    BlogResponse,
    BlogUpdate,
)
from blogapi.schemas.envelope import ServiceResult
from blogapi.schemas.health import HealthCheckResponse

__all__ = [
    "AuthorResponse",
    "BlogCreate",
    "BlogPageResponse",
    "BlogResponse",
    "BlogUpdate",
    "HealthCheckResponse",
    "ServiceResult",
]
