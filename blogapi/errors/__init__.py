from blogapi.errors.base import BASE_EXCEPTION, BaseAppError, create_exception_handler
from blogapi.errors.blog import BlogNotFoundError, QueryExecutionFailed
from blogapi.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    RecordNotFoundError,
    database_exception_handler,
)

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "BlogNotFoundError",
    "DatabaseConnectionError",
    "DatabaseError",
    "QueryExecutionFailed",
    "RecordNotFoundError",
    "create_exception_handler",
    "database_exception_handler",
]
