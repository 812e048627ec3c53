from blogapi.errors.database import DatabaseError, RecordNotFoundError


class BlogNotFoundError(RecordNotFoundError):
    """Raised when a blog is absent or not owned by the caller."""

    def __init__(self, detail: str = "Blog Not Found") -> None:
        super().__init__(detail)


class QueryExecutionFailed(DatabaseError):  # noqa: N818
    """Raised when a listing query fails in the store."""

    def __init__(self, cause: Exception, detail: str = "Failed to execute blog query") -> None:
        super().__init__(f"{detail}: {cause}")
        self.cause = cause
        self.__cause__ = cause
