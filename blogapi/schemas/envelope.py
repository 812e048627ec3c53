"""Uniform result envelope returned by every blog service operation."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from blogapi.schemas.blog import AuthorResponse, BlogPageResponse, BlogResponse


class ServiceResult(BaseModel):
    """
    Outcome of a service operation.

    ``status`` mirrors HTTP semantics (200, 201, 404, 500) so the routes can
    forward it unchanged. Failures carry ``error`` and never ``data``.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: int
    message: str
    data: BlogPageResponse | None = None
    blog: BlogResponse | None = None
    author: AuthorResponse | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status < 400

    def to_content(self) -> dict[str, Any]:
        """Serialize with camelCase aliases, dropping absent keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
