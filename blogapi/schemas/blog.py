"""
Blog schemas for the blog backend.

Request bodies for creating and updating posts, and the response models the
service places in its envelopes. Responses use camelCase aliases.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogapi.configs.settings import (
    MAX_BODY_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TAGS_COUNT,
    MAX_TITLE_LENGTH,
)


def normalize_tags(tags: list[str]) -> list[str]:
    """Strip, lowercase and de-duplicate tags, keeping their order."""
    cleaned = [tag.strip().lower() for tag in tags if tag.strip()]
    for tag in cleaned:
        if len(tag) > MAX_TAG_LENGTH:
            mssg = f"Each tag must be at most {MAX_TAG_LENGTH} characters"
            raise ValueError(mssg)
    return list(dict.fromkeys(cleaned))


class BlogCreate(BaseModel):
    """Blog creation model (request body, excludes generated fields)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Blog title",
        examples=["Getting Started With Go"],
    )
    description: str | None = Field(
        default=None,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Short description (optional)",
    )
    body: str = Field(
        ...,
        min_length=1,
        max_length=MAX_BODY_LENGTH,
        description="Blog body (markdown or plain text)",
    )
    tags: list[str] = Field(
        default_factory=list,
        max_length=MAX_TAGS_COUNT,
        description="Blog tags for categorization",
        examples=[["go", "programming"]],
    )
    state: Literal["draft", "published"] = Field(
        default="draft",
        description="Initial state",
    )

    @field_validator("title", mode="after")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            mssg = "Title must not be blank"
            raise ValueError(mssg)
        return v.strip()

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class BlogUpdate(BaseModel):
    """Blog update model (all fields optional, blank values are ignored)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Getting Started With Go, Revised",
                "body": "Go is a small language with a big standard library...",
                "tags": ["go", "tutorial"],
                "state": "published",
            },
        },
    )

    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    body: str | None = Field(default=None, max_length=MAX_BODY_LENGTH)
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS_COUNT)
    state: Literal["draft", "published"] | None = None

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return normalize_tags(v) if v is not None else None


class AuthorResponse(BaseModel):
    """Author information for blog responses."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str


class BlogResponse(BaseModel):
    """Blog response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    author_id: UUID = Field(alias="authorId")
    title: str
    slug: str
    description: str | None = None
    body: str
    tags: list[str]
    state: str
    read_count: int = Field(alias="readCount")
    reading_time: int = Field(alias="readingTime")
    timestamp: datetime
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    author: AuthorResponse | None = None


class BlogPageResponse(BaseModel):
    """Paged listing payload."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[BlogResponse]
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")
