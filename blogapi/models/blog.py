"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class BlogDB(SQLModel, table=True):
    """
    Blog database model for PostgreSQL.

    Slugs are indexed but not unique: two posts with the same title share a
    slug, and slug lookups resolve to the most recent one.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_tags_gin", "tags", postgresql_using="gin"),
        Index("ix_blogs_state_timestamp", "state", "timestamp"),
        Index("ix_blogs_author_state", "author_id", "state"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Blog title",
    )
    slug: str = Field(
        sa_column=Column(String(200), nullable=False, index=True),
        description="URL-friendly slug derived from the title",
    )
    description: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short description of the post",
    )
    body: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog body (markdown or plain text)",
    )

    state: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True, server_default="draft"),
        description="Blog state (draft, published)",
    )
    read_count: int = Field(
        default=0,
        nullable=False,
        description="Number of times the published post was read",
    )
    reading_time: int = Field(
        default=1,
        nullable=False,
        description="Estimated reading time in minutes",
    )

    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False),
        description="Blog tags for categorization",
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Getting Started With Go",
                "slug": "getting-started-with-go",
                "description": "A gentle introduction",
                "body": "Go is a small language...",
                "state": "draft",
                "read_count": 0,
                "reading_time": 1,
                "tags": ["go", "programming"],
            },
        },
    )
