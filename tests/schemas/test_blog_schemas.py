# tests/schemas/test_blog_schemas.py
"""Tests for blog request and response schemas."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError

from blogapi.schemas import BlogCreate, BlogPageResponse, BlogResponse, BlogUpdate, ServiceResult


class TestBlogCreate:
    def test_defaults(self) -> None:
        blog = BlogCreate(title="  Title  ", body="Body")

        assert blog.title == "Title"
        assert blog.state == "draft"
        assert blog.tags == []

    def test_tags_normalized(self) -> None:
        blog = BlogCreate(title="T", body="b", tags=[" Go", "go", "", "Web "])

        assert blog.tags == ["go", "web"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "   ", "body": "b"},
            {"title": "T", "body": ""},
            {"title": "x" * 201, "body": "b"},
            {"title": "T", "body": "b", "state": "archived"},
            {"title": "T", "body": "b", "tags": ["x" * 51]},
            {"title": "T", "body": "b", "tags": [f"t{i}" for i in range(21)]},
        ],
    )
    def test_invalid_payloads(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            BlogCreate(**payload)


class TestBlogUpdate:
    def test_everything_optional(self) -> None:
        update = BlogUpdate()

        assert update.model_dump(exclude_none=True) == {}

    def test_tags_normalized_when_given(self) -> None:
        assert BlogUpdate(tags=["Rust", "rust"]).tags == ["rust"]


class TestServiceResult:
    def test_content_uses_camel_case_and_drops_absent_keys(self) -> None:
        blog = BlogResponse(
            id=uuid4(),
            author_id=uuid4(),
            title="T",
            slug="t",
            body="b",
            tags=[],
            state="draft",
            read_count=0,
            reading_time=1,
            timestamp=datetime(2025, 1, 1, tzinfo=UTC),
        )
        result = ServiceResult(
            status=200,
            message="success",
            data=BlogPageResponse(items=[blog], page=1, limit=20, total=1, total_pages=1),
        )

        content = result.to_content()

        assert set(content) == {"status", "message", "data"}
        assert content["data"]["totalPages"] == 1
        item = content["data"]["items"][0]
        assert {"authorId", "readCount", "readingTime"} <= set(item)
        assert "updatedAt" not in item
        assert result.ok

    def test_failure_is_not_ok(self) -> None:
        assert not ServiceResult(status=500, message="x", error="boom").ok
