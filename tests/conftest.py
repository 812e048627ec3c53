# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before blogapi is imported anywhere
os.environ["STORE_BACKEND"] = "memory"
os.environ["SECRET_KEY"] = "test-secret-key-for-blogapi-tests"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from blogapi.models import BlogDB, UserDB
from blogapi.repositories import MemoryBlogStore
from blogapi.services import BlogService

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)

type BlogFactory = Callable[..., BlogDB]


@pytest.fixture
def author() -> UserDB:
    """Create the author most tests act as."""
    return UserDB(
        id=uuid4(),
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
    )


@pytest.fixture
def other_author() -> UserDB:
    """Create a second author who owns nothing of the first."""
    return UserDB(
        id=uuid4(),
        first_name="John",
        last_name="Smith",
        email="john@example.com",
    )


@pytest.fixture
def make_blog(author: UserDB) -> BlogFactory:
    """
    Build ``BlogDB`` instances with sensible defaults.

    Each call is one minute newer than the previous one so that the default
    newest-first order is deterministic.
    """
    counter = iter(range(10_000))

    def _make(**overrides: object) -> BlogDB:
        index = next(counter)
        title = overrides.pop("title", f"Post {index}")
        values: dict[str, object] = {
            "id": uuid4(),
            "author_id": author.id,
            "title": title,
            "slug": str(title).lower().replace(" ", "-"),
            "description": None,
            "body": "word " * 10,
            "state": "published",
            "read_count": 0,
            "reading_time": 1,
            "tags": [],
            "timestamp": BASE_TIME + timedelta(minutes=index),
        }
        values.update(overrides)
        return BlogDB(**values)

    return _make


@pytest.fixture
def store(author: UserDB, other_author: UserDB) -> MemoryBlogStore:
    """Create an empty in-memory store that knows both authors."""
    return MemoryBlogStore(authors=[author, other_author])


@pytest.fixture
def service(store: MemoryBlogStore) -> BlogService:
    return BlogService(store)
