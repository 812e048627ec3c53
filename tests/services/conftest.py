# tests/services/conftest.py
"""Pytest fixtures for service tests."""

from unittest.mock import AsyncMock

import pytest

from blogapi.errors import DatabaseConnectionError
from blogapi.services import BlogService


@pytest.fixture
def failing_store() -> AsyncMock:
    """Create a store whose every operation fails like an unreachable database."""
    store = AsyncMock()
    error = DatabaseConnectionError("connection refused")
    for name in (
        "find",
        "count",
        "find_one",
        "insert",
        "save",
        "find_one_and_delete",
        "increment_read_count",
        "get_author",
        "get_authors",
    ):
        getattr(store, name).side_effect = error
    return store


@pytest.fixture
def failing_service(failing_store: AsyncMock) -> BlogService:
    return BlogService(failing_store)
