# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from blogapi.dependencies import get_blog_store
from blogapi.main import app
from blogapi.managers import create_access_token
from blogapi.models import UserDB
from blogapi.repositories import MemoryBlogStore


def bearer(user: UserDB) -> dict[str, str]:
    token = create_access_token(user.id, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(author: UserDB) -> dict[str, str]:
    """Create auth headers with a valid access token for the author."""
    return bearer(author)


@pytest.fixture
def other_auth_headers(other_author: UserDB) -> dict[str, str]:
    return bearer(other_author)


@pytest.fixture
async def client(store: MemoryBlogStore) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing, backed by the in-memory store."""
    app.dependency_overrides[get_blog_store] = lambda: store
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
