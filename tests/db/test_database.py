# tests/db/test_database.py
"""Tests for blogapi/db/database.py without a live PostgreSQL server."""

from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import SQLModel

from blogapi.configs import settings
from blogapi.db.database import BLOG_TABLES, engine_options, init_db, transaction


def session_factory(session: AsyncMock) -> Callable[[], AbstractAsyncContextManager[AsyncMock]]:
    @asynccontextmanager
    async def factory() -> AsyncGenerator[AsyncMock]:
        yield session

    return factory


class TestEngineOptions:
    def test_pool_settings_are_forwarded(self) -> None:
        options = engine_options(settings)

        assert options["pool_size"] == settings.POOL_SIZE
        assert options["max_overflow"] == settings.MAX_OVERFLOW
        assert options["pool_pre_ping"] is True

    def test_statement_timeout_applies_to_driver_and_server(self) -> None:
        config = settings.model_copy(
            update={"DATABASE_STATEMENT_TIMEOUT_MS": 5000, "APP_NAME": "blog-test"},
        )

        connect_args = engine_options(config)["connect_args"]

        assert connect_args["command_timeout"] == 5
        assert connect_args["server_settings"] == {
            "application_name": "blog-test",
            "statement_timeout": "5000",
            "lock_timeout": "5000",
        }


class TestTransaction:
    @pytest.mark.asyncio
    async def test_commits_on_success(self) -> None:
        session = AsyncMock()

        async with transaction(session_factory(session)) as active:
            assert active is session

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_and_reraises(self) -> None:
        session = AsyncMock()

        with pytest.raises(RuntimeError, match="boom"):
            async with transaction(session_factory(session)):
                raise RuntimeError("boom")

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()


class TestInitDb:
    @pytest.mark.asyncio
    async def test_creates_only_blog_tables(self) -> None:
        conn = AsyncMock()

        @asynccontextmanager
        async def begin() -> AsyncGenerator[AsyncMock]:
            yield conn

        target = MagicMock()
        target.begin = begin

        await init_db(target)

        (create_all,) = conn.run_sync.await_args.args
        tables = conn.run_sync.await_args.kwargs["tables"]
        assert create_all == SQLModel.metadata.create_all
        assert [table.name for table in tables] == list(BLOG_TABLES)
