"""PostgreSQL engine, per-request transactions and table bootstrap for the blog store."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from blogapi.configs import Settings, settings
from blogapi.models import BlogDB, UserDB  # noqa: F401
from blogapi.monitoring import get_logger

logger = get_logger(__name__)

BLOG_TABLES = ("users", "blogs")

type SessionFactory = async_sessionmaker[AsyncSession]


def engine_options(config: Settings) -> dict[str, Any]:
    """
    Keyword arguments for ``create_async_engine``.

    Listing queries run a count and a paged fetch back to back, so both the
    driver and the server enforce ``DATABASE_STATEMENT_TIMEOUT_MS`` to keep a
    slow filter from holding a pooled connection.

    Args:
        config: Application settings

    Returns:
        dict[str, Any]: Engine options
    """
    timeout_ms = config.DATABASE_STATEMENT_TIMEOUT_MS
    return {
        "echo": config.DATABASE_ECHO,
        "pool_size": config.POOL_SIZE,
        "max_overflow": config.MAX_OVERFLOW,
        "pool_timeout": config.POOL_TIMEOUT,
        "pool_recycle": config.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": timeout_ms / 1000,
            "server_settings": {
                "application_name": config.APP_NAME,
                "statement_timeout": str(timeout_ms),
                "lock_timeout": str(timeout_ms),
            },
        },
    }


engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **engine_options(settings))

async_session_maker: SessionFactory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def transaction(
    session_factory: SessionFactory | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Run one unit of work against the blog store.

    A request's reads and writes (for example the read count bump and the
    author lookup) share the yielded session and are committed together.

    Args:
        session_factory: Session maker to use instead of ``async_session_maker``

    Yields:
        AsyncSession: Session inside an open transaction

    Raises:
        Exception: Whatever the block raised, after rolling back
    """
    factory = session_factory or async_session_maker
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Blog transaction rolled back")
            raise


async def init_db(target: AsyncEngine | None = None) -> None:
    """
    Create the ``users`` and ``blogs`` tables when they are missing.

    Note:
        Deployments should run the Alembic migrations instead.
    """
    tables = [SQLModel.metadata.tables[name] for name in BLOG_TABLES]
    async with (target or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all, tables=tables)
    logger.info("Blog tables ready", tables=list(BLOG_TABLES))


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
