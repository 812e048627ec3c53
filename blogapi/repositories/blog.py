"""Blog repository for PostgreSQL operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import Executable, Result, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import UnaryExpression

from blogapi.errors.base import BASE_EXCEPTION
from blogapi.errors.database import DatabaseConnectionError, DatabaseError
from blogapi.models import BlogDB, UserDB
from blogapi.monitoring import get_logger
from blogapi.repositories.criteria import (
    NEWEST_FIRST,
    SearchCriteria,
    SortKey,
    with_tiebreaker,
)

logger = get_logger(__name__)


def _newest_first() -> list[UnaryExpression]:
    return [key.to_sql() for key in with_tiebreaker(NEWEST_FIRST)]


class BlogRepository:
    """
    Repository for Blog database operations.

    This class implements the repository pattern for Blog entities on top of
    an async SQLAlchemy session. Every statement goes through ``_execute`` or
    ``_flush`` so driver errors surface as ``DatabaseError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find(
        self,
        criteria: SearchCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        order_by: tuple[SortKey, ...] = (),
    ) -> list[BlogDB]:
        """
        Fetch one page of blogs matching the criteria.

        Args:
            criteria: Filter to apply
            skip: Number of records to skip
            limit: Maximum number of records to return
            order_by: Sort keys, most significant first

        Returns:
            list[BlogDB]: Matching blogs
        """
        statement = (
            select(BlogDB)
            .where(criteria.where())
            .order_by(*(key.to_sql() for key in with_tiebreaker(order_by)))
            .offset(skip)
            .limit(limit)
        )
        result = await self._execute(statement)
        return list(result.scalars().all())

    async def count(self, criteria: SearchCriteria) -> int:
        """
        Count blogs matching the criteria.

        Args:
            criteria: Filter to apply

        Returns:
            int: Number of matching blogs
        """
        statement = select(func.count()).select_from(BlogDB).where(criteria.where())
        result = await self._execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def find_one(self, criteria: SearchCriteria) -> BlogDB | None:
        """
        Fetch the most recent blog matching the criteria.

        Args:
            criteria: Filter to apply

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        statement = (
            select(BlogDB).where(criteria.where()).order_by(*_newest_first()).limit(1)
        )
        result = await self._execute(statement)
        return result.scalars().first()

    async def insert(self, blog: BlogDB) -> BlogDB:
        """
        Create a new blog post in the database.

        Args:
            blog: Blog to insert

        Returns:
            BlogDB: Refreshed blog
        """
        self.session.add(blog)
        await self._flush(blog)
        return blog

    async def save(self, blog: BlogDB) -> BlogDB:
        """
        Persist changes made to a blog loaded by this repository.

        Args:
            blog: Modified blog

        Returns:
            BlogDB: Refreshed blog
        """
        self.session.add(blog)
        await self._flush(blog)
        return blog

    async def find_one_and_delete(self, criteria: SearchCriteria) -> BlogDB | None:
        """
        Delete the blog matching the criteria.

        Args:
            criteria: Filter identifying the blog

        Returns:
            BlogDB | None: Deleted blog, None if nothing matched
        """
        blog = await self.find_one(criteria)
        if not blog:
            return None

        try:
            await self.session.delete(blog)
            await self.session.flush()
        except (SQLAlchemyError, *BASE_EXCEPTION) as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to delete blog: {e}") from e
        return blog

    async def increment_read_count(self, criteria: SearchCriteria) -> BlogDB | None:
        """
        Increment the read count of the matching blog in a single statement.

        Args:
            criteria: Filter identifying the blog

        Returns:
            BlogDB | None: Updated blog if found, None otherwise
        """
        target = (
            select(BlogDB.id)
            .where(criteria.where())
            .order_by(*_newest_first())
            .limit(1)
            .scalar_subquery()
        )
        statement = (
            update(BlogDB)
            .where(BlogDB.id == target)
            .values(read_count=BlogDB.read_count + 1)
            .returning(BlogDB)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._execute(statement)
        return result.scalars().first()

    async def get_author(self, author_id: UUID) -> UserDB | None:
        """
        Get an author by ID.

        Args:
            author_id: Author UUID

        Returns:
            UserDB | None: Author if found, None otherwise
        """
        result = await self._execute(select(UserDB).where(UserDB.id == author_id))
        return result.scalar_one_or_none()

    async def get_authors(self, author_ids: Iterable[UUID]) -> dict[UUID, UserDB]:
        """
        Get several authors in one query.

        Args:
            author_ids: Author UUIDs

        Returns:
            dict[UUID, UserDB]: Authors keyed by ID
        """
        ids = set(author_ids)
        if not ids:
            return {}
        result = await self._execute(select(UserDB).where(UserDB.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}

    async def _execute(self, statement: Executable) -> Result:
        try:
            return await self.session.execute(statement)
        except (SQLAlchemyError, *BASE_EXCEPTION) as e:
            logger.warning("Blog statement failed", error=str(e))
            raise DatabaseConnectionError(detail=f"Blog query failed: {e}") from e

    async def _flush(self, blog: BlogDB) -> None:
        """
        Flush pending changes and refresh the blog with error handling.

        Raises:
            DatabaseError: If a constraint is violated
            DatabaseConnectionError: For other database errors
        """
        try:
            await self.session.flush()
            await self.session.refresh(blog)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except (SQLAlchemyError, *BASE_EXCEPTION) as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save blog: {e}") from e
