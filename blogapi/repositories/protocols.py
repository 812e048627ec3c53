"""Protocol definitions for blog store implementations."""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable
from uuid import UUID

from blogapi.models import BlogDB, UserDB
from blogapi.repositories.criteria import SearchCriteria, SortKey


@runtime_checkable
class BlogStoreProtocol(Protocol):
    """
    Protocol for blog store implementations.

    Both BlogRepository and MemoryBlogStore conform to this protocol.
    Implementations raise ``DatabaseError`` subclasses on store failures,
    never driver-specific exceptions.
    """

    async def find(
        self,
        criteria: SearchCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        order_by: tuple[SortKey, ...] = (),
    ) -> list[BlogDB]:
        """Fetch one page of blogs matching the criteria."""
        ...

    async def count(self, criteria: SearchCriteria) -> int:
        """Count every blog matching the criteria."""
        ...

    async def find_one(self, criteria: SearchCriteria) -> BlogDB | None:
        """Fetch the most recent blog matching the criteria."""
        ...

    async def insert(self, blog: BlogDB) -> BlogDB:
        """Store a new blog."""
        ...

    async def save(self, blog: BlogDB) -> BlogDB:
        """Persist changes made to a fetched blog."""
        ...

    async def find_one_and_delete(self, criteria: SearchCriteria) -> BlogDB | None:
        """Delete the blog matching the criteria and return it."""
        ...

    async def increment_read_count(self, criteria: SearchCriteria) -> BlogDB | None:
        """Atomically add one to the read count of the matching blog."""
        ...

    async def get_author(self, author_id: UUID) -> UserDB | None:
        """Fetch an author by ID."""
        ...

    async def get_authors(self, author_ids: Iterable[UUID]) -> dict[UUID, UserDB]:
        """Fetch several authors keyed by ID."""
        ...
