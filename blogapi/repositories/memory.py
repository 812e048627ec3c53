"""In-memory blog store for development and tests when PostgreSQL is not used."""

from asyncio import Lock
from collections.abc import Iterable
from uuid import UUID

from blogapi.models import BlogDB, UserDB
from blogapi.monitoring import get_logger
from blogapi.repositories.criteria import NEWEST_FIRST, SearchCriteria, SortKey, sort_blogs

logger = get_logger(__name__)


class MemoryBlogStore:
    """
    An asynchronous in-memory store that mimics BlogRepository.

    Reads evaluate ``SearchCriteria`` directly against stored models. Writes
    are serialized with an ``asyncio.Lock`` so the read count increment is
    atomic across concurrent requests.
    """

    def __init__(
        self,
        blogs: Iterable[BlogDB] = (),
        authors: Iterable[UserDB] = (),
    ) -> None:
        self._blogs: dict[UUID, BlogDB] = {blog.id: blog for blog in blogs}
        self._authors: dict[UUID, UserDB] = {author.id: author for author in authors}
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._blogs)

    async def add_author(self, author: UserDB) -> UserDB:
        async with self._lock:
            self._authors[author.id] = author
        return author

    def _matching(self, criteria: SearchCriteria) -> list[BlogDB]:
        return [blog for blog in self._blogs.values() if criteria.matches(blog)]

    def _newest(self, criteria: SearchCriteria) -> BlogDB | None:
        matching = sort_blogs(self._matching(criteria), NEWEST_FIRST)
        return matching[0] if matching else None

    async def find(
        self,
        criteria: SearchCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        order_by: tuple[SortKey, ...] = (),
    ) -> list[BlogDB]:
        ordered = sort_blogs(self._matching(criteria), order_by)
        return ordered[skip : skip + limit]

    async def count(self, criteria: SearchCriteria) -> int:
        return len(self._matching(criteria))

    async def find_one(self, criteria: SearchCriteria) -> BlogDB | None:
        return self._newest(criteria)

    async def insert(self, blog: BlogDB) -> BlogDB:
        async with self._lock:
            self._blogs[blog.id] = blog
        logger.debug("Blog stored in memory", blog_id=str(blog.id))
        return blog

    async def save(self, blog: BlogDB) -> BlogDB:
        async with self._lock:
            self._blogs[blog.id] = blog
        return blog

    async def find_one_and_delete(self, criteria: SearchCriteria) -> BlogDB | None:
        async with self._lock:
            blog = self._newest(criteria)
            if blog:
                del self._blogs[blog.id]
        return blog

    async def increment_read_count(self, criteria: SearchCriteria) -> BlogDB | None:
        async with self._lock:
            blog = self._newest(criteria)
            if blog:
                blog.read_count += 1
        return blog

    async def get_author(self, author_id: UUID) -> UserDB | None:
        return self._authors.get(author_id)

    async def get_authors(self, author_ids: Iterable[UUID]) -> dict[UUID, UserDB]:
        return {
            author_id: self._authors[author_id]
            for author_id in set(author_ids)
            if author_id in self._authors
        }
