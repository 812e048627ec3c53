# tests/repositories/test_memory_store.py
"""Tests for blogapi/repositories/memory.py."""

from asyncio import gather
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from blogapi.models import BlogDB, UserDB
from blogapi.repositories import (
    BlogStoreProtocol,
    IdMatch,
    MemoryBlogStore,
    SearchCriteria,
    SlugMatch,
    SortKey,
    StateIn,
)

type BlogFactory = Callable[..., BlogDB]


class TestMemoryBlogStore:
    """Test cases for MemoryBlogStore."""

    def test_satisfies_store_protocol(self, store: MemoryBlogStore) -> None:
        assert isinstance(store, BlogStoreProtocol)

    @pytest.mark.asyncio
    async def test_find_applies_skip_limit_and_order(
        self,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        blogs = [await store.insert(make_blog()) for _ in range(5)]

        page = await store.find(
            SearchCriteria(),
            skip=1,
            limit=2,
            order_by=(SortKey("timestamp", descending=True),),
        )

        assert page == [blogs[3], blogs[2]]

    @pytest.mark.asyncio
    async def test_pages_over_tied_timestamps_do_not_overlap(
        self,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        same_second = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
        blogs = [await store.insert(make_blog(timestamp=same_second)) for _ in range(25)]
        newest = (SortKey("timestamp", descending=True),)

        first = await store.find(SearchCriteria(), skip=0, limit=20, order_by=newest)
        second = await store.find(SearchCriteria(), skip=20, limit=20, order_by=newest)

        assert (len(first), len(second)) == (20, 5)
        assert {blog.id for blog in first + second} == {blog.id for blog in blogs}

    @pytest.mark.asyncio
    async def test_count(self, store: MemoryBlogStore, make_blog: BlogFactory) -> None:
        await store.insert(make_blog(state="draft"))
        await store.insert(make_blog())

        assert await store.count(SearchCriteria()) == 2
        assert await store.count(SearchCriteria.all_of(StateIn(frozenset({"draft"})))) == 1

    @pytest.mark.asyncio
    async def test_find_one_returns_newest_match(
        self,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        await store.insert(make_blog(title="dup"))
        newest = await store.insert(make_blog(title="dup"))

        assert await store.find_one(SearchCriteria.all_of(SlugMatch("dup"))) is newest

    @pytest.mark.asyncio
    async def test_find_one_and_delete(
        self,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        blog = await store.insert(make_blog())

        deleted = await store.find_one_and_delete(SearchCriteria.all_of(IdMatch(blog.id)))
        missing = await store.find_one_and_delete(SearchCriteria.all_of(IdMatch(blog.id)))

        assert deleted is blog
        assert missing is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(
        self,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        blog = await store.insert(make_blog())
        criteria = SearchCriteria.all_of(IdMatch(blog.id))

        await gather(*(store.increment_read_count(criteria) for _ in range(50)))

        assert blog.read_count == 50

    @pytest.mark.asyncio
    async def test_increment_missing_returns_none(self, store: MemoryBlogStore) -> None:
        assert await store.increment_read_count(SearchCriteria.all_of(IdMatch(uuid4()))) is None

    @pytest.mark.asyncio
    async def test_get_authors_skips_unknown_ids(
        self,
        store: MemoryBlogStore,
        author: UserDB,
    ) -> None:
        authors = await store.get_authors([author.id, author.id, uuid4()])

        assert authors == {author.id: author}
        assert await store.get_author(uuid4()) is None

    @pytest.mark.asyncio
    async def test_add_author(self, store: MemoryBlogStore) -> None:
        newcomer = UserDB(id=uuid4(), first_name="Ada", last_name="L", email="ada@example.com")

        await store.add_author(newcomer)

        assert await store.get_author(newcomer.id) is newcomer
