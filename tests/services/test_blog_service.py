# tests/services/test_blog_service.py
"""Tests for blogapi/services/blog.py."""

from collections.abc import Callable
from uuid import uuid4

import pytest

from blogapi.configs.settings import MAX_SLUG_LENGTH, MAX_TITLE_LENGTH
from blogapi.models import BlogDB, UserDB
from blogapi.repositories import MemoryBlogStore
from blogapi.schemas import BlogCreate, BlogUpdate
from blogapi.services import BlogService

type BlogFactory = Callable[..., BlogDB]


class TestCreateBlog:
    """Test cases for BlogService.create_blog."""

    @pytest.mark.asyncio
    async def test_creates_draft_with_slug_and_reading_time(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        author: UserDB,
    ) -> None:
        data = BlogCreate(title="Hello, World!", body="word " * 450, tags=["Go", "go"])

        result = await service.create_blog(author.id, data)

        assert result.status == 201
        assert result.message == "Blog created successfully"
        assert result.blog is not None
        assert result.blog.slug == "hello-world"
        assert result.blog.reading_time == 3
        assert result.blog.state == "draft"
        assert result.blog.tags == ["go"]
        assert result.blog.author_id == author.id
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_title_without_slug_characters_uses_id(
        self,
        service: BlogService,
        author: UserDB,
    ) -> None:
        result = await service.create_blog(author.id, BlogCreate(title="!!!", body="x"))

        assert result.blog is not None
        assert result.blog.slug == str(result.blog.id)

    @pytest.mark.asyncio
    async def test_slug_fits_column_when_folding_lengthens_title(
        self,
        service: BlogService,
        author: UserDB,
    ) -> None:
        data = BlogCreate(title="\ufb01" * MAX_TITLE_LENGTH, body="x")

        result = await service.create_blog(author.id, data)

        assert result.status == 201
        assert result.blog is not None
        assert len(result.blog.slug) == MAX_SLUG_LENGTH

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_envelope(
        self,
        failing_service: BlogService,
        author: UserDB,
    ) -> None:
        result = await failing_service.create_blog(author.id, BlogCreate(title="T", body="b"))

        assert result.status == 500
        assert result.error == "connection refused"
        assert result.blog is None


class TestGetBlog:
    """Test cases for BlogService.get_blog."""

    @pytest.mark.asyncio
    async def test_reading_twice_counts_two_reads(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(title="Counted"))

        await service.get_blog(str(blog.id))
        result = await service.get_blog("counted")

        assert result.status == 200
        assert result.blog is not None
        assert result.blog.read_count == 2
        assert result.author is not None
        assert result.author.id == author.id
        assert result.blog.author is not None

    @pytest.mark.asyncio
    async def test_draft_is_not_found_publicly(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        blog = await store.insert(make_blog(state="draft"))

        result = await service.get_blog(str(blog.id))

        assert result.status == 404
        assert result.message == "Blog Not Found"
        assert blog.read_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_slug_resolves_to_newest(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        await store.insert(make_blog(title="Same"))
        newest = await store.insert(make_blog(title="Same"))

        result = await service.get_blog("same")

        assert result.blog is not None
        assert result.blog.id == newest.id

    @pytest.mark.asyncio
    async def test_author_response_fields(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        blog = await store.insert(make_blog())

        content = (await service.get_blog(str(blog.id))).to_content()

        assert set(content["author"]) == {"id", "firstName", "lastName", "email"}
        assert content["author"]["firstName"] == "Jane"


class TestGetMyBlog:
    @pytest.mark.asyncio
    async def test_owner_sees_draft_without_counting(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(state="draft"))

        result = await service.get_my_blog(author.id, str(blog.id))

        assert result.status == 200
        assert result.blog is not None
        assert result.blog.read_count == 0

    @pytest.mark.asyncio
    async def test_other_author_gets_not_found(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        other_author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(state="draft"))

        result = await service.get_my_blog(other_author.id, blog.slug)

        assert result.status == 404
        assert result.message == "Blog Not Found or doesn't belong to you"


class TestUpdateBlog:
    """Test cases for BlogService.update_blog."""

    @pytest.mark.asyncio
    async def test_new_title_and_body_recompute_derived_fields(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(title="Old Title", description="keep me"))

        result = await service.update_blog(
            author.id,
            blog.id,
            BlogUpdate(title="New Title", body="word " * 401, description=""),
        )

        assert result.status == 200
        assert result.blog is not None
        assert result.blog.slug == "new-title"
        assert result.blog.reading_time == 3
        assert result.blog.description == "keep me"
        assert result.blog.updated_at is not None

    @pytest.mark.asyncio
    async def test_non_owner_gets_not_found(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        other_author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(title="Mine"))

        result = await service.update_blog(other_author.id, blog.id, BlogUpdate(title="Theirs"))

        assert result.status == 404
        assert blog.title == "Mine"

    @pytest.mark.asyncio
    async def test_store_failure_uses_update_message(
        self,
        failing_service: BlogService,
        author: UserDB,
    ) -> None:
        result = await failing_service.update_blog(author.id, uuid4(), BlogUpdate(title="x"))

        assert result.status == 500
        assert result.message == "Error updating the blog"
        assert result.data is None


class TestDeleteBlog:
    @pytest.mark.asyncio
    async def test_owner_deletes(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog())

        result = await service.delete_blog(author.id, blog.id)

        assert result.status == 200
        assert result.message == f"Blog with ID {blog.id} deleted successfully"
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_non_owner_gets_not_found(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        other_author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog())

        result = await service.delete_blog(other_author.id, blog.id)

        assert result.status == 404
        assert len(store) == 1


class TestPublishBlog:
    @pytest.mark.asyncio
    async def test_publish_returns_blog_and_author(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(state="draft"))

        result = await service.publish_blog(author.id, blog.id)

        assert result.status == 200
        assert result.blog is not None
        assert result.blog.state == "published"
        assert result.author is not None
        assert result.author.email == author.email
        assert (await service.get_blog(str(blog.id))).status == 200

    @pytest.mark.asyncio
    async def test_non_owner_gets_not_found(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        other_author: UserDB,
    ) -> None:
        blog = await store.insert(make_blog(state="draft"))

        result = await service.publish_blog(other_author.id, blog.id)

        assert result.status == 404
        assert blog.state == "draft"


class TestListings:
    """Test cases for the listing operations."""

    @pytest.mark.asyncio
    async def test_get_blogs_embeds_authors(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        await store.insert(make_blog())

        result = await service.get_blogs({})

        assert result.status == 200
        assert result.message == "success"
        assert result.data is not None
        assert result.data.total == 1
        assert result.data.items[0].author is not None

    @pytest.mark.asyncio
    async def test_my_blogs_filters_by_state(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
        author: UserDB,
    ) -> None:
        await store.insert(make_blog(state="draft"))
        await store.insert(make_blog(state="published"))

        result = await service.my_blogs(author.id, {"state": "draft"})

        assert result.data is not None
        assert [item.state for item in result.data.items] == ["draft"]

    @pytest.mark.asyncio
    async def test_blogs_by_tag(
        self,
        service: BlogService,
        store: MemoryBlogStore,
        make_blog: BlogFactory,
    ) -> None:
        await store.insert(make_blog(tags=["go"]))
        await store.insert(make_blog(tags=["rust"]))

        result = await service.blogs_by_tag("Go")

        assert result.data is not None
        assert result.data.total == 1
        assert result.data.items[0].tags == ["go"]

    @pytest.mark.asyncio
    async def test_store_failure_has_error_and_no_data(
        self,
        failing_service: BlogService,
    ) -> None:
        result = await failing_service.get_blogs({"page": "2"})
        content = result.to_content()

        assert result.status == 500
        assert "error" in content
        assert "data" not in content
