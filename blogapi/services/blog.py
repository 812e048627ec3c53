"""
Blog service.

Every operation returns a ``ServiceResult`` envelope instead of raising:
store failures are logged and reported as ``500`` with an ``error`` text,
missing or foreign posts as ``404``. Ownership is enforced by filtering on
the author inside the store query, so a post that exists but belongs to
someone else is indistinguishable from one that does not exist.
"""

from uuid import UUID, uuid4

from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from blogapi.configs import DEFAULT_ERROR_MESSAGE
from blogapi.errors.blog import BlogNotFoundError
from blogapi.errors.database import DatabaseError
from blogapi.models import BlogDB, UserDB
from blogapi.monitoring import get_logger
from blogapi.repositories.criteria import (
    AuthorMatch,
    IdMatch,
    SearchCriteria,
    SlugMatch,
    StateIn,
)
from blogapi.repositories.protocols import BlogStoreProtocol
from blogapi.schemas import (
    AuthorResponse,
    BlogCreate,
    BlogPageResponse,
    BlogResponse,
    BlogUpdate,
    ServiceResult,
)
from blogapi.services.query import (
    PUBLISHED,
    BlogPage,
    ListScope,
    RawParams,
    build_list_query,
    run_list_query,
)
from blogapi.utils.helpers import utc_now
from blogapi.utils.text import calculate_reading_time, slugify

logger = get_logger(__name__)


def id_or_slug_clause(id_or_slug: str) -> IdMatch | SlugMatch:
    """Match by ID when the value parses as a UUID, by slug otherwise."""
    try:
        return IdMatch(UUID(id_or_slug))
    except ValueError:
        return SlugMatch(id_or_slug)


def author_to_response(author: UserDB | None) -> AuthorResponse | None:
    return AuthorResponse.model_validate(author) if author else None


def blog_to_response(blog: BlogDB, author: UserDB | None = None) -> BlogResponse:
    """Convert a ``BlogDB`` into a ``BlogResponse``, optionally embedding its author."""
    response = BlogResponse.model_validate(blog)
    if author:
        response = response.model_copy(update={"author": author_to_response(author)})
    return response


def page_to_response(
    page: BlogPage,
    authors: dict[UUID, UserDB] | None = None,
) -> BlogPageResponse:
    authors = authors or {}
    return BlogPageResponse(
        items=[blog_to_response(blog, authors.get(blog.author_id)) for blog in page.items],
        page=page.page,
        limit=page.limit,
        total=page.total,
        total_pages=page.total_pages,
    )


def not_found(error: BlogNotFoundError) -> ServiceResult:
    return ServiceResult(status=error.status_code, message=error.detail)


def failure(error: Exception, message: str = DEFAULT_ERROR_MESSAGE) -> ServiceResult:
    return ServiceResult(
        status=HTTP_500_INTERNAL_SERVER_ERROR,
        message=message,
        error=str(error),
    )


class BlogService:
    """
    Blog operations on top of an injected store.

    Args:
        store: Any implementation of ``BlogStoreProtocol``
    """

    def __init__(self, store: BlogStoreProtocol) -> None:
        self.store = store

    async def create_blog(self, author_id: UUID, blog_data: BlogCreate) -> ServiceResult:
        """
        Create a blog owned by ``author_id``.

        The slug is derived from the title and the reading time from the
        body. Posts start as drafts unless the payload says otherwise.
        """
        blog_id = uuid4()
        blog = BlogDB(
            id=blog_id,
            author_id=author_id,
            title=blog_data.title,
            slug=slugify(blog_data.title) or str(blog_id),
            description=blog_data.description,
            body=blog_data.body,
            tags=blog_data.tags,
            state=blog_data.state,
            reading_time=calculate_reading_time(blog_data.body),
            timestamp=utc_now(),
        )

        try:
            blog = await self.store.insert(blog)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while creating a blog post",
                author_id=str(author_id),
                error=str(e),
            )
            return failure(e)

        logger.info("Blog post created", author_id=str(author_id), blog_id=str(blog.id))
        return ServiceResult(
            status=HTTP_201_CREATED,
            message="Blog created successfully",
            blog=blog_to_response(blog),
        )

    async def get_blogs(self, params: RawParams) -> ServiceResult:
        """List published blogs matching the search, author or tag filters."""
        query = build_list_query(params, ListScope.PUBLIC_PUBLISHED)
        try:
            page = await run_list_query(self.store, query)
            authors = await self.store.get_authors(blog.author_id for blog in page.items)
        except DatabaseError as e:
            logger.exception("Error occurred while fetching blog posts", error=str(e))
            return failure(e)

        logger.info("Blog posts fetched", page=page.page, total=page.total)
        return ServiceResult(
            status=HTTP_200_OK,
            message="success",
            data=page_to_response(page, authors),
        )

    async def get_blog(self, id_or_slug: str) -> ServiceResult:
        """
        Fetch a published blog by ID or slug and count the read.

        The read count is incremented by the store in the same operation that
        finds the post, so concurrent reads are never lost.
        """
        criteria = SearchCriteria.all_of(id_or_slug_clause(id_or_slug), StateIn(PUBLISHED))
        try:
            blog = await self.store.increment_read_count(criteria)
            author = await self.store.get_author(blog.author_id) if blog else None
        except DatabaseError as e:
            logger.exception(
                "Error occurred while fetching blog post",
                id_or_slug=id_or_slug,
                error=str(e),
            )
            return failure(e)

        if not blog:
            logger.info("Blog post not found", id_or_slug=id_or_slug)
            return not_found(BlogNotFoundError())

        logger.info("Blog post returned", id_or_slug=id_or_slug)
        return ServiceResult(
            status=HTTP_200_OK,
            message="Blog fetched successfully",
            blog=blog_to_response(blog, author),
            author=author_to_response(author),
        )

    async def get_my_blog(self, user_id: UUID, id_or_slug: str) -> ServiceResult:
        """Fetch one of the caller's blogs in any state, without counting a read."""
        criteria = SearchCriteria.all_of(id_or_slug_clause(id_or_slug), AuthorMatch(user_id))
        try:
            blog = await self.store.find_one(criteria)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while fetching own blog post",
                user_id=str(user_id),
                id_or_slug=id_or_slug,
                error=str(e),
            )
            return failure(e)

        if not blog:
            logger.info("Own blog post not found", user_id=str(user_id), id_or_slug=id_or_slug)
            return not_found(BlogNotFoundError("Blog Not Found or doesn't belong to you"))

        return ServiceResult(
            status=HTTP_200_OK,
            message="Blog fetched successfully",
            blog=blog_to_response(blog),
        )

    async def update_blog(
        self,
        author_id: UUID,
        blog_id: UUID,
        update_data: BlogUpdate,
    ) -> ServiceResult:
        """
        Update one of the caller's blogs.

        Blank strings leave the current value in place. A new title
        regenerates the slug; a new body recomputes the reading time.
        """
        criteria = SearchCriteria.all_of(IdMatch(blog_id), AuthorMatch(author_id))
        try:
            blog = await self.store.find_one(criteria)
            if not blog:
                return self._not_owned(blog_id)

            if update_data.title and update_data.title.strip():
                blog.title = update_data.title.strip()
                blog.slug = slugify(blog.title) or blog.slug
            if update_data.description:
                blog.description = update_data.description
            if update_data.body and update_data.body.strip():
                blog.body = update_data.body
                blog.reading_time = calculate_reading_time(update_data.body)
            if update_data.tags is not None:
                blog.tags = update_data.tags
            if update_data.state:
                blog.state = update_data.state
            blog.updated_at = utc_now()

            blog = await self.store.save(blog)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while updating blog",
                author_id=str(author_id),
                blog_id=str(blog_id),
                error=str(e),
            )
            return failure(e, "Error updating the blog")

        logger.info("Blog updated", author_id=str(author_id), blog_id=str(blog_id))
        return ServiceResult(
            status=HTTP_200_OK,
            message="Blog updated successfully",
            blog=blog_to_response(blog),
        )

    async def delete_blog(self, author_id: UUID, blog_id: UUID) -> ServiceResult:
        """Delete one of the caller's blogs and return it."""
        criteria = SearchCriteria.all_of(IdMatch(blog_id), AuthorMatch(author_id))
        try:
            blog = await self.store.find_one_and_delete(criteria)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while deleting blog",
                author_id=str(author_id),
                blog_id=str(blog_id),
                error=str(e),
            )
            return failure(e, "Error deleting the blog")

        if not blog:
            return self._not_owned(blog_id)

        logger.info("Blog deleted", author_id=str(author_id), blog_id=str(blog_id))
        return ServiceResult(
            status=HTTP_200_OK,
            message=f"Blog with ID {blog_id} deleted successfully",
            blog=blog_to_response(blog),
        )

    async def publish_blog(self, author_id: UUID, blog_id: UUID) -> ServiceResult:
        """Publish one of the caller's blogs; the author is returned alongside."""
        criteria = SearchCriteria.all_of(IdMatch(blog_id), AuthorMatch(author_id))
        try:
            blog = await self.store.find_one(criteria)
            if not blog:
                return self._not_owned(blog_id)

            blog.state = "published"
            blog.updated_at = utc_now()
            blog = await self.store.save(blog)
            author = await self.store.get_author(author_id)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while publishing blog",
                author_id=str(author_id),
                blog_id=str(blog_id),
                error=str(e),
            )
            return failure(e, "Error publishing the blog")

        logger.info("Blog published", author_id=str(author_id), blog_id=str(blog_id))
        return ServiceResult(
            status=HTTP_200_OK,
            message="Blog published successfully",
            blog=blog_to_response(blog),
            author=author_to_response(author),
        )

    async def my_blogs(self, author_id: UUID, params: RawParams) -> ServiceResult:
        """List the caller's own blogs, drafts included unless ``state`` narrows it."""
        query = build_list_query(params, ListScope.OWNER_ALL, owner_id=author_id)
        try:
            page = await run_list_query(self.store, query)
        except DatabaseError as e:
            logger.exception(
                "Error occurred while fetching own blogs",
                author_id=str(author_id),
                error=str(e),
            )
            return failure(e)

        logger.info("Own blog posts fetched", author_id=str(author_id), total=page.total)
        return ServiceResult(
            status=HTTP_200_OK,
            message="Your blogs fetched successfully",
            data=page_to_response(page),
        )

    async def blogs_by_tag(self, tag: str, params: RawParams | None = None) -> ServiceResult:
        """List published blogs carrying ``tag``."""
        query = build_list_query(params or {}, ListScope.PUBLIC_PUBLISHED, pinned_tag=tag)
        try:
            page = await run_list_query(self.store, query)
            authors = await self.store.get_authors(blog.author_id for blog in page.items)
        except DatabaseError as e:
            logger.exception("Error occurred while fetching blogs by tag", tag=tag, error=str(e))
            return failure(e)

        return ServiceResult(
            status=HTTP_200_OK,
            message=f"Blogs with tag {tag} fetched successfully",
            data=page_to_response(page, authors),
        )

    def _not_owned(self, blog_id: UUID) -> ServiceResult:
        return not_found(
            BlogNotFoundError(f"Blog with ID {blog_id} not found or doesn't belong to you"),
        )
