# blogapi/routes/blog.py

"""
Blog Routes.

Thin HTTP layer over ``BlogService``. Every handler forwards the service
envelope unchanged: the response status is the envelope's ``status`` and
the body is the envelope itself.

Summary
-------
Endpoints include:
  - Create blog
  - List published blogs (search, author and tag filters)
  - List the caller's own blogs
  - Get one of the caller's blogs
  - List published blogs by tag
  - Get a published blog by id or slug (counts a read)
  - Update, publish and delete one of the caller's blogs

Listing parameters (``page``, ``limit``, ``q``, ``author``, ``tags``,
``orderBy``, ``state``) are read from the raw query string and parsed
leniently by the service, so malformed pagination never yields a 422.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse

from blogapi.dependencies import BlogServiceDep, CurrentUserIdDep, ListParamsDep
from blogapi.schemas import BlogCreate, BlogUpdate, ServiceResult

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "authorId": "123e4567-e89b-12d3-a456-426614174111",
    "title": "Getting Started With Go",
    "slug": "getting-started-with-go",
    "description": "A first look at Go",
    "body": "Go is a small language...",
    "tags": ["go", "programming"],
    "state": "published",
    "readCount": 0,
    "readingTime": 1,
    "timestamp": "2025-01-01T00:00:00Z",
}

PAGE_EXAMPLE = {
    "status": 200,
    "message": "success",
    "data": {"items": [BLOG_EXAMPLE], "page": 1, "limit": 20, "total": 1, "totalPages": 1},
}

PAGE_RESPONSE = {"content": {"application/json": {"example": PAGE_EXAMPLE}}}

NOT_FOUND_RESPONSE = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"status": 404, "message": "Blog Not Found"}}},
}

UNAUTHORIZED_RESPONSE = {
    "description": "Missing or invalid bearer token",
    "content": {"application/json": {"example": {"detail": "Could not validate credentials"}}},
}

ERROR_RESPONSE = {
    "description": "Store failure",
    "content": {
        "application/json": {
            "example": {"status": 500, "message": "An Error Occured", "error": "..."},
        },
    },
}


def to_response(result: ServiceResult) -> ORJSONResponse:
    """Render a service envelope with its own status code."""
    return ORJSONResponse(status_code=result.status, content=result.to_content())


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=201,
    summary="Create a new blog post",
    description="Create a blog post owned by the caller. Posts start as drafts by default.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "status": 201,
                        "message": "Blog created successfully",
                        "blog": {**BLOG_EXAMPLE, "state": "draft"},
                    },
                },
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        500: ERROR_RESPONSE,
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "Getting Started With Go",
                    "description": "A first look at Go",
                    "body": "Go is a small language...",
                    "tags": ["go", "programming"],
                },
            ],
        ),
    ],
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    """
    Create a new blog post.

    Examples
    --------
    Request
        POST /blogs
        {"title": "Getting Started With Go", "body": "Go is a small language..."}
    Response
        201 Created
        {"status": 201, "message": "Blog created successfully", "blog": { ... }}
    """
    return to_response(await service.create_blog(user_id, blog))


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List published blogs",
    description=(
        "Paginated list of published blogs. `q`, `author` and `tags` are alternatives: "
        "a post matching any supplied filter is returned."
    ),
    responses={200: PAGE_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_list",
)
async def get_blogs(params: ListParamsDep, service: BlogServiceDep) -> ORJSONResponse:
    """
    List published blogs.

    Examples
    --------
    Request
        GET /blogs?page=2&limit=10&q=go&tags=go,rust&orderBy=-read_count
    Response
        200 OK
        {"status": 200, "message": "success", "data": {"items": [ ... ], "totalPages": 3, ...}}
    """
    return to_response(await service.get_blogs(params))


@router.get(
    "/mine",
    response_class=ORJSONResponse,
    summary="List my blogs",
    description="Paginated list of the caller's blogs in any state; `state` narrows it.",
    responses={
        200: PAGE_RESPONSE,
        401: UNAUTHORIZED_RESPONSE,
        500: ERROR_RESPONSE,
    },
    operation_id="blogs_list_mine",
)
async def my_blogs(
    params: ListParamsDep,
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    return to_response(await service.my_blogs(user_id, params))


@router.get(
    "/mine/{id_or_slug}",
    response_class=ORJSONResponse,
    summary="Get one of my blogs",
    description="Fetch one of the caller's blogs by id or slug, drafts included.",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_get_mine",
)
async def get_my_blog(
    id_or_slug: str,
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    return to_response(await service.get_my_blog(user_id, id_or_slug))


@router.get(
    "/tags/{tag}",
    response_class=ORJSONResponse,
    summary="List published blogs by tag",
    responses={200: PAGE_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_list_by_tag",
)
async def blogs_by_tag(tag: str, params: ListParamsDep, service: BlogServiceDep) -> ORJSONResponse:
    """List published blogs carrying ``tag``; pagination and ``q`` still apply."""
    return to_response(await service.blogs_by_tag(tag, params))


@router.get(
    "/{id_or_slug}",
    response_class=ORJSONResponse,
    summary="Get a published blog",
    description="Fetch a published blog by id or slug and count the read.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": 200,
                        "message": "Blog fetched successfully",
                        "blog": BLOG_EXAMPLE,
                    },
                },
            },
        },
        404: NOT_FOUND_RESPONSE,
        500: ERROR_RESPONSE,
    },
    operation_id="blogs_get",
)
async def get_blog(id_or_slug: str, service: BlogServiceDep) -> ORJSONResponse:
    """
    Get a published blog.

    Examples
    --------
    Request
        GET /blogs/getting-started-with-go
    Response
        200 OK
        {"status": 200, "message": "Blog fetched successfully", "blog": { ... }, "author": { ... }}
    """
    return to_response(await service.get_blog(id_or_slug))


@router.patch(
    "/{blog_id}",
    response_class=ORJSONResponse,
    summary="Update one of my blogs",
    description="Overwrite the supplied non-empty fields of one of the caller's blogs.",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: UUID,
    update: BlogUpdate,
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    return to_response(await service.update_blog(user_id, blog_id, update))


@router.patch(
    "/{blog_id}/publish",
    response_class=ORJSONResponse,
    summary="Publish one of my blogs",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_publish",
)
async def publish_blog(
    blog_id: UUID,
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    return to_response(await service.publish_blog(user_id, blog_id))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    summary="Delete one of my blogs",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE, 500: ERROR_RESPONSE},
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: UUID,
    user_id: CurrentUserIdDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    return to_response(await service.delete_blog(user_id, blog_id))
