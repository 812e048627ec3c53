# blogapi/dependencies/dependencies.py

"""Application dependencies: store selection, services and authentication."""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from blogapi.configs import settings
from blogapi.db import transaction
from blogapi.managers import decode_access_token
from blogapi.repositories import BlogRepository, BlogStoreProtocol, MemoryBlogStore
from blogapi.services import BlogService
from blogapi.services.query import RawParams

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_memory_store(request: Request) -> MemoryBlogStore:
    """Return the process-wide in-memory store, creating it on first use."""
    store = getattr(request.app.state, "memory_store", None)
    if store is None:
        store = MemoryBlogStore()
        request.app.state.memory_store = store
    return store


async def get_blog_store(request: Request) -> AsyncGenerator[BlogStoreProtocol]:
    """
    Resolve the blog store for the configured backend.

    The PostgreSQL store is bound to one session per request; the session
    commits when the request handler returns and rolls back on error.
    """
    if settings.STORE_BACKEND == "memory":
        yield get_memory_store(request)
        return

    async with transaction() as session:
        yield BlogRepository(session)


BlogStoreDep = Annotated[BlogStoreProtocol, Depends(get_blog_store)]


def get_blog_service(store: BlogStoreDep) -> BlogService:
    return BlogService(store)


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


async def get_current_user_id(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> UUID:
    """
    Resolve the caller's ID from the bearer token.

    Parameters
    ----------
    token : str | None
        Bearer token, if the request carried one.

    Returns
    -------
    UUID
        The ``user_id`` claim of a valid access token.

    Raises
    ------
    HTTPException
        401 if the token is missing or invalid.
    """
    user_id = decode_access_token(token) if token else None
    if not user_id:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]


def get_list_params(request: Request) -> RawParams:
    """
    Collect the listing parameters as sent, without validation.

    Repeated keys become lists so that ``?tags=a&tags=b`` survives; the
    listing query builder does all parsing and falls back on bad input.
    """
    params: dict[str, str | list[str]] = {}
    for key in request.query_params:
        values = request.query_params.getlist(key)
        params[key] = values[0] if len(values) == 1 else values
    return params


ListParamsDep = Annotated[RawParams, Depends(get_list_params)]
