# blogapi/dependencies/__init__.py

from blogapi.dependencies.dependencies import (
    BlogServiceDep,
    BlogStoreDep,
    CurrentUserIdDep,
    ListParamsDep,
    get_blog_service,
    get_blog_store,
    get_current_user_id,
    get_list_params,
    get_memory_store,
)

__all__ = [
    "BlogServiceDep",
    "BlogStoreDep",
    "CurrentUserIdDep",
    "ListParamsDep",
    "get_blog_service",
    "get_blog_store",
    "get_current_user_id",
    "get_list_params",
    "get_memory_store",
]
