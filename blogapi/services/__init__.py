from blogapi.services.blog import BlogService
from blogapi.services.query import (
    BlogPage,
    ListQuery,
    ListScope,
    build_list_query,
    run_list_query,
)

__all__ = [
    "BlogPage",
    "BlogService",
    "ListQuery",
    "ListScope",
    "build_list_query",
    "run_list_query",
]
