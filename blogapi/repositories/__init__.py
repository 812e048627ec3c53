from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.criteria import (
    AuthorMatch,
    Clause,
    IdMatch,
    SearchCriteria,
    SlugMatch,
    SortKey,
    StateIn,
    TagMatch,
    TextMatch,
)
from blogapi.repositories.memory import MemoryBlogStore
from blogapi.repositories.protocols import BlogStoreProtocol

__all__ = [
    "AuthorMatch",
    "BlogRepository",
    "BlogStoreProtocol",
    "Clause",
    "IdMatch",
    "MemoryBlogStore",
    "SearchCriteria",
    "SlugMatch",
    "SortKey",
    "StateIn",
    "TagMatch",
    "TextMatch",
]
