"""
Filter clauses understood by every blog store.

A ``SearchCriteria`` keeps two groups of clauses apart: ``required`` terms
that are always AND-ed together (state, ownership, pinned ids) and
``alternatives`` that are OR-ed into a single extra term. Each clause can be
compiled to a SQLAlchemy expression for ``BlogRepository`` or evaluated
directly against a ``BlogDB`` instance for ``MemoryBlogStore``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import ColumnElement, and_, asc, desc, or_, true
from sqlalchemy.sql.elements import UnaryExpression

from blogapi.models.blog import BlogDB

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text is matched literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


@dataclass(frozen=True)
class IdMatch:
    blog_id: UUID

    def to_sql(self) -> ColumnElement[bool]:
        return BlogDB.id == self.blog_id

    def matches(self, blog: BlogDB) -> bool:
        return blog.id == self.blog_id


@dataclass(frozen=True)
class SlugMatch:
    slug: str

    def to_sql(self) -> ColumnElement[bool]:
        return BlogDB.slug == self.slug

    def matches(self, blog: BlogDB) -> bool:
        return blog.slug == self.slug


@dataclass(frozen=True)
class AuthorMatch:
    author_id: UUID

    def to_sql(self) -> ColumnElement[bool]:
        return BlogDB.author_id == self.author_id

    def matches(self, blog: BlogDB) -> bool:
        return blog.author_id == self.author_id


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match against the title."""

    text: str

    def to_sql(self) -> ColumnElement[bool]:
        return BlogDB.title.ilike(f"%{escape_like(self.text)}%", escape=LIKE_ESCAPE)

    def matches(self, blog: BlogDB) -> bool:
        return self.text.lower() in blog.title.lower()


@dataclass(frozen=True)
class TagMatch:
    """Matches posts carrying any of the given tags."""

    tags: tuple[str, ...]

    def to_sql(self) -> ColumnElement[bool]:
        return or_(*(BlogDB.tags.has_key(tag) for tag in self.tags))

    def matches(self, blog: BlogDB) -> bool:
        return any(tag in blog.tags for tag in self.tags)


@dataclass(frozen=True)
class StateIn:
    states: frozenset[str]

    def to_sql(self) -> ColumnElement[bool]:
        if len(self.states) == 1:
            return BlogDB.state == next(iter(self.states))
        return BlogDB.state.in_(sorted(self.states))

    def matches(self, blog: BlogDB) -> bool:
        return blog.state in self.states


type Clause = IdMatch | SlugMatch | AuthorMatch | TextMatch | TagMatch | StateIn


@dataclass(frozen=True)
class SearchCriteria:
    required: tuple[Clause, ...] = ()
    alternatives: tuple[Clause, ...] = ()

    @classmethod
    def all_of(cls, *clauses: Clause) -> "SearchCriteria":
        return cls(required=clauses)

    def where(self) -> ColumnElement[bool]:
        """Compile the criteria into a single SQL boolean expression."""
        terms = [clause.to_sql() for clause in self.required]
        if self.alternatives:
            terms.append(or_(*(clause.to_sql() for clause in self.alternatives)))
        return and_(true(), *terms)

    def matches(self, blog: BlogDB) -> bool:
        if not all(clause.matches(blog) for clause in self.required):
            return False
        if not self.alternatives:
            return True
        return any(clause.matches(blog) for clause in self.alternatives)


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False

    def to_sql(self) -> UnaryExpression:
        column = getattr(BlogDB, self.field)
        return desc(column) if self.descending else asc(column)


NEWEST_FIRST = (SortKey("timestamp", descending=True),)


def with_tiebreaker(order_by: tuple[SortKey, ...]) -> tuple[SortKey, ...]:
    """
    Append the primary key as the last sort key.

    Rows tied on every requested key otherwise come back in an arbitrary
    order, and OFFSET paging could repeat or skip them across pages.
    """
    if any(key.field == "id" for key in order_by):
        return order_by
    return (*order_by, SortKey("id", descending=True))


def sort_blogs(blogs: Iterable[BlogDB], order_by: tuple[SortKey, ...]) -> list[BlogDB]:
    """
    Sort blogs in memory the way PostgreSQL orders them.

    NULLs sort last ascending and first descending, and ties fall back to
    the ID like they do in ``BlogRepository``.
    """
    ordered = list(blogs)
    # Stable sorts applied from the least to the most significant key
    for key in reversed(with_tiebreaker(order_by)):
        ordered.sort(
            key=lambda blog, field=key.field: (
                getattr(blog, field) is None,
                getattr(blog, field),
            ),
            reverse=key.descending,
        )
    return ordered
