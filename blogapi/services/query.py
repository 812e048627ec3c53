"""
Query builder and pager for blog listings.

Every list endpoint (public listing, the owner's own posts, posts by tag)
turns loosely-typed request parameters into a ``ListQuery`` and runs it with
``run_list_query``.

Parameters
----------
page, limit
    Parsed as integers. Missing, malformed or non-positive values fall back
    to the configured defaults instead of failing the request. ``limit`` is
    capped at ``PAGINATION_MAX_LIMIT``; a ``page`` whose offset would not fit
    in a bigint is out of range and falls back too.
q
    Case-insensitive substring matched against the title.
author
    Author ID (public scope only; the owner scope pins the caller).
tags
    One tag, a comma-separated list, or repeated values. Any-of membership.
orderBy
    ``"-field"`` for descending, ``"field"`` for ascending, several keys
    separated by spaces or commas.
state
    Owner scope only. Subset of ``draft``/``published``.

The supplied ``q``/``author``/``tags`` filters are OR-ed together, so a post
matching any one of them is returned. The state constraint (and the pinned
owner or tag) is AND-ed on top and cannot be dropped by the caller.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from math import ceil
from uuid import UUID

from blogapi.configs import BLOG_STATES, SORTABLE_FIELDS, settings
from blogapi.errors.blog import QueryExecutionFailed
from blogapi.errors.database import DatabaseError
from blogapi.models import BlogDB
from blogapi.monitoring import get_logger
from blogapi.repositories.criteria import (
    AuthorMatch,
    Clause,
    SearchCriteria,
    SortKey,
    StateIn,
    TagMatch,
    TextMatch,
)
from blogapi.repositories.protocols import BlogStoreProtocol

logger = get_logger(__name__)

type RawValue = str | int | Sequence[str] | None
type RawParams = Mapping[str, RawValue]

PUBLISHED = frozenset({"published"})

# PostgreSQL binds OFFSET as a bigint
MAX_OFFSET = 2**63 - 1


class ListScope(StrEnum):
    """Visibility context of a listing."""

    PUBLIC_PUBLISHED = "public"
    OWNER_ALL = "owner"


@dataclass(frozen=True)
class ListQuery:
    """Normalized listing request: filter, pagination and sort."""

    criteria: SearchCriteria
    page: int = 1
    limit: int = 20
    order_by: tuple[SortKey, ...] = (SortKey("timestamp", descending=True),)
    search: str = ""
    author: UUID | None = None
    tags: tuple[str, ...] = ()
    states: frozenset[str] = PUBLISHED

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class BlogPage:
    """One page of a listing."""

    items: list[BlogDB] = field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` items, 0 when there are none."""
    return ceil(total / limit) if total > 0 else 0


def _first(value: RawValue) -> str | int | None:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def parse_positive_int(value: RawValue, default: int, maximum: int | None = None) -> int:
    """
    Parse a positive integer, falling back to ``default``.

    Values above ``maximum`` are out of range and fall back as well.

    Examples
    --------
    >>> parse_positive_int("3", 1)
    3
    >>> parse_positive_int("-2", 1)
    1
    >>> parse_positive_int("abc", 20)
    20
    >>> parse_positive_int("500", 20, maximum=100)
    20
    """
    raw = _first(value)
    if raw is None or isinstance(raw, bool):
        return default
    try:
        number = int(str(raw).strip())
    except ValueError:
        return default
    if number <= 0 or (maximum is not None and number > maximum):
        return default
    return number


def split_values(value: RawValue) -> tuple[str, ...]:
    """
    Flatten a string, comma-separated string or list into unique values.

    Examples
    --------
    >>> split_values("go, rust")
    ('go', 'rust')
    >>> split_values(["go", "go,python", " "])
    ('go', 'python')
    """
    if value is None:
        return ()
    items = [value] if isinstance(value, (str, int)) else list(value)
    parts = (part.strip() for item in items for part in str(item).split(","))
    return tuple(dict.fromkeys(part for part in parts if part))


def _sort_keys(value: RawValue) -> tuple[SortKey, ...]:
    keys: list[SortKey] = []
    for part in " ".join(split_values(value)).split():
        name = part.lstrip("+-")
        if name in SORTABLE_FIELDS and all(key.field != name for key in keys):
            keys.append(SortKey(name, descending=part.startswith("-")))
    return tuple(keys)


def parse_order_by(value: RawValue) -> tuple[SortKey, ...]:
    """
    Parse a sort specification, keeping only sortable fields.

    Unknown fields are dropped; when nothing usable is left the configured
    default order applies.

    Examples
    --------
    >>> parse_order_by("-read_count title")
    (SortKey(field='read_count', descending=True), SortKey(field='title', descending=False))
    """
    return (
        _sort_keys(value)
        or _sort_keys(settings.DEFAULT_ORDER_BY)
        or (SortKey("timestamp", descending=True),)
    )


def parse_states(value: RawValue) -> frozenset[str]:
    """Parse the owner's state filter, defaulting to every state."""
    states = frozenset(state.lower() for state in split_values(value)) & frozenset(BLOG_STATES)
    return states or frozenset(BLOG_STATES)


def parse_tags(value: RawValue) -> tuple[str, ...]:
    """Parse the tag filter; tags are stored lowercase."""
    return tuple(dict.fromkeys(tag.lower() for tag in split_values(value)))


def parse_author(value: RawValue) -> UUID | None:
    raw = _first(value)
    if raw is None or not str(raw).strip():
        return None
    try:
        return UUID(str(raw).strip())
    except ValueError:
        logger.debug("Ignoring malformed author filter", author=str(raw))
        return None


def build_list_query(
    params: RawParams,
    scope: ListScope,
    *,
    owner_id: UUID | None = None,
    pinned_tag: str | None = None,
) -> ListQuery:
    """
    Build a validated listing query from untrusted request parameters.

    Args:
        params: Raw request parameters
        scope: Public (published only) or owner (any state, one author)
        owner_id: Caller's ID, required for the owner scope
        pinned_tag: Tag every result must carry, ignoring ``tags`` in params

    Returns:
        ListQuery: Normalized query

    Raises:
        ValueError: If the owner scope is requested without an owner ID
    """
    if scope is ListScope.OWNER_ALL and owner_id is None:
        mssg = "Owner scope requires the caller's ID"
        raise ValueError(mssg)

    limit = min(
        parse_positive_int(params.get("limit"), settings.DEFAULT_PAGE_LIMIT),
        settings.PAGINATION_MAX_LIMIT,
    )
    # Keeps skip within MAX_OFFSET
    page = parse_positive_int(
        params.get("page"),
        settings.DEFAULT_PAGE,
        maximum=MAX_OFFSET // limit + 1,
    )

    search = str(_first(params.get("q")) or "").strip()
    pinned = pinned_tag.strip().lower() if pinned_tag else ""
    tags = () if pinned else parse_tags(params.get("tags"))
    order_by = parse_order_by(params.get("orderBy"))

    if scope is ListScope.OWNER_ALL:
        author = owner_id
        states = parse_states(params.get("state"))
    else:
        author = parse_author(params.get("author"))
        states = PUBLISHED

    required: list[Clause] = [StateIn(states)]
    alternatives: list[Clause] = []

    if scope is ListScope.OWNER_ALL:
        required.append(AuthorMatch(author))
    elif author:
        alternatives.append(AuthorMatch(author))
    if pinned:
        required.append(TagMatch((pinned,)))
    if search:
        alternatives.append(TextMatch(search))
    if tags:
        alternatives.append(TagMatch(tags))

    return ListQuery(
        criteria=SearchCriteria(required=tuple(required), alternatives=tuple(alternatives)),
        page=page,
        limit=limit,
        order_by=order_by,
        search=search,
        author=author,
        tags=(pinned,) if pinned else tags,
        states=states,
    )


async def run_list_query(store: BlogStoreProtocol, query: ListQuery) -> BlogPage:
    """
    Count and fetch one page of blogs for a listing query.

    Both reads use the same criteria object. They are not transactionally
    consistent, so under concurrent writes ``total`` may drift from the page.

    Raises:
        QueryExecutionFailed: If the store fails
    """
    try:
        total = await store.count(query.criteria)
        items = await store.find(
            query.criteria,
            skip=query.skip,
            limit=query.limit,
            order_by=query.order_by,
        )
    except DatabaseError as e:
        raise QueryExecutionFailed(e) from e

    return BlogPage(items=items, page=query.page, limit=query.limit, total=total)
