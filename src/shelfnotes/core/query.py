# ABOUTME: Query model for combined book/note search: QuerySpec and SearchResult.
# ABOUTME: Closed enums for search fields, sort keys, and sort order validate input.

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from shelfnotes.library.types import Book, NoteCard, NoteType, Priority


class SearchField(str, Enum):
    """Fields a text query may be matched against."""

    TITLE = "title"
    AUTHOR = "author"
    DESCRIPTION = "description"
    NOTES = "notes"


class SortKey(str, Enum):
    """Recognized sort keys. RELEVANCE keeps storage order."""

    RELEVANCE = "relevance"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    TITLE = "title"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


ALL_SEARCH_FIELDS = frozenset(SearchField)


def _as_tuple(values: Iterable[str] | str) -> tuple[str, ...]:
    # A bare string is one value, not a sequence of characters.
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class QuerySpec:
    """A parsed search request.

    Callers turn raw input (comma-separated tag lists, date strings) into a
    QuerySpec; plain strings are accepted for the enum-typed fields and are
    validated here, so a bad sort key or note type fails at construction
    rather than silently matching nothing.

    Within one filter (e.g. several domain tags) matching is OR; across
    filters it is AND. Leaving both limit and offset unset returns every
    match.
    """

    query: str = ""
    search_in: frozenset[SearchField] = ALL_SEARCH_FIELDS
    domain_tags: tuple[str, ...] = ()
    theme_tags: tuple[str, ...] = ()
    note_types: tuple[NoteType, ...] = ()
    priorities: tuple[Priority, ...] = ()
    date_from: date | None = None
    date_to: date | None = None
    sort_by: SortKey = SortKey.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    limit: int | None = None
    offset: int | None = None

    def __post_init__(self) -> None:
        # frozen dataclass: coerce via object.__setattr__
        object.__setattr__(self, "query", self.query or "")
        object.__setattr__(
            self, "search_in", frozenset(SearchField(f) for f in _as_tuple(self.search_in))
        )
        object.__setattr__(self, "domain_tags", _as_tuple(self.domain_tags))
        object.__setattr__(self, "theme_tags", _as_tuple(self.theme_tags))
        object.__setattr__(
            self, "note_types", tuple(NoteType(t) for t in _as_tuple(self.note_types))
        )
        object.__setattr__(
            self, "priorities", tuple(Priority(p) for p in _as_tuple(self.priorities))
        )
        object.__setattr__(self, "sort_by", SortKey(self.sort_by))
        object.__setattr__(self, "sort_order", SortOrder(self.sort_order))

        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")

    @property
    def has_text(self) -> bool:
        return bool(self.query)


@dataclass
class SearchResult:
    """One page of search results across both collections.

    total counts every match before pagination.
    """

    books: list[Book] = field(default_factory=list)
    notes: list[NoteCard] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "books": [b.to_dict() for b in self.books],
            "notes": [n.to_dict() for n in self.notes],
            "total": self.total,
        }
