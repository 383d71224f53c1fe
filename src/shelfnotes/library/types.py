# ABOUTME: Core data structures for books, note cards, and taxonomy tags.
# ABOUTME: Also holds the default-resolution helpers for optional note fields.

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class NoteType(str, Enum):
    """What kind of thought a note card captures."""

    CONCEPT = "concept"
    QUOTE = "quote"
    REFLECTION = "reflection"
    APPLICATION = "application"
    SUMMARY = "summary"


class Priority(str, Enum):
    """How important a note card is to its author."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TagType(str, Enum):
    """The two independent taxonomy dimensions.

    Domain answers "what field is this about", theme answers "why or how
    does it apply".
    """

    DOMAIN = "domain"
    THEME = "theme"


DEFAULT_NOTE_TYPE = NoteType.CONCEPT
DEFAULT_PRIORITY = Priority.MEDIUM


@dataclass
class Book:
    """A cataloged book with its domain and theme tags.

    Tag lists keep the order they were entered in and are never
    de-duplicated; matching code only relies on membership.
    """

    id: int
    title: str
    author: str | None = None
    description: str | None = None
    domain_tags: list[str] = field(default_factory=list)
    theme_tags: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "domainTags": list(self.domain_tags),
            "themeTags": list(self.theme_tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class NoteCard:
    """A free-form note attached to a book."""

    id: int
    book_id: int
    title: str
    content: str = ""
    note_type: NoteType | None = None
    tags: list[str] = field(default_factory=list)
    page_number: int | None = None
    chapter: str | None = None
    priority: Priority | None = None
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Wire form; absent type and priority stay null."""
        return {
            "id": self.id,
            "bookId": self.book_id,
            "title": self.title,
            "content": self.content,
            "type": self.note_type.value if self.note_type else None,
            "tags": list(self.tags),
            "pageNumber": self.page_number,
            "chapter": self.chapter,
            "priority": self.priority.value if self.priority else None,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Tag:
    """A taxonomy entry. Tags without a category are top-level categories."""

    id: int
    name: str
    tag_type: TagType
    category: str | None = None
    description: str | None = None
    created_at: str = ""

    @property
    def is_category(self) -> bool:
        return self.category is None


def resolve_note_type(note: NoteCard) -> NoteType:
    """Return the note's type, treating an absent type as CONCEPT."""
    return note.note_type or DEFAULT_NOTE_TYPE


def resolve_priority(note: NoteCard) -> Priority:
    """Return the note's priority, treating an absent priority as MEDIUM."""
    return note.priority or DEFAULT_PRIORITY


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    Accepts the trailing 'Z' form written by the store as well as explicit
    offsets. Empty values return None so callers can pick a neutral default.

    Raises:
        ValueError: If a non-empty value is not a valid ISO-8601 timestamp.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
