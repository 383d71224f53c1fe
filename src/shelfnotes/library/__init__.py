# ABOUTME: Library package: the book/note/tag data model and the tag taxonomy.
# ABOUTME: Exports the dataclasses, enums, and the EntityStore protocol used everywhere.

from shelfnotes.library.store import EntityStore
from shelfnotes.library.taxonomy import DOMAIN_TAGS, THEME_TAGS, get_domain_color
from shelfnotes.library.types import (
    Book,
    NoteCard,
    NoteType,
    Priority,
    Tag,
    TagType,
    resolve_note_type,
    resolve_priority,
)

__all__ = [
    "DOMAIN_TAGS",
    "THEME_TAGS",
    "Book",
    "EntityStore",
    "NoteCard",
    "NoteType",
    "Priority",
    "Tag",
    "TagType",
    "get_domain_color",
    "resolve_note_type",
    "resolve_priority",
]
