# ABOUTME: Converts between Book/NoteCard/Tag dataclasses and SQLite rows.
# ABOUTME: Handles JSON serialization for tag list fields and enum decoding.

import json
from typing import Any

from shelfnotes.library.types import Book, NoteCard, NoteType, Priority, Tag, TagType

# Columns that hold JSON-encoded string lists
_LIST_COLUMNS = frozenset({"domain_tags", "theme_tags", "tags"})


def _load_list(raw: str | None) -> list[str]:
    return json.loads(raw) if raw else []


def encode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Prepare keyword fields for an INSERT or UPDATE.

    Tag lists are JSON-serialized and enum values are stored as their
    string value. Other values pass through unchanged.
    """
    encoded: dict[str, Any] = {}
    for key, value in fields.items():
        if key in _LIST_COLUMNS:
            encoded[key] = json.dumps(list(value or []), ensure_ascii=False)
        elif isinstance(value, (NoteType, Priority, TagType)):
            encoded[key] = value.value
        else:
            encoded[key] = value
    return encoded


def row_to_book(row: Any) -> Book:
    """Convert a books row (dict-like) to a Book."""
    return Book(
        id=row["id"],
        title=row["title"],
        author=row["author"],
        description=row["description"],
        domain_tags=_load_list(row["domain_tags"]),
        theme_tags=_load_list(row["theme_tags"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_note(row: Any) -> NoteCard:
    """Convert a notes row to a NoteCard.

    A NULL type or priority stays None; the engine resolves defaults.
    """
    note_type = row["type"]
    priority = row["priority"]
    return NoteCard(
        id=row["id"],
        book_id=row["book_id"],
        title=row["title"],
        content=row["content"] or "",
        note_type=NoteType(note_type) if note_type else None,
        tags=_load_list(row["tags"]),
        page_number=row["page_number"],
        chapter=row["chapter"],
        priority=Priority(priority) if priority else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_tag(row: Any) -> Tag:
    """Convert a tags row to a Tag."""
    return Tag(
        id=row["id"],
        name=row["name"],
        tag_type=TagType(row["type"]),
        category=row["category"],
        description=row["description"],
        created_at=row["created_at"],
    )
