# ABOUTME: EntityStore protocol defining the read contract the engine consumes.
# ABOUTME: Any persistence layer (SQLite catalog, in-memory fakes) implements this.

from typing import Protocol, runtime_checkable

from shelfnotes.library.types import Book, NoteCard, Tag, TagType


@runtime_checkable
class EntityStore(Protocol):
    """Protocol for the book/note/tag collections the engine reads from.

    Every method returns a complete, already-deserialized snapshot. Books and
    notes come back in storage order (most recently updated first), which is
    the order the relevance sort preserves.
    """

    def list_books(self) -> list[Book]: ...

    def list_notes(self, book_id: int | None = None) -> list[NoteCard]: ...

    def list_tags(self, tag_type: TagType | None = None) -> list[Tag]: ...
