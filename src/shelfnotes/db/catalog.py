# ABOUTME: CRUD operations for books, note cards, and tags in the SQLite library.
# ABOUTME: ShelfCatalog is the concrete EntityStore the search and graph engine reads.

import logging
import sqlite3
from collections.abc import Iterable
from typing import Any

from shelfnotes.db.mapping import encode_fields, row_to_book, row_to_note, row_to_tag
from shelfnotes.library.types import Book, NoteCard, NoteType, Priority, Tag, TagType

logger = logging.getLogger(__name__)

_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"

_BOOK_FIELDS = frozenset({"title", "author", "description", "domain_tags", "theme_tags"})
_NOTE_FIELDS = frozenset(
    {"title", "content", "note_type", "tags", "page_number", "chapter", "priority"}
)


class ShelfCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the library tables.

    Satisfies the EntityStore protocol: list_books, list_notes, and list_tags
    return full snapshots in storage order.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Book operations ---

    def add_book(
        self,
        title: str,
        *,
        author: str | None = None,
        description: str | None = None,
        domain_tags: Iterable[str] = (),
        theme_tags: Iterable[str] = (),
    ) -> int:
        """Add a book to the catalog.

        Returns:
            The row ID of the inserted book.

        Raises:
            ValueError: If the title is empty.
        """
        if not title or not title.strip():
            raise ValueError("Book title is required")

        row = encode_fields({
            "title": title,
            "author": author,
            "description": description,
            "domain_tags": domain_tags,
            "theme_tags": theme_tags,
        })
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)
        cursor = self._conn.execute(
            f"INSERT INTO books ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )
        self._conn.commit()
        logger.debug("Added book %d: %s", cursor.lastrowid, title)
        return cursor.lastrowid  # type: ignore[return-value]

    def get_book(self, book_id: int) -> Book | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def list_books(self) -> list[Book]:
        """Return all books, most recently updated first."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY updated_at DESC, id DESC")
        return [row_to_book(row) for row in cursor.fetchall()]

    def update_book(self, book_id: int, **fields: Any) -> None:
        """Update one or more fields on a cataloged book.

        Accepts title, author, description, domain_tags, and theme_tags.
        Refreshes updated_at.

        Raises:
            ValueError: If a field is unknown or the book_id does not exist.
        """
        if not fields:
            return
        unknown = set(fields) - _BOOK_FIELDS
        if unknown:
            raise ValueError(f"Unknown book field(s): {', '.join(sorted(unknown))}")
        if "title" in fields and not (fields["title"] or "").strip():
            raise ValueError("Book title is required")

        self._update_row("books", book_id, encode_fields(fields), "Book")

    def delete_book(self, book_id: int) -> None:
        """Delete a book and all of its notes in a single transaction.

        Raises:
            ValueError: If the book_id does not exist.
        """
        with self._conn:
            cursor = self._conn.execute("DELETE FROM notes WHERE book_id = ?", (book_id,))
            removed_notes = cursor.rowcount
            cursor = self._conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            if cursor.rowcount == 0:
                # Raising inside the block rolls back the note deletion too.
                raise ValueError(f"Book with id {book_id} not found")
        logger.debug("Deleted book %d and %d note(s)", book_id, removed_notes)

    # --- Note operations ---

    def add_note(
        self,
        book_id: int,
        title: str,
        *,
        content: str = "",
        note_type: NoteType | None = None,
        tags: Iterable[str] = (),
        page_number: int | None = None,
        chapter: str | None = None,
        priority: Priority | None = None,
    ) -> int:
        """Attach a note card to a book.

        Returns:
            The row ID of the inserted note.

        Raises:
            ValueError: If the title is empty or the book_id does not exist.
        """
        if not title or not title.strip():
            raise ValueError("Note title is required")
        if self.get_book(book_id) is None:
            raise ValueError(f"Book with id {book_id} not found")

        row = encode_fields({
            "book_id": book_id,
            "title": title,
            "content": content or "",
            "type": note_type,
            "tags": tags,
            "page_number": page_number,
            "chapter": chapter,
            "priority": priority,
        })
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)
        cursor = self._conn.execute(
            f"INSERT INTO notes ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )
        self._conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def get_note(self, note_id: int) -> NoteCard | None:
        """Retrieve a note card by its row ID."""
        cursor = self._conn.execute("SELECT * FROM notes WHERE id = ?", (note_id,))
        row = cursor.fetchone()
        return row_to_note(row) if row else None

    def list_notes(self, book_id: int | None = None) -> list[NoteCard]:
        """Return note cards, most recently updated first.

        Args:
            book_id: Restrict to one book's notes. All notes when omitted.
        """
        if book_id is None:
            cursor = self._conn.execute(
                "SELECT * FROM notes ORDER BY updated_at DESC, id DESC"
            )
        else:
            cursor = self._conn.execute(
                "SELECT * FROM notes WHERE book_id = ? ORDER BY updated_at DESC, id DESC",
                (book_id,),
            )
        return [row_to_note(row) for row in cursor.fetchall()]

    def update_note(self, note_id: int, **fields: Any) -> None:
        """Update one or more fields on a note card.

        The owning book cannot be changed. Refreshes updated_at.

        Raises:
            ValueError: If a field is unknown, the title is blank, or the
                note_id does not exist.
        """
        if not fields:
            return
        unknown = set(fields) - _NOTE_FIELDS
        if unknown:
            raise ValueError(f"Unknown note field(s): {', '.join(sorted(unknown))}")
        if "title" in fields and not (fields["title"] or "").strip():
            raise ValueError("Note title is required")

        if "note_type" in fields:
            fields["type"] = fields.pop("note_type")
        self._update_row("notes", note_id, encode_fields(fields), "Note")

    def delete_note(self, note_id: int) -> None:
        """Delete a single note card.

        Raises:
            ValueError: If the note_id does not exist.
        """
        cursor = self._conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Note with id {note_id} not found")

    # --- Tag operations ---

    def list_tags(self, tag_type: TagType | None = None) -> list[Tag]:
        """List taxonomy tags: categories first, then leaves grouped by category."""
        if tag_type is None:
            cursor = self._conn.execute("SELECT * FROM tags")
        else:
            cursor = self._conn.execute(
                "SELECT * FROM tags WHERE type = ?", (TagType(tag_type).value,)
            )
        tags = [row_to_tag(row) for row in cursor.fetchall()]
        tags.sort(key=lambda t: (t.category is not None, t.category or "", t.name))
        return tags

    def _update_row(
        self, table: str, row_id: int, fields: dict[str, Any], label: str
    ) -> None:
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        set_clause += f", updated_at = {_NOW_SQL}"
        values = [*list(fields.values()), row_id]

        cursor = self._conn.execute(
            f"UPDATE {table} SET {set_clause} WHERE id = ?",
            values,
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"{label} with id {row_id} not found")
