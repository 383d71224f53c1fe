# ABOUTME: Integration tests for database lifecycle: create, insert, reopen, query.
# ABOUTME: Validates that books, notes, and the taxonomy persist across connections.

from pathlib import Path

from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import open_library
from shelfnotes.library.types import NoteType


class TestDatabaseLifecycle:
    """Integration tests for full DB lifecycle."""

    def test_create_insert_reopen_query(self, tmp_path: Path) -> None:
        """Create DB, add a book and note, close, reopen, verify both persist."""
        db_path = tmp_path / "lifecycle.db"

        conn = open_library(db_path)
        catalog = ShelfCatalog(conn)
        book_id = catalog.add_book(
            "The Name of the Rose", author="Umberto Eco", domain_tags=["文学"]
        )
        catalog.add_note(book_id, "Labyrinth", note_type=NoteType.REFLECTION)
        conn.close()

        conn2 = open_library(db_path)
        catalog2 = ShelfCatalog(conn2)
        book = catalog2.get_book(book_id)
        notes = catalog2.list_notes(book_id)
        conn2.close()

        assert book is not None
        assert book.title == "The Name of the Rose"
        assert book.domain_tags == ["文学"]
        assert [note.note_type for note in notes] == [NoteType.REFLECTION]

    def test_schema_version_persists(self, tmp_path: Path) -> None:
        """Schema version is written once and persists across reopens."""
        db_path = tmp_path / "version.db"

        conn = open_library(db_path)
        conn.close()

        conn2 = open_library(db_path)
        count = conn2.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        conn2.close()

        # Should still be 1, not re-inserted on reopen
        assert count == 1

    def test_tags_stored_as_json(self, tmp_path: Path) -> None:
        """Tag lists are stored as JSON text with readable CJK."""
        db_path = tmp_path / "json.db"

        conn = open_library(db_path)
        ShelfCatalog(conn).add_book("Walden", theme_tags=["自我管理", "习惯养成"])
        row = conn.execute("SELECT theme_tags FROM books").fetchone()
        conn.close()

        assert row["theme_tags"] == '["自我管理", "习惯养成"]'
