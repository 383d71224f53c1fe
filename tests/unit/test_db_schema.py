# ABOUTME: Unit tests for database schema creation and connection management.
# ABOUTME: Validates table structure, taxonomy seeding, WAL mode, and default paths.

import sqlite3
from pathlib import Path

import pytest

from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library
from shelfnotes.library.taxonomy import DOMAIN_TAGS, THEME_TAGS, iter_taxonomy


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_library.db"


def _columns(conn: sqlite3.Connection, table: str) -> set[str]:
    return {row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()}


class TestOpenLibrary:
    """Tests for open_library() connection factory."""

    def test_creates_database_file(self, db_path: Path) -> None:
        """Calling open_library creates a .db file at the given path."""
        conn = open_library(db_path)
        conn.close()
        assert db_path.exists()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Creates parent directories if they don't exist."""
        nested = tmp_path / "deep" / "nested" / "library.db"
        conn = open_library(nested)
        conn.close()
        assert nested.exists()

    def test_creates_books_table(self, db_path: Path) -> None:
        """The books table exists with expected columns."""
        conn = open_library(db_path)
        columns = _columns(conn, "books")
        conn.close()

        assert columns == {
            "id",
            "title",
            "author",
            "description",
            "domain_tags",
            "theme_tags",
            "created_at",
            "updated_at",
        }

    def test_creates_notes_table(self, db_path: Path) -> None:
        """The notes table exists with expected columns."""
        conn = open_library(db_path)
        columns = _columns(conn, "notes")
        conn.close()

        assert columns == {
            "id",
            "book_id",
            "title",
            "content",
            "type",
            "tags",
            "page_number",
            "chapter",
            "priority",
            "created_at",
            "updated_at",
        }

    def test_creates_tags_table(self, db_path: Path) -> None:
        """The tags table exists with expected columns."""
        conn = open_library(db_path)
        columns = _columns(conn, "tags")
        conn.close()

        assert columns == {"id", "name", "type", "category", "description", "created_at"}

    def test_wal_mode_enabled(self, db_path: Path) -> None:
        """The connection uses WAL journal mode."""
        conn = open_library(db_path)
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"

    def test_row_factory_is_row(self, db_path: Path) -> None:
        """Rows support access by column name."""
        conn = open_library(db_path)
        assert conn.row_factory is sqlite3.Row
        conn.close()

    def test_schema_version_recorded(self, db_path: Path) -> None:
        """A fresh database records schema version 1."""
        conn = open_library(db_path)
        version = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()[0]
        conn.close()
        assert version == 1

    def test_tag_type_is_constrained(self, db_path: Path) -> None:
        """Only domain and theme tag types are accepted."""
        conn = open_library(db_path)
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO tags (name, type) VALUES ('x', 'genre')")
        conn.close()

    def test_default_path(self) -> None:
        """The default database lives under the user's home directory."""
        assert DEFAULT_DB_PATH == Path.home() / ".shelfnotes" / "library.db"


class TestTaxonomySeeding:
    """Tests for seeding the tag taxonomy on first creation."""

    def test_seeds_every_taxonomy_entry(self, db_path: Path) -> None:
        """Every category and leaf is present after creation."""
        conn = open_library(db_path)
        count = conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0]
        conn.close()
        assert count == len(list(iter_taxonomy()))

    def test_categories_have_null_category(self, db_path: Path) -> None:
        """Top-level categories are stored without a parent."""
        conn = open_library(db_path)
        rows = conn.execute(
            "SELECT name FROM tags WHERE type = 'domain' AND category IS NULL"
        ).fetchall()
        conn.close()
        assert {row["name"] for row in rows} == set(DOMAIN_TAGS)

    def test_leaves_reference_their_category(self, db_path: Path) -> None:
        """Leaf tags carry the name of their category."""
        conn = open_library(db_path)
        rows = conn.execute(
            "SELECT name FROM tags WHERE type = 'theme' AND category = '决策'"
        ).fetchall()
        conn.close()
        assert {row["name"] for row in rows} == set(THEME_TAGS["决策"])

    def test_reopen_does_not_duplicate(self, db_path: Path) -> None:
        """Opening an existing database leaves the taxonomy untouched."""
        open_library(db_path).close()
        conn = open_library(db_path)
        count = conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0]
        conn.close()
        assert count == len(list(iter_taxonomy()))
