# ABOUTME: SQLite database connection management for the Shelfnotes library.
# ABOUTME: Opens or creates the database, applies schema, and seeds the tag taxonomy.

import logging
import sqlite3
from pathlib import Path

from shelfnotes.db.schema import MIGRATIONS, SCHEMA_V1
from shelfnotes.library.taxonomy import iter_taxonomy

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".shelfnotes" / "library.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL to create all tables and indexes."""
    conn.executescript(SCHEMA_V1)


def _seed_taxonomy(conn: sqlite3.Connection) -> None:
    """Insert the predefined domain and theme taxonomy into the tags table."""
    rows = [(name, tag_type.value, category) for tag_type, name, category in iter_taxonomy()]
    conn.executemany(
        "INSERT OR IGNORE INTO tags (name, type, category) VALUES (?, ?, ?)",
        rows,
    )
    conn.commit()
    logger.debug("Seeded %d taxonomy tags", len(rows))


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    Reads the current schema version and applies any migrations with a higher
    version number. No-op if the database is already at the latest version.
    """
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            logger.info("Applying schema migration %d", version)
            conn.executescript(sql)


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the Shelfnotes library database.

    Creates the database file and parent directories if they don't exist.
    On first creation the schema is applied and the tag taxonomy is seeded.
    Sets WAL journal mode and sqlite3.Row factory for dict-like column access.

    Args:
        path: Path to the database file. Defaults to ~/.shelfnotes/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        logger.info("Creating library database at %s", db_path)
        _apply_schema(conn)
        _seed_taxonomy(conn)

    _apply_migrations(conn)

    return conn
