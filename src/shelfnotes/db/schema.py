# ABOUTME: SQL DDL statements for the Shelfnotes library database schema.
# ABOUTME: Defines the books, notes, and tags tables plus schema versioning.

SCHEMA_V1 = """
-- Cataloged books; tag lists are JSON arrays of tag names
CREATE TABLE books (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    title         TEXT NOT NULL,
    author        TEXT,
    description   TEXT,
    domain_tags   TEXT NOT NULL DEFAULT '[]',
    theme_tags    TEXT NOT NULL DEFAULT '[]',
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

CREATE INDEX idx_books_updated_at ON books(updated_at);

-- Note cards attached to a book
CREATE TABLE notes (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id       INTEGER NOT NULL REFERENCES books(id),
    title         TEXT NOT NULL,
    content       TEXT NOT NULL DEFAULT '',
    type          TEXT,
    tags          TEXT NOT NULL DEFAULT '[]',
    page_number   INTEGER,
    chapter       TEXT,
    priority      TEXT,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

CREATE INDEX idx_notes_book_id ON notes(book_id);
CREATE INDEX idx_notes_updated_at ON notes(updated_at);

-- Two-level taxonomy; rows with a NULL category are top-level categories
CREATE TABLE tags (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT NOT NULL,
    type          TEXT NOT NULL CHECK (type IN ('domain', 'theme')),
    category      TEXT,
    description   TEXT,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

CREATE UNIQUE INDEX idx_tags_type_name ON tags(type, name);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# (version, sql) pairs applied in order by open_library when newer than the DB.
MIGRATIONS: list[tuple[int, str]] = []
