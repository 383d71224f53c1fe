# ABOUTME: Public API for the Shelfnotes library database layer.
# ABOUTME: Exports connection management and the SQLite-backed catalog.

from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library

__all__ = [
    "DEFAULT_DB_PATH",
    "ShelfCatalog",
    "open_library",
]
