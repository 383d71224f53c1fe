# ABOUTME: EPUB metadata extraction using ebooklib, for cataloging books from files.
# ABOUTME: Defensive wrapper that turns any parse failure into EpubReadError.

import logging
from dataclasses import dataclass
from pathlib import Path

from ebooklib import epub

logger = logging.getLogger(__name__)


class EpubReadError(Exception):
    """Raised when an EPUB file cannot be read or parsed."""


@dataclass
class EpubDetails:
    """The catalog-relevant fields found in an EPUB's Dublin Core metadata."""

    title: str
    author: str | None = None
    description: str | None = None


def _get_metadata_value(book: epub.EpubBook, name: str) -> str | None:
    """Extract a single Dublin Core value, or None if missing."""
    values = book.get_metadata("DC", name)
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _get_author(book: epub.EpubBook) -> str | None:
    """Join all creator names into one display string."""
    creators = book.get_metadata("DC", "creator")
    names = [str(entry[0]).strip() for entry in creators or [] if entry[0]]
    return ", ".join(names) if names else None


def read_epub_details(path: Path) -> EpubDetails:
    """Extract title, author, and description from an EPUB file.

    The title falls back to the file stem when the EPUB has none.

    Raises:
        EpubReadError: If the file is missing or cannot be parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        book = epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    title = _get_metadata_value(book, "title")
    if not title:
        logger.info("No title in %s, using file name", path.name)
        title = path.stem

    return EpubDetails(
        title=title,
        author=_get_author(book),
        description=_get_metadata_value(book, "description"),
    )
