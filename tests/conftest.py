# ABOUTME: Shared pytest fixtures for Shelfnotes tests.
# ABOUTME: Provides a temporary catalog, sample EPUB files, and a seeded sample library.

from pathlib import Path

import pytest
from ebooklib import epub

from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import open_library
from shelfnotes.library.types import NoteType, Priority


@pytest.fixture
def catalog(tmp_path: Path):
    """A ShelfCatalog backed by a fresh temporary database."""
    conn = open_library(tmp_path / "library.db")
    yield ShelfCatalog(conn)
    conn.close()


@pytest.fixture
def seeded_catalog(catalog: ShelfCatalog) -> ShelfCatalog:
    """A catalog holding three tagged books and a few notes.

    Books: Thinking Fast and Slow (1), Superforecasting (2), The Wealth of
    Nations (3). Notes 1-2 belong to book 1, note 3 to book 3.
    """
    fast = catalog.add_book(
        "Thinking Fast and Slow",
        author="Daniel Kahneman",
        description="Two systems of thought.",
        domain_tags=["心理学"],
        theme_tags=["决策"],
    )
    catalog.add_book(
        "Superforecasting",
        author="Philip Tetlock",
        domain_tags=["心理学"],
        theme_tags=["决策"],
    )
    wealth = catalog.add_book(
        "The Wealth of Nations",
        author="Adam Smith",
        domain_tags=["经济学"],
        theme_tags=["世界认知"],
    )
    catalog.add_note(
        fast,
        "Anchoring",
        content="Arbitrary numbers bias estimates.",
        note_type=NoteType.CONCEPT,
        priority=Priority.HIGH,
    )
    catalog.add_note(fast, "Loss aversion", content="Losses loom larger than gains.")
    catalog.add_note(
        wealth,
        "Invisible hand",
        content="Self-interest promotes the public good.",
        note_type=NoteType.QUOTE,
        priority=Priority.LOW,
    )
    return catalog


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-374-27563-1")
    book.set_title("Thinking Fast and Slow")
    book.set_language("en")
    book.add_author("Daniel Kahneman")

    book.add_metadata("DC", "description", "Two systems that drive the way we think.")

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "thinking_fast.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def untitled_epub(tmp_path: Path) -> Path:
    """Create an EPUB with no title or creator metadata."""
    book = epub.EpubBook()
    book.set_identifier("untitled-id")
    book.set_language("en")

    chapter = epub.EpubHtml(title="Content", file_name="content.xhtml", lang="en")
    chapter.content = b"<html><body><p>Minimal content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("content.xhtml", "Content", "content")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "mystery_notes.epub"
    epub.write_epub(str(filepath), book)
    return filepath
