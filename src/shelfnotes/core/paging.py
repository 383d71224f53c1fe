# ABOUTME: Cross-collection paginator treating [books..., notes...] as one sequence.
# ABOUTME: Slices books first, then fills any remaining page capacity from notes.

from dataclasses import dataclass, field

from shelfnotes.library.types import Book, NoteCard

DEFAULT_PAGE_LIMIT = 50


@dataclass
class Page:
    books: list[Book] = field(default_factory=list)
    notes: list[NoteCard] = field(default_factory=list)
    total: int = 0


def paginate(
    books: list[Book],
    notes: list[NoteCard],
    offset: int | None = None,
    limit: int | None = None,
) -> Page:
    """Take one page from the logical concatenation of books and notes.

    total is always len(books) + len(notes), counted before slicing. When
    neither offset nor limit is given the full collections are returned.
    A missing limit defaults to DEFAULT_PAGE_LIMIT, a missing offset to 0.
    """
    total = len(books) + len(notes)
    if offset is None and limit is None:
        return Page(books=list(books), notes=list(notes), total=total)

    start = offset or 0
    size = DEFAULT_PAGE_LIMIT if limit is None else limit

    book_slice = books[start:start + size]
    remaining = size - len(book_slice)
    note_start = max(0, start - len(books))
    note_slice = notes[note_start:note_start + remaining] if remaining > 0 else []

    return Page(books=book_slice, notes=note_slice, total=total)
