# ABOUTME: Filter evaluator narrowing books and notes by text, tags, note fields, and dates.
# ABOUTME: Text matching is lower-cased substring search; notes can pull in their books.

from datetime import date, datetime, time

from shelfnotes.core.query import QuerySpec, SearchField
from shelfnotes.library.types import (
    Book,
    NoteCard,
    parse_timestamp,
    resolve_note_type,
    resolve_priority,
)

_END_OF_DAY = time(23, 59, 59, 999000)


def _contains(value: str | None, needle: str) -> bool:
    """Case-insensitive substring test. Absent values never match."""
    if not value:
        return False
    return needle in value.lower()


def book_matches_text(book: Book, needle: str, fields: frozenset[SearchField]) -> bool:
    """Whether the lower-cased needle occurs in any selected book field."""
    if SearchField.TITLE in fields and _contains(book.title, needle):
        return True
    if SearchField.AUTHOR in fields and _contains(book.author, needle):
        return True
    return SearchField.DESCRIPTION in fields and _contains(book.description, needle)


def note_matches_text(note: NoteCard, needle: str) -> bool:
    """Whether the lower-cased needle occurs in the note's title or content."""
    return _contains(note.title, needle) or _contains(note.content, needle)


def has_any_tag(tags: list[str], wanted: tuple[str, ...]) -> bool:
    """OR semantics: at least one wanted tag is present."""
    return any(tag in tags for tag in wanted)


def _created_within(created_at: str, start: datetime | None, end: datetime | None) -> bool:
    created = parse_timestamp(created_at)
    if created is None:
        # No creation time: cannot be placed inside a bounded range.
        return False
    if start is not None and created < start:
        return False
    return not (end is not None and created > end)


def date_bounds(
    date_from: date | None, date_to: date | None
) -> tuple[datetime | None, datetime | None]:
    """Expand a [from, to] day range to inclusive datetime bounds.

    from starts at 00:00:00.000, to runs through 23:59:59.999.
    """
    start = datetime.combine(date_from, time.min) if date_from else None
    end = datetime.combine(date_to, _END_OF_DAY) if date_to else None
    return start, end


def evaluate(
    books: list[Book], notes: list[NoteCard], spec: QuerySpec
) -> tuple[list[Book], list[NoteCard]]:
    """Apply every filter in the spec to the two collections.

    Filters run in a fixed order: book text, note text (plus books reached
    through matching notes), domain tags, theme tags, note types, priorities,
    then the creation date range. An empty spec returns both collections
    unchanged. Input lists are never mutated.
    """
    matched_books = list(books)
    matched_notes = list(notes)

    if spec.has_text:
        needle = spec.query.lower()
        matched_books = [
            b for b in matched_books if book_matches_text(b, needle, spec.search_in)
        ]

        if SearchField.NOTES in spec.search_in:
            matched_notes = [n for n in matched_notes if note_matches_text(n, needle)]

            # Find the book through its note: union, de-duplicated by id.
            note_book_ids = {n.book_id for n in matched_notes}
            seen = {b.id for b in matched_books}
            for book in books:
                if book.id in note_book_ids and book.id not in seen:
                    matched_books.append(book)
                    seen.add(book.id)

    if spec.domain_tags:
        matched_books = [b for b in matched_books if has_any_tag(b.domain_tags, spec.domain_tags)]
    if spec.theme_tags:
        matched_books = [b for b in matched_books if has_any_tag(b.theme_tags, spec.theme_tags)]

    if spec.note_types:
        matched_notes = [n for n in matched_notes if resolve_note_type(n) in spec.note_types]
    if spec.priorities:
        matched_notes = [n for n in matched_notes if resolve_priority(n) in spec.priorities]

    if spec.date_from or spec.date_to:
        start, end = date_bounds(spec.date_from, spec.date_to)
        matched_books = [b for b in matched_books if _created_within(b.created_at, start, end)]
        matched_notes = [n for n in matched_notes if _created_within(n.created_at, start, end)]

    return matched_books, matched_notes
