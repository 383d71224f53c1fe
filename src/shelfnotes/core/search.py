# ABOUTME: Search orchestration: read the store, filter, sort, then paginate.
# ABOUTME: Returns one SearchResult page spanning both books and notes.

import logging

from shelfnotes.core.filters import evaluate
from shelfnotes.core.paging import paginate
from shelfnotes.core.query import QuerySpec, SearchResult
from shelfnotes.core.ranking import sort_items
from shelfnotes.library.store import EntityStore

logger = logging.getLogger(__name__)


def search(store: EntityStore, spec: QuerySpec | None = None) -> SearchResult:
    """Run a combined book/note search against the store.

    Both collections are read in full before any filtering. Books and notes
    are sorted independently with the same key, then paginated as one
    sequence. Errors raised by the store propagate unchanged.

    Args:
        store: The entity store to read from.
        spec: The parsed query. None means browse everything.

    Returns:
        SearchResult with the page of books and notes and the pre-pagination total.
    """
    spec = spec or QuerySpec()
    books = store.list_books()
    notes = store.list_notes()

    matched_books, matched_notes = evaluate(books, notes, spec)
    ordered_books = sort_items(matched_books, spec.sort_by, spec.sort_order)
    ordered_notes = sort_items(matched_notes, spec.sort_by, spec.sort_order)

    page = paginate(ordered_books, ordered_notes, spec.offset, spec.limit)
    logger.debug(
        "Search %r matched %d book(s), %d note(s); returning %d + %d",
        spec.query,
        len(matched_books),
        len(matched_notes),
        len(page.books),
        len(page.notes),
    )
    return SearchResult(books=page.books, notes=page.notes, total=page.total)
