# ABOUTME: Sort engine ordering books or notes by a closed set of sort keys.
# ABOUTME: Each SortKey maps to an explicit extractor; relevance keeps storage order.

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TypeVar

from shelfnotes.core.query import SortKey, SortOrder
from shelfnotes.library.types import Book, NoteCard, parse_timestamp

Item = TypeVar("Item", Book, NoteCard)

_EPOCH = datetime(1970, 1, 1)


def _epoch_millis(value: str) -> float:
    """Milliseconds since the epoch; a missing timestamp sorts as 0."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return 0.0
    return (parsed - _EPOCH).total_seconds() * 1000


def _title_key(item: Book | NoteCard) -> str:
    return (item.title or "").lower()


def _created_key(item: Book | NoteCard) -> float:
    return _epoch_millis(item.created_at)


def _updated_key(item: Book | NoteCard) -> float:
    return _epoch_millis(item.updated_at)


_SORT_EXTRACTORS: dict[SortKey, Callable[[Book | NoteCard], str | float]] = {
    SortKey.TITLE: _title_key,
    SortKey.CREATED_AT: _created_key,
    SortKey.UPDATED_AT: _updated_key,
}


def sort_items(
    items: Sequence[Item],
    sort_by: SortKey | str = SortKey.RELEVANCE,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[Item]:
    """Return the items ordered by sort_by.

    RELEVANCE returns the items in their original order. For the other keys
    desc reverses the comparison; the relative order of items with equal
    keys is not part of the contract.

    Raises:
        ValueError: If sort_by or sort_order is not a recognized value.
    """
    key = SortKey(sort_by)
    order = SortOrder(sort_order)
    if key is SortKey.RELEVANCE:
        return list(items)
    return sorted(items, key=_SORT_EXTRACTORS[key], reverse=order is SortOrder.DESC)
