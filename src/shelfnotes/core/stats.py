# ABOUTME: Aggregate reading statistics: totals, tag distributions, and daily activity.
# ABOUTME: Computed from full book/note snapshots; "now" is UTC and injectable for tests.

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from shelfnotes.library.store import EntityStore
from shelfnotes.library.types import (
    Book,
    NoteCard,
    parse_timestamp,
    resolve_note_type,
    resolve_priority,
)

ACTIVITY_DAYS = 30


@dataclass
class DailyActivity:
    date: str
    books: int = 0
    notes: int = 0


@dataclass
class ReadingStats:
    """Snapshot of library statistics."""

    total_books: int = 0
    total_notes: int = 0
    books_this_month: int = 0
    notes_this_month: int = 0
    domain_distribution: dict[str, int] = field(default_factory=dict)
    theme_distribution: dict[str, int] = field(default_factory=dict)
    note_type_distribution: dict[str, int] = field(default_factory=dict)
    priority_distribution: dict[str, int] = field(default_factory=dict)
    recent_activity: list[DailyActivity] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBooks": self.total_books,
            "totalNotes": self.total_notes,
            "booksThisMonth": self.books_this_month,
            "notesThisMonth": self.notes_this_month,
            "domainDistribution": dict(self.domain_distribution),
            "themeDistribution": dict(self.theme_distribution),
            "noteTypeDistribution": dict(self.note_type_distribution),
            "priorityDistribution": dict(self.priority_distribution),
            "recentActivity": [
                {"date": day.date, "books": day.books, "notes": day.notes}
                for day in self.recent_activity
            ],
        }


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _created_since(created_at: str, start: datetime) -> bool:
    created = parse_timestamp(created_at)
    return created is not None and created >= start


def _count_tags(tag_lists: list[list[str]]) -> dict[str, int]:
    # One increment per occurrence: a book with N tags contributes N.
    counts: Counter[str] = Counter()
    for tags in tag_lists:
        counts.update(tags)
    return dict(counts)


def _recent_activity(
    books: list[Book], notes: list[NoteCard], today: datetime
) -> list[DailyActivity]:
    activity = []
    for days_back in range(ACTIVITY_DAYS - 1, -1, -1):
        day = (today - timedelta(days=days_back)).strftime("%Y-%m-%d")
        activity.append(DailyActivity(
            date=day,
            books=sum(1 for b in books if (b.created_at or "").startswith(day)),
            notes=sum(1 for n in notes if (n.created_at or "").startswith(day)),
        ))
    return activity


def summarize(
    books: list[Book], notes: list[NoteCard], now: datetime | None = None
) -> ReadingStats:
    """Compute statistics over the given books and notes.

    Args:
        books: Book snapshot, typically the full collection.
        notes: Note snapshot, typically the full collection.
        now: Current time; naive values are taken as UTC. Defaults to the clock.
    """
    now = now or _utc_now()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    return ReadingStats(
        total_books=len(books),
        total_notes=len(notes),
        books_this_month=sum(1 for b in books if _created_since(b.created_at, start_of_month)),
        notes_this_month=sum(1 for n in notes if _created_since(n.created_at, start_of_month)),
        domain_distribution=_count_tags([b.domain_tags for b in books]),
        theme_distribution=_count_tags([b.theme_tags for b in books]),
        note_type_distribution=dict(Counter(resolve_note_type(n).value for n in notes)),
        priority_distribution=dict(Counter(resolve_priority(n).value for n in notes)),
        recent_activity=_recent_activity(books, notes, now),
    )


def compute_stats(store: EntityStore, now: datetime | None = None) -> ReadingStats:
    """Read every book and note from the store and summarize them."""
    return summarize(store.list_books(), store.list_notes(), now=now)
