# ABOUTME: Search, ranking, pagination, relation graph, and statistics engine.
# ABOUTME: Pure functions over Book/NoteCard snapshots read from an EntityStore.

from shelfnotes.core.graph import RelationGraph, build_graph, build_relation_graph
from shelfnotes.core.query import QuerySpec, SearchField, SearchResult, SortKey, SortOrder
from shelfnotes.core.search import search
from shelfnotes.core.stats import ReadingStats, compute_stats, summarize

__all__ = [
    "QuerySpec",
    "ReadingStats",
    "RelationGraph",
    "SearchField",
    "SearchResult",
    "SortKey",
    "SortOrder",
    "build_graph",
    "build_relation_graph",
    "compute_stats",
    "search",
    "summarize",
]
