# ABOUTME: Relation graph builder: pairwise tag overlap between books plus domain clusters.
# ABOUTME: Strength is Jaccard similarity over each pair's combined domain and theme tags.

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shelfnotes.library.store import EntityStore
from shelfnotes.library.taxonomy import OTHER_DOMAIN, get_domain_color
from shelfnotes.library.types import Book, NoteCard

logger = logging.getLogger(__name__)

# Links at or below this strength are dropped to keep the graph sparse.
LINK_THRESHOLD = 0.2

CLUSTER_RADIUS = 200.0

MIN_NODE_SIZE = 3
MAX_NODE_SIZE = 10


class RelationType(str, Enum):
    DOMAIN = "domain"
    THEME = "theme"
    MIXED = "mixed"


@dataclass
class BookRelation:
    """Tag overlap between two books."""

    strength: float
    shared_tags: list[str]
    relation_type: RelationType


@dataclass
class GraphNode:
    id: int
    title: str
    author: str | None
    domain_tags: list[str]
    theme_tags: list[str]
    size: int
    color: str


@dataclass
class RelationEdge:
    source: int
    target: int
    strength: float
    shared_tags: list[str]
    type: RelationType


@dataclass
class Point:
    x: float
    y: float


@dataclass
class Cluster:
    """Books sharing one domain tag, with a synthetic layout centre."""

    name: str
    books: list[int]
    center: Point
    color: str


@dataclass
class RelationGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    links: list[RelationEdge] = field(default_factory=list)
    clusters: list[Cluster] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain nested-dict form, keyed the way the web client expects."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "title": n.title,
                    "author": n.author,
                    "domainTags": list(n.domain_tags),
                    "themeTags": list(n.theme_tags),
                    "size": n.size,
                    "color": n.color,
                }
                for n in self.nodes
            ],
            "links": [
                {
                    "source": link.source,
                    "target": link.target,
                    "strength": link.strength,
                    "sharedTags": list(link.shared_tags),
                    "type": link.type.value,
                }
                for link in self.links
            ],
            "clusters": [
                {
                    "name": c.name,
                    "books": list(c.books),
                    "center": {"x": c.center.x, "y": c.center.y},
                    "color": c.color,
                }
                for c in self.clusters
            ],
        }


def _shared(left: list[str], right: list[str]) -> list[str]:
    """Tags of left that also appear in right, keeping left's order and repeats."""
    return [tag for tag in left if tag in right]


def book_relation(book_a: Book, book_b: Book) -> BookRelation:
    """Compute the tag relation between two books.

    shared_tags is the shared domain tags followed by the shared theme tags,
    without de-duplication across the two dimensions. strength is
    len(shared_tags) divided by the number of distinct tags across both
    books' domain and theme lists; 0.0 when neither book has any tags.
    """
    shared_domain = _shared(book_a.domain_tags, book_b.domain_tags)
    shared_theme = _shared(book_a.theme_tags, book_b.theme_tags)
    shared_tags = shared_domain + shared_theme

    union = {
        *book_a.domain_tags,
        *book_a.theme_tags,
        *book_b.domain_tags,
        *book_b.theme_tags,
    }
    strength = len(shared_tags) / len(union) if union else 0.0

    if shared_domain and not shared_theme:
        relation_type = RelationType.DOMAIN
    elif shared_theme and not shared_domain:
        relation_type = RelationType.THEME
    else:
        relation_type = RelationType.MIXED

    return BookRelation(strength=strength, shared_tags=shared_tags, relation_type=relation_type)


def _node_size(note_count: int) -> int:
    return max(MIN_NODE_SIZE, min(MAX_NODE_SIZE, note_count + MIN_NODE_SIZE))


def _build_nodes(books: list[Book], notes: list[NoteCard]) -> list[GraphNode]:
    note_counts = Counter(note.book_id for note in notes)
    nodes = []
    for book in books:
        primary_domain = book.domain_tags[0] if book.domain_tags else OTHER_DOMAIN
        nodes.append(GraphNode(
            id=book.id,
            title=book.title,
            author=book.author,
            domain_tags=list(book.domain_tags),
            theme_tags=list(book.theme_tags),
            size=_node_size(note_counts[book.id]),
            color=get_domain_color(primary_domain),
        ))
    return nodes


def _build_links(books: list[Book]) -> list[RelationEdge]:
    # O(n^2) over book pairs. For large libraries, an inverted tag -> books
    # index would limit comparisons to pairs sharing at least one tag.
    links = []
    for i, book_a in enumerate(books):
        for book_b in books[i + 1:]:
            relation = book_relation(book_a, book_b)
            if relation.strength > LINK_THRESHOLD:
                links.append(RelationEdge(
                    source=book_a.id,
                    target=book_b.id,
                    strength=relation.strength,
                    shared_tags=relation.shared_tags,
                    type=relation.relation_type,
                ))
    return links


def build_clusters(books: list[Book]) -> list[Cluster]:
    """Group books by domain tag, keeping groups of two or more books.

    Groups keep first-seen tag order. Kept clusters are spaced around a
    circle of CLUSTER_RADIUS; the angle step divides the circle by the number
    of distinct domain tags in use, including the suppressed singletons.
    """
    groups: dict[str, list[int]] = {}
    for book in books:
        for tag in book.domain_tags:
            members = groups.setdefault(tag, [])
            if book.id not in members:
                members.append(book.id)

    slots = len(groups)
    kept = [(tag, members) for tag, members in groups.items() if len(members) >= 2]

    clusters = []
    for index, (tag, members) in enumerate(kept):
        angle = index * 2 * math.pi / slots
        clusters.append(Cluster(
            name=tag,
            books=members,
            center=Point(
                x=math.cos(angle) * CLUSTER_RADIUS,
                y=math.sin(angle) * CLUSTER_RADIUS,
            ),
            color=get_domain_color(tag),
        ))
    return clusters


def build_graph(books: list[Book], notes: list[NoteCard]) -> RelationGraph:
    """Build the book relation graph: nodes, tag-overlap links, and clusters."""
    if not books:
        return RelationGraph()

    graph = RelationGraph(
        nodes=_build_nodes(books, notes),
        links=_build_links(books),
        clusters=build_clusters(books),
    )
    logger.debug(
        "Built graph: %d node(s), %d link(s), %d cluster(s)",
        len(graph.nodes),
        len(graph.links),
        len(graph.clusters),
    )
    return graph


def build_relation_graph(store: EntityStore) -> RelationGraph:
    """Read every book and note from the store and build the relation graph."""
    books = store.list_books()
    notes = store.list_notes()
    return build_graph(books, notes)
