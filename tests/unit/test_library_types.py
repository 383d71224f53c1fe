# ABOUTME: Unit tests for the data model helpers and the tag taxonomy.
# ABOUTME: Covers default resolvers, timestamp parsing, colours, and taxonomy iteration.

from datetime import datetime

import pytest

from shelfnotes.library import EntityStore
from shelfnotes.library.taxonomy import (
    DOMAIN_COLORS,
    DOMAIN_TAGS,
    OTHER_DOMAIN,
    THEME_TAGS,
    get_domain_color,
    iter_taxonomy,
)
from shelfnotes.library.types import (
    NoteType,
    Priority,
    Tag,
    TagType,
    parse_timestamp,
    resolve_note_type,
    resolve_priority,
)
from tests.fixtures.library import ListStore, make_book, make_note


class TestDefaultResolvers:
    """Tests for resolve_note_type and resolve_priority."""

    def test_absent_type_is_concept(self) -> None:
        """A note without a type resolves to concept."""
        assert resolve_note_type(make_note(1, 1, "n")) is NoteType.CONCEPT

    def test_present_type_is_kept(self) -> None:
        """An explicit type is returned unchanged."""
        note = make_note(1, 1, "n", note_type=NoteType.REFLECTION)
        assert resolve_note_type(note) is NoteType.REFLECTION

    def test_absent_priority_is_medium(self) -> None:
        """A note without a priority resolves to medium."""
        assert resolve_priority(make_note(1, 1, "n")) is Priority.MEDIUM

    def test_present_priority_is_kept(self) -> None:
        """An explicit priority is returned unchanged."""
        assert resolve_priority(make_note(1, 1, "n", priority=Priority.LOW)) is Priority.LOW


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_parses_z_suffix(self) -> None:
        """The store's 'Z' form parses to naive UTC."""
        assert parse_timestamp("2026-01-02T03:04:05.678Z") == datetime(2026, 1, 2, 3, 4, 5, 678000)

    def test_converts_offsets_to_utc(self) -> None:
        """Explicit offsets are converted to UTC."""
        assert parse_timestamp("2026-01-02T08:00:00+08:00") == datetime(2026, 1, 2, 0, 0, 0)

    def test_naive_is_kept(self) -> None:
        """Naive timestamps are taken as UTC already."""
        assert parse_timestamp("2026-01-02T08:00:00") == datetime(2026, 1, 2, 8, 0, 0)

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_is_none(self, value) -> None:
        """Absent timestamps parse to None."""
        assert parse_timestamp(value) is None

    def test_garbage_raises(self) -> None:
        """Malformed timestamps are an error."""
        with pytest.raises(ValueError):
            parse_timestamp("last tuesday")


class TestTaxonomy:
    """Tests for the static taxonomy and colour lookup."""

    def test_known_domain_color(self) -> None:
        """Mapped domains get their own colour."""
        assert get_domain_color("心理学") == "#FF6B6B"

    @pytest.mark.parametrize("name", [None, "", "炼金术", "认知心理"])
    def test_fallback_color(self, name) -> None:
        """Unmapped or empty domains share the fallback colour."""
        assert get_domain_color(name) == DOMAIN_COLORS[OTHER_DOMAIN]

    def test_iter_taxonomy_categories_precede_leaves(self) -> None:
        """Each category is yielded before its own leaves."""
        entries = list(iter_taxonomy())
        first = entries[0]
        assert first == (TagType.DOMAIN, "心理学", None)
        assert entries[1] == (TagType.DOMAIN, "认知心理", "心理学")

    def test_iter_taxonomy_covers_everything(self) -> None:
        """Every category and leaf of both trees is yielded exactly once."""
        entries = list(iter_taxonomy())
        expected = sum(1 + len(leaves) for leaves in DOMAIN_TAGS.values())
        expected += sum(1 + len(leaves) for leaves in THEME_TAGS.values())
        assert len(entries) == expected
        assert len(set(entries)) == expected

    def test_leaf_names_unique_within_type(self) -> None:
        """Leaf tags are matched by bare name, so they must be unique per type."""
        for tree in (DOMAIN_TAGS, THEME_TAGS):
            leaves = [leaf for group in tree.values() for leaf in group]
            assert len(leaves) == len(set(leaves))

    def test_tag_is_category(self) -> None:
        """Tags without a category are categories."""
        assert Tag(id=1, name="决策", tag_type=TagType.THEME).is_category
        assert not Tag(id=2, name="隐私", tag_type=TagType.THEME, category="伦理与社会影响").is_category


class TestEntityStoreProtocol:
    """Tests for the EntityStore protocol."""

    def test_list_store_satisfies_protocol(self) -> None:
        """Any object with the three list methods is an EntityStore."""
        assert isinstance(ListStore([]), EntityStore)

    def test_other_objects_do_not(self) -> None:
        """Objects missing the read methods are rejected."""
        assert not isinstance(object(), EntityStore)


class TestWireForm:
    """Tests for the camelCase dict form used by JSON output."""

    def test_book_to_dict(self) -> None:
        data = make_book(7, "Walden", domain=["哲学"]).to_dict()
        assert data["domainTags"] == ["哲学"]
        assert data["themeTags"] == []
        assert data["createdAt"] == data["updatedAt"]

    def test_note_to_dict_keeps_absent_fields_null(self) -> None:
        """Stored values are emitted as-is; defaults are not filled in."""
        data = make_note(3, 7, "n").to_dict()
        assert data["bookId"] == 7
        assert data["type"] is None
        assert data["priority"] is None

    def test_note_to_dict_enum_values(self) -> None:
        data = make_note(3, 7, "n", note_type=NoteType.QUOTE, priority=Priority.LOW).to_dict()
        assert (data["type"], data["priority"]) == ("quote", "low")
