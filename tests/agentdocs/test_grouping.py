"""Tests for section grouping and ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentdocs.grouping import format_section_title, group_docs_by_section, section_sort_key
from agentdocs.walker import read_docs

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from agentdocs.models import DocFile


class TestFormatSectionTitle:
    """Tests for format_section_title."""

    def test_known_ids(self) -> None:
        """Known ids use their configured title."""
        assert format_section_title("root") == "Documentation"
        assert format_section_title("cli") == "CLI Reference"

    def test_unknown_ids_are_capitalised(self) -> None:
        """Unknown ids are split on hyphens and capitalised."""
        assert format_section_title("data-sources") == "Data Sources"

    def test_custom_titles(self) -> None:
        """A custom title map overrides the defaults."""
        assert format_section_title("guides", {"guides": "How-To"}) == "How-To"


class TestSectionSortKey:
    """Tests for section_sort_key."""

    def test_prioritised_before_unlisted(self) -> None:
        """Listed ids sort by position, unlisted ones after them by name."""
        order = ("guides", "root")
        ids = ["zeta", "root", "alpha", "guides"]
        assert sorted(ids, key=lambda i: section_sort_key(i, order)) == [
            "guides",
            "root",
            "alpha",
            "zeta",
        ]


class TestGroupDocsBySection:
    """Tests for group_docs_by_section."""

    def test_canonical_section_order(self, docs_tree: Path) -> None:
        """Sections follow the canonical priority list."""
        sections = group_docs_by_section(read_docs(docs_tree, "/"), "/")
        assert [section.id for section in sections] == [
            "getting-started",
            "guides",
            "reference",
            "api",
            "root",
        ]
        assert [section.title for section in sections] == [
            "Getting Started",
            "Guides",
            "Reference",
            "Api",
            "Documentation",
        ]

    def test_index_first_then_path(self, docs_tree: Path) -> None:
        """The index page leads its section; the rest sort by path."""
        sections = group_docs_by_section(read_docs(docs_tree, "/"), "/")
        guides = next(section for section in sections if section.id == "guides")
        assert [item.id for item in guides.items] == ["index", "a", "b"]

    def test_partition_is_total_and_disjoint(self, docs_tree: Path) -> None:
        """Every document lands in exactly one section."""
        docs = read_docs(docs_tree, "/")
        sections = group_docs_by_section(docs, "/")
        grouped = [item.path for section in sections for item in section.items]
        assert len(grouped) == len(docs)
        assert sorted(grouped) == sorted(doc.path for doc in docs)
        for section in sections:
            assert all(item.section == section.id for item in section.items)

    def test_independent_of_input_order(self, docs_tree: Path) -> None:
        """Grouping reversed input yields the same layout."""
        docs = read_docs(docs_tree, "/")
        forward = group_docs_by_section(docs, "/")
        backward = group_docs_by_section(list(reversed(docs)), "/")
        assert [(s.id, [i.path for i in s.items]) for s in forward] == [
            (s.id, [i.path for i in s.items]) for s in backward
        ]

    def test_unlisted_sections_sort_by_id(self, make_doc: Callable[..., DocFile]) -> None:
        """Sections outside the priority list follow it alphabetically."""
        docs = [make_doc("zeta/x.md"), make_doc("alpha-beta/y.md"), make_doc("guides/z.md")]
        sections = group_docs_by_section(docs, "/")
        assert [section.id for section in sections] == ["guides", "alpha-beta", "zeta"]
        assert sections[1].title == "Alpha Beta"

    def test_section_urls(self, make_doc: Callable[..., DocFile]) -> None:
        """Section URLs combine base path, route prefix and section id."""
        docs = [make_doc("index.md"), make_doc("guides/a.md")]
        root, guides = reversed(group_docs_by_section(docs, "/"))
        assert (guides.url, root.url) == ("/guides", "/")
        root, guides = reversed(group_docs_by_section(docs, "/site/", route_prefix="docs"))
        assert (guides.url, root.url) == ("/site/docs/guides", "/site/docs")

    def test_empty_input(self) -> None:
        """No documents means no sections."""
        assert group_docs_by_section([], "/") == []
