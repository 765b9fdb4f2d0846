"""Partition documents into canonically ordered sections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from agentdocs.models import INDEX_ID, ROOT_SECTION, DocFile, Section, clean_base_url

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

__all__ = [
    "DEFAULT_SECTION_ORDER",
    "DEFAULT_SECTION_TITLES",
    "format_section_title",
    "group_docs_by_section",
    "item_sort_key",
    "section_sort_key",
]

DEFAULT_SECTION_ORDER: Final[tuple[str, ...]] = (
    "getting-started",
    "guides",
    "cli",
    "semantic-model",
    "advanced",
    "reference",
    "examples",
    "troubleshooting",
    "api",
    ROOT_SECTION,
)

DEFAULT_SECTION_TITLES: Final[dict[str, str]] = {
    ROOT_SECTION: "Documentation",
    "getting-started": "Getting Started",
    "cli": "CLI Reference",
    "semantic-model": "Semantic Model",
    "advanced": "Advanced Features",
    "examples": "Examples",
    "troubleshooting": "Troubleshooting",
}


def format_section_title(
    section_id: str, titles: Mapping[str, str] = DEFAULT_SECTION_TITLES
) -> str:
    """Return the display title for ``section_id``.

    Examples
    --------
    >>> format_section_title("semantic-model")
    'Semantic Model'
    >>> format_section_title("data-sources")
    'Data Sources'
    """
    if section_id in titles:
        return titles[section_id]
    return " ".join(word[:1].upper() + word[1:] for word in section_id.split("-"))


def section_sort_key(section_id: str, order: Sequence[str]) -> tuple[int, str]:
    """Sort prioritised ids by position, then everything else by name."""
    try:
        return (order.index(section_id), "")
    except ValueError:
        return (len(order), section_id)


def item_sort_key(doc: DocFile) -> tuple[int, str]:
    """Sort the ``index`` page first, then by normalised path."""
    return (0 if doc.id == INDEX_ID else 1, doc.path.replace("\\", "/"))


def _section_url(section_id: str, base_url: str, route_prefix: str) -> str:
    parts = [clean_base_url(base_url)]
    prefix = route_prefix.strip("/")
    if prefix:
        parts.append(prefix)
    if section_id != ROOT_SECTION:
        parts.append(section_id)
    return "/".join(parts) if len(parts) > 1 else parts[0] or "/"


def group_docs_by_section(
    docs: Iterable[DocFile],
    base_url: str,
    *,
    route_prefix: str = "",
    order: Sequence[str] = DEFAULT_SECTION_ORDER,
    titles: Mapping[str, str] = DEFAULT_SECTION_TITLES,
) -> list[Section]:
    """Group ``docs`` by their top-level directory.

    Every document lands in exactly one section; documents sharing a
    section id are accumulated into the same bucket whatever branch of the
    walk produced them.

    Parameters
    ----------
    docs : Iterable[DocFile]
        Documents from :func:`agentdocs.walker.read_docs`.
    base_url : str
        Site base path used for section URLs.
    route_prefix : str, optional
        Routing segment inserted after the base path.
    order : Sequence[str], optional
        Canonical section priority; unlisted sections sort after it by id.
    titles : Mapping[str, str], optional
        Display titles for known section ids.

    Returns
    -------
    list[Section]
        Sections in canonical order with items sorted ``index`` first, then
        by path.
    """
    sections: dict[str, Section] = {}
    for doc in docs:
        section = sections.get(doc.section)
        if section is None:
            section = Section(
                id=doc.section,
                title=format_section_title(doc.section, titles),
                url=_section_url(doc.section, base_url, route_prefix),
            )
            sections[doc.section] = section
        section.items.append(doc)

    ordered = sorted(sections.values(), key=lambda s: section_sort_key(s.id, order))
    for section in ordered:
        section.items.sort(key=item_sort_key)
    return ordered
