"""Canonical in-memory model shared by every artifact writer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

__all__ = [
    "DEFAULT_SITE_URL",
    "DOC_EXTENSIONS",
    "INDEX_ID",
    "ROOT_SECTION",
    "DocFile",
    "DocsModel",
    "ExportContext",
    "Section",
    "clean_base_url",
    "section_from_path",
    "slugify_filename",
    "strip_doc_extension",
]

ROOT_SECTION: Final[str] = "root"
INDEX_ID: Final[str] = "index"
DOC_EXTENSIONS: Final[tuple[str, ...]] = (".md", ".mdx")
DEFAULT_SITE_URL: Final[str] = "https://strata.do"

_EXTENSION_RE = re.compile(r"\.(md|mdx)$")
_SLUG_RE = re.compile(r"[^a-z0-9-]", re.IGNORECASE)


def clean_base_url(base_url: str) -> str:
    """Return ``base_url`` without its trailing slash (``"/"`` becomes ``""``)."""
    return base_url[:-1] if base_url.endswith("/") else base_url


def strip_doc_extension(path: str) -> str:
    """Drop a trailing ``.md``/``.mdx`` extension from ``path``."""
    return _EXTENSION_RE.sub("", path)


def slugify_filename(name: str) -> str:
    """Derive a document id from a file name.

    Examples
    --------
    >>> slugify_filename("Getting Started.mdx")
    'getting-started'
    """
    return _SLUG_RE.sub("-", strip_doc_extension(name)).lower()


def section_from_path(rel_path: str) -> str:
    """Return the top-level directory of ``rel_path`` or the root sentinel."""
    parts = PurePosixPath(rel_path).parts
    if len(parts) > 1:
        return parts[0]
    return ROOT_SECTION


@dataclass(frozen=True, slots=True)
class DocFile:
    """One parsed document.

    Attributes
    ----------
    id : str
        Slug derived from the file name; unique only within its directory.
    title : str
        Front-matter title, else first level-1 heading, else file stem.
    url : str
        Site URL of the rendered page.
    content : str
        Body text without the front-matter header, trimmed.
    frontmatter : Mapping[str, object]
        Metadata header, passed through unvalidated.
    section : str
        Top-level directory name or ``"root"``.
    path : str
        Relative path with ``/`` separators.
    """

    id: str
    title: str
    url: str
    content: str
    frontmatter: Mapping[str, object]
    section: str
    path: str

    @property
    def qualified_id(self) -> str:
        """Globally unique id: the relative path without its extension."""
        return strip_doc_extension(self.path)

    @property
    def is_index(self) -> bool:
        return self.id == INDEX_ID


@dataclass(slots=True)
class Section:
    """A named, ordered bucket of documents."""

    id: str
    title: str
    url: str
    items: list[DocFile] = field(default_factory=list)

    def __iter__(self) -> Iterator[DocFile]:
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class DocsModel:
    """Fully built model handed to artifact writers.

    Attributes
    ----------
    docs : Sequence[DocFile]
        Every ingested document in walk order.
    sections : Sequence[Section]
        Documents partitioned into sections, in canonical order.
    """

    docs: Sequence[DocFile]
    sections: Sequence[Section]

    def section(self, section_id: str) -> Section | None:
        """Return the section named ``section_id`` if it was ingested."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


@dataclass(frozen=True, slots=True)
class ExportContext:
    """Per-run locations and addressing shared by all writers.

    Attributes
    ----------
    docs_dir : Path
        Document root that was walked.
    out_dir : Path
        Output root; artifacts are written relative to it.
    base_url : str
        Effective base path of the site (``"/"`` for a root deployment).
    site_url : str
        Site origin used in schema ``$id`` values.
    route_prefix : str
        Optional routing segment placed between the base path and the
        document path in page URLs.
    """

    docs_dir: Path
    out_dir: Path
    base_url: str = "/"
    site_url: str = DEFAULT_SITE_URL
    route_prefix: str = ""

    @property
    def clean_base_url(self) -> str:
        return clean_base_url(self.base_url)

    @property
    def internal_prefix(self) -> str:
        """Absolute path prefix shared by every page URL of the site."""
        prefix = self.route_prefix.strip("/")
        base = self.clean_base_url
        return f"{base}/{prefix}/" if prefix else f"{base}/"

    def site_path(self, relative: str) -> str:
        """Return the site-absolute path of an artifact relative to the output root."""
        return f"{self.clean_base_url}/{relative.lstrip('/')}"
