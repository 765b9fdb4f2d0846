"""Cross-document link resolution and anchor derivation.

Two addressing schemes are supported. The flattened knowledge export
rewrites links to in-file heading anchors; section bundles rewrite
relative links to clean site-absolute paths. Both leave external links,
schema references and existing anchors alone, and neither ever drops a
link.
"""

from __future__ import annotations

import posixpath
import re
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from agentdocs.models import INDEX_ID, clean_base_url, strip_doc_extension

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from agentdocs.models import DocFile

__all__ = [
    "LINK_RE",
    "SCHEMA_PATH_MARKER",
    "LinkMode",
    "LinkResolver",
    "convert_links_to_anchors",
    "extract_related_links",
    "is_passthrough_link",
    "normalize_link",
    "resolve_links_absolute",
    "to_anchor",
]

LINK_RE: Final = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
SCHEMA_PATH_MARKER: Final[str] = "/api/schema/"
RELATIVE_MARKERS: Final[tuple[str, ...]] = ("../", "./")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_NON_ANCHOR_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


class LinkMode(StrEnum):
    """Addressing scheme applied to in-content links."""

    ANCHOR = "anchor"
    ABSOLUTE = "absolute"


def to_anchor(text: str) -> str:
    """Derive a heading anchor from ``text``.

    Examples
    --------
    >>> to_anchor("CLI: Tables & Joins")
    'cli-tables-joins'
    """
    anchor = _NON_ANCHOR_RE.sub("", text.lower())
    anchor = _WHITESPACE_RE.sub("-", anchor)
    anchor = _HYPHENS_RE.sub("-", anchor)
    return anchor.strip()


def is_passthrough_link(target: str) -> bool:
    """Return True for external, schema and same-document anchor links."""
    return bool(
        _SCHEME_RE.match(target)
        or target.startswith(("//", "#"))
        or SCHEMA_PATH_MARKER in target
    )


def _split_suffix(target: str) -> tuple[str, str]:
    """Split ``target`` into its path and any ``?query``/``#fragment`` tail."""
    cut = len(target)
    for marker in ("?", "#"):
        index = target.find(marker)
        if index != -1:
            cut = min(cut, index)
    return target[:cut], target[cut:]


def _strip_leading_markers(target: str) -> str:
    while True:
        for marker in ("../", "./", "/"):
            if target.startswith(marker):
                target = target[len(marker) :]
                break
        else:
            return target


def normalize_link(link: str, current_url: str) -> str:
    """Resolve ``link`` against the directory of ``current_url``.

    Parameters
    ----------
    link : str
        Relative (``../x``, ``./x``) or site-absolute link target.
    current_url : str
        URL of the document containing the link.

    Returns
    -------
    str
        Clean site-absolute path, with document extensions removed and any
        fragment preserved.

    Examples
    --------
    >>> normalize_link("../cli/deploy.md", "/docs/guides/intro")
    '/docs/cli/deploy'
    """
    path, suffix = _split_suffix(link)
    if not path:
        return link
    if not path.startswith("/"):
        current_dir = current_url.rsplit("/", 1)[0] if "/" in current_url else ""
        path = posixpath.join(current_dir or "/", path)
    resolved = posixpath.normpath(path)
    if resolved.startswith("//"):
        resolved = "/" + resolved.lstrip("/")
    return strip_doc_extension(resolved) + suffix


class LinkResolver:
    """Resolve links against one fully built set of documents.

    Parameters
    ----------
    docs : Sequence[DocFile]
        Every ingested document; anchor lookups search this set.
    base_url : str, optional
        Site base path, stripped from site-absolute link targets before
        lookup.
    internal_prefix : str, optional
        Absolute prefix marking internal links in absolute mode.
    """

    def __init__(
        self,
        docs: Sequence[DocFile],
        *,
        base_url: str = "/",
        internal_prefix: str = "/",
    ) -> None:
        self._base_path = clean_base_url(base_url)
        self.internal_prefix = internal_prefix
        self._paths: list[tuple[str, DocFile]] = [
            (strip_doc_extension(doc.path.replace("\\", "/")), doc) for doc in docs
        ]

    def _normalize_target(self, target: str) -> str:
        path, _ = _split_suffix(target)
        base = self._base_path
        if base and (path == base or path.startswith(base + "/")):
            path = path[len(base) :]
        path = _strip_leading_markers(path).rstrip("/")
        return strip_doc_extension(path)

    def find_doc(self, target: str) -> DocFile | None:
        """Return the document ``target`` points at, if any.

        Exact path matches win over suffix matches; a directory link falls
        back to that directory's ``index`` page. The site root only matches
        the top-level ``index`` page.
        """
        normalized = self._normalize_target(target)
        if not normalized:
            return next((doc for doc_path, doc in self._paths if doc_path == INDEX_ID), None)
        candidates = (normalized, f"{normalized}/index")
        for candidate in candidates:
            for doc_path, doc in self._paths:
                if doc_path == candidate:
                    return doc
            for doc_path, doc in self._paths:
                if doc_path.endswith("/" + candidate):
                    return doc
        return None

    def to_anchors(self, content: str) -> str:
        """Rewrite every internal link in ``content`` to a heading anchor."""

        def _replace(match: re.Match[str]) -> str:
            text, target = match.group(1), match.group(2)
            if is_passthrough_link(target):
                return match.group(0)
            doc = self.find_doc(target)
            anchor = to_anchor(doc.title if doc is not None else text)
            return f"[{text}](#{anchor})"

        return LINK_RE.sub(_replace, content)

    def is_internal(self, target: str) -> bool:
        """Return True when absolute mode rewrites ``target``."""
        if is_passthrough_link(target):
            return False
        return target.startswith(RELATIVE_MARKERS) or target.startswith(self.internal_prefix)

    def to_absolute(self, content: str, doc: DocFile) -> str:
        """Rewrite relative links in ``content`` to site-absolute paths."""

        def _replace(match: re.Match[str]) -> str:
            text, target = match.group(1), match.group(2)
            if not self.is_internal(target):
                return match.group(0)
            return f"[{text}]({normalize_link(target, doc.url)})"

        return LINK_RE.sub(_replace, content)

    def related_links(self, items: Iterable[DocFile]) -> list[dict[str, str]]:
        """Harvest internal links from ``items`` as title/url records.

        Records are deduplicated on the (title, url) pair and keep the
        order in which they were first seen.
        """
        seen: set[tuple[str, str]] = set()
        links: list[dict[str, str]] = []
        for item in items:
            for match in LINK_RE.finditer(item.content):
                text, target = match.group(1), match.group(2)
                if not self.is_internal(target):
                    continue
                key = (text, normalize_link(target, item.url))
                if key in seen:
                    continue
                seen.add(key)
                links.append({"title": key[0], "url": key[1]})
        return links


def convert_links_to_anchors(content: str, docs: Sequence[DocFile], *, base_url: str = "/") -> str:
    """Rewrite links in ``content`` to anchors derived from ``docs`` titles.

    Unmatched links fall back to an anchor derived from the link text.
    """
    return LinkResolver(docs, base_url=base_url).to_anchors(content)


def resolve_links_absolute(content: str, doc: DocFile, *, internal_prefix: str = "/") -> str:
    """Rewrite relative links in ``doc`` content to clean absolute paths."""
    return LinkResolver((), internal_prefix=internal_prefix).to_absolute(content, doc)


def extract_related_links(
    items: Iterable[DocFile], *, internal_prefix: str = "/"
) -> list[dict[str, str]]:
    """Harvest deduplicated relative-style links from a section's documents."""
    return LinkResolver((), internal_prefix=internal_prefix).related_links(items)
