"""Recursive document walk and front-matter parsing.

The walker turns a directory of Markdown/MDX pages into :class:`DocFile`
records. It never fails on content: a missing root yields no documents,
a malformed header leaves the whole file as body text and an unreadable
file is skipped with a warning.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

import yaml

from agentdocs.logging import get_logger
from agentdocs.models import (
    DOC_EXTENSIONS,
    DocFile,
    clean_base_url,
    section_from_path,
    slugify_filename,
    strip_doc_extension,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "EXCLUDED_FILES",
    "build_doc_url",
    "extract_title",
    "parse_frontmatter",
    "read_docs",
]

LOGGER = get_logger(__name__)

DEFAULT_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({"img", "node_modules"})
EXCLUDED_FILES: Final[frozenset[str]] = frozenset({"_category_.json"})

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.S | re.M)
_H1_RE = re.compile(r"^#[ \t]+(.+?)[ \t]*$", re.M)


def parse_frontmatter(text: str) -> tuple[dict[str, object], str]:
    """Split ``text`` into a metadata mapping and a body.

    Parameters
    ----------
    text : str
        Raw file contents.

    Returns
    -------
    tuple[dict[str, object], str]
        Metadata and body. When the header is absent, unterminated, not
        valid YAML or not a mapping, the metadata is empty and the body is
        the whole input.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        LOGGER.debug(
            "Ignoring malformed front-matter header",
            extra={"operation": "walk", "error": str(exc)},
        )
        return {}, text
    if data is None:
        return {}, text[match.end() :]
    if not isinstance(data, dict):
        LOGGER.debug(
            "Ignoring non-mapping front-matter header",
            extra={"operation": "walk", "header_type": type(data).__name__},
        )
        return {}, text
    return {str(key): value for key, value in data.items()}, text[match.end() :]


def extract_title(body: str) -> str | None:
    """Return the text of the first level-1 heading in ``body``."""
    match = _H1_RE.search(body)
    return match.group(1).strip() if match else None


def build_doc_url(rel_path: str, base_url: str, route_prefix: str = "") -> str:
    """Join base path, route prefix and extensionless relative path."""
    parts = [clean_base_url(base_url)]
    prefix = route_prefix.strip("/")
    if prefix:
        parts.append(prefix)
    parts.append(strip_doc_extension(rel_path))
    return "/".join(parts)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="utf-8", errors="replace")


def _parse_doc(path: Path, rel_path: str, base_url: str, route_prefix: str) -> DocFile:
    frontmatter, body = parse_frontmatter(_read_text(path))
    raw_title = frontmatter.get("title")
    title = (
        (raw_title.strip() if isinstance(raw_title, str) and raw_title.strip() else None)
        or extract_title(body)
        or strip_doc_extension(path.name)
    )
    return DocFile(
        id=slugify_filename(path.name),
        title=title,
        url=build_doc_url(rel_path, base_url, route_prefix),
        content=body.strip(),
        frontmatter=frontmatter,
        section=section_from_path(rel_path),
        path=rel_path,
    )


def _is_doc_file(path: Path) -> bool:
    return path.name not in EXCLUDED_FILES and path.name.endswith(DOC_EXTENSIONS)


def read_docs(
    root: Path,
    base_url: str,
    *,
    route_prefix: str = "",
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> list[DocFile]:
    """Walk ``root`` and parse every document beneath it.

    Parameters
    ----------
    root : Path
        Document root. A missing directory yields an empty list.
    base_url : str
        Site base path used to build document URLs.
    route_prefix : str, optional
        Routing segment inserted between base path and document path.
    exclude_dirs : Iterable[str], optional
        Directory names never descended into. Hidden entries and
        symlinked directories are always skipped.

    Returns
    -------
    list[DocFile]
        Parsed documents in sorted traversal order.
    """
    if not root.is_dir():
        LOGGER.info(
            "Document root not found; nothing to ingest",
            extra={"operation": "walk", "docs_dir": str(root)},
        )
        return []
    excluded = frozenset(exclude_dirs)
    docs: list[DocFile] = []
    pending: list[tuple[Path, str]] = [(root, "")]
    while pending:
        directory, rel_dir = pending.pop()
        subdirs: list[tuple[Path, str]] = []
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name.startswith("."):
                continue
            rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            if entry.is_dir():
                # Linked directories can point back up the tree.
                if entry.is_symlink():
                    LOGGER.debug(
                        "Skipping symlinked directory",
                        extra={"operation": "walk", "path": rel_path},
                    )
                elif entry.name not in excluded:
                    subdirs.append((entry, rel_path))
            elif entry.is_file() and _is_doc_file(entry):
                try:
                    docs.append(_parse_doc(entry, rel_path, base_url, route_prefix))
                except OSError as exc:
                    LOGGER.warning(
                        "Skipping unreadable document",
                        extra={"operation": "walk", "path": rel_path, "error": str(exc)},
                    )
        pending.extend(reversed(subdirs))
    LOGGER.debug(
        "Walked document root",
        extra={"operation": "walk", "docs_dir": str(root), "doc_count": len(docs)},
    )
    return docs
