"""Best-effort extraction of command metadata from CLI reference pages.

Reference pages follow a loose convention: a ``## Synopsis`` heading
followed by a fenced ``bash`` block, and a ``## Description`` heading
followed by prose. Extraction is tolerant; an absent block yields
``None`` rather than an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agentdocs.models import DocFile

__all__ = [
    "CLI_PATH_MARKER",
    "REFERENCE_SECTION",
    "CommandMetadata",
    "command_slug",
    "extract_command_metadata",
    "is_cli_reference",
    "select_cli_docs",
]

REFERENCE_SECTION: Final[str] = "reference"
CLI_PATH_MARKER: Final[str] = "cli/"

_SYNOPSIS_RE = re.compile(r"## Synopsis\s+```bash\s+(.+?)\s+```", re.S)
_DESCRIPTION_RE = re.compile(r"## Description\s+(.+?)(?=\n##|\n```|\Z)", re.S)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class CommandMetadata:
    """Structured blocks found on a CLI reference page."""

    synopsis: str | None = None
    description: str | None = None


def command_slug(title: str) -> str:
    """Return the command slug for a page title (``"strata deploy"`` -> ``"strata-deploy"``)."""
    return _WHITESPACE_RE.sub("-", title.lower())


def extract_command_metadata(content: str) -> CommandMetadata:
    """Pull the synopsis and description blocks out of ``content``."""
    synopsis = _SYNOPSIS_RE.search(content)
    description = _DESCRIPTION_RE.search(content)
    return CommandMetadata(
        synopsis=synopsis.group(1) if synopsis else None,
        description=description.group(1).strip() if description else None,
    )


def is_cli_reference(doc: DocFile) -> bool:
    return doc.section == REFERENCE_SECTION and CLI_PATH_MARKER in doc.path.replace("\\", "/")


def select_cli_docs(docs: Iterable[DocFile]) -> list[DocFile]:
    """Return the documents that describe CLI commands."""
    return [doc for doc in docs if is_cli_reference(doc)]
