"""Strip MDX presentation markup that only the rendering host understands."""

from __future__ import annotations

import re
from typing import Final

__all__ = ["ADMONITION_LABELS", "clean_mdx_content"]

ADMONITION_LABELS: Final[tuple[str, ...]] = ("tip", "info", "warning", "danger", "note")

_IMPORT_RE = re.compile(r"^import\s+.*$", re.M)
# ``\s*`` may consume the newline so the first body line joins the label.
_ADMONITION_OPEN_RE = re.compile(rf"^:::({'|'.join(ADMONITION_LABELS)})\s*(.*)?$", re.M)
_ADMONITION_CLOSE_RE = re.compile(r"^:::$", re.M)
_PAIRED_TAG_RE = re.compile(r"<[A-Z][^>]*>([\s\S]*?)</[A-Z][^>]*>")
_SELF_CLOSING_TAG_RE = re.compile(r"<[A-Z][^/>]*/>")
_LEADING_NEWLINES_RE = re.compile(r"^\n+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def _unwrap_components(content: str) -> str:
    while True:
        unwrapped = _PAIRED_TAG_RE.sub(r"\1", content)
        if unwrapped == content:
            return unwrapped
        content = unwrapped


def clean_mdx_content(content: str) -> str:
    """Turn an MDX body into plain Markdown.

    Import lines are removed, admonitions become bold label prefixes,
    capitalised components are unwrapped (self-closing ones dropped) and
    blank-line runs are collapsed.

    Parameters
    ----------
    content : str
        Document body, already link-resolved.

    Returns
    -------
    str
        Sanitized, trimmed body.

    Examples
    --------
    >>> clean_mdx_content(":::tip\\nDo X\\n:::")
    '**tip:** Do X'
    """
    cleaned = _IMPORT_RE.sub("", content)
    cleaned = _ADMONITION_OPEN_RE.sub(r"**\1:** \2", cleaned)
    cleaned = _ADMONITION_CLOSE_RE.sub("", cleaned)
    cleaned = _unwrap_components(cleaned)
    cleaned = _SELF_CLOSING_TAG_RE.sub("", cleaned)
    cleaned = _LEADING_NEWLINES_RE.sub("", cleaned)
    cleaned = _EXCESS_NEWLINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()
