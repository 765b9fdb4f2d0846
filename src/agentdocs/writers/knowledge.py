"""Flattened knowledge export (``llms.txt``).

The export is one Markdown file: preamble, rules, table of contents, every
section's documents in canonical order and the static appendices. Pages
under ``api/`` are left to the section bundles. Table of
contents entries and body headings both go through
:func:`~agentdocs.links.to_anchor`, so every listed anchor resolves.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final

from agentdocs.config import KNOWLEDGE_FILENAME
from agentdocs.links import LinkResolver, to_anchor
from agentdocs.logging import get_logger, with_fields
from agentdocs.sanitize import clean_mdx_content
from agentdocs.writers.base import write_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentdocs.config import ExportConfig
    from agentdocs.models import DocsModel, ExportContext, Section

__all__ = ["EXCLUDED_SECTIONS", "KnowledgeExportWriter", "render_knowledge_export"]

LOGGER = get_logger(__name__)

# Machine-integration pages are published through the section bundles only.
EXCLUDED_SECTIONS: Final[frozenset[str]] = frozenset({"api"})


def _exported_sections(model: DocsModel) -> list[Section]:
    return [section for section in model.sections if section.id not in EXCLUDED_SECTIONS]


def _table_of_contents(sections: Sequence[Section], config: ExportConfig) -> list[str]:
    lines = ["## Table of Contents", ""]
    for section in sections:
        lines.append(f"- [{section.title}](#{to_anchor(section.title)})")
        lines.extend(
            f"  - [{item.title}](#{to_anchor(item.title)})"
            for item in section.items
            if not item.is_index
        )
    lines.extend(
        f"- [{appendix.title}](#{to_anchor(appendix.title)})" for appendix in config.appendices
    )
    lines.append("")
    return lines


def render_knowledge_export(model: DocsModel, context: ExportContext, config: ExportConfig) -> str:
    """Render the knowledge export text for ``model``.

    Parameters
    ----------
    model : DocsModel
        Built documents and sections.
    context : ExportContext
        Run context; its base path is stripped from absolute links.
    config : ExportConfig
        Preamble, rules and appendix blocks.

    Returns
    -------
    str
        Complete file contents.
    """
    sections = _exported_sections(model)
    docs = [item for section in sections for item in section.items]
    resolver = LinkResolver(docs, base_url=context.base_url)
    lines = [f"# {config.title}", "", f"> {config.summary}", "", config.intro, ""]
    lines.extend([config.rules, ""])
    lines.extend(_table_of_contents(sections, config))

    for section in sections:
        lines.extend(["---", "", f"## {section.title}", ""])
        for item in section.items:
            if not item.is_index:
                lines.extend([f"### {item.title}", ""])
            lines.extend([clean_mdx_content(resolver.to_anchors(item.content)), ""])

    for appendix in config.appendices:
        lines.extend(["---", "", f"## {appendix.title}", "", appendix.body, ""])
    return "\n".join(lines)


class KnowledgeExportWriter:
    """Write ``llms.txt`` at the output root."""

    name: ClassVar[str] = "knowledge"

    def write(self, model: DocsModel, context: ExportContext, config: ExportConfig) -> list[Path]:
        path = write_text(
            Path(context.out_dir) / KNOWLEDGE_FILENAME,
            render_knowledge_export(model, context, config),
        )
        with_fields(LOGGER, operation=self.name).info(
            "Generated knowledge export",
            extra={"artifact": str(path), "section_count": len(model.sections)},
        )
        return [path]
