"""Per-section JSON bundles and the CLI command catalogue.

Bundles address documents by site-absolute paths rather than anchors:
relative links are resolved against each page's URL, and the relative
links of a section are also collected into ``relatedLinks``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final

from agentdocs.cli_reference import command_slug, extract_command_metadata, select_cli_docs
from agentdocs.config import API_DIR
from agentdocs.links import LinkResolver
from agentdocs.logging import get_logger, with_fields
from agentdocs.sanitize import clean_mdx_content
from agentdocs.writers.base import write_json

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agentdocs.config import ExportConfig
    from agentdocs.models import DocFile, DocsModel, ExportContext, Section

__all__ = [
    "CLI_COMMANDS_FILENAME",
    "SECTION_INDEX_FILENAME",
    "SectionBundleWriter",
    "build_cli_commands",
    "build_section_bundle",
    "build_section_index",
    "command_records",
    "section_bundle_relpath",
]

LOGGER = get_logger(__name__)

SECTION_INDEX_FILENAME: Final[str] = f"{API_DIR}/sections.json"
CLI_COMMANDS_FILENAME: Final[str] = f"{API_DIR}/cli/commands.json"
# Section ids whose bundle name would shadow another artifact in ``api/``.
_RESERVED_BUNDLE_IDS: Final[frozenset[str]] = frozenset({"docs", "sections"})


def section_bundle_relpath(section_id: str) -> str:
    """Return the output-relative path of a section bundle."""
    if section_id in _RESERVED_BUNDLE_IDS:
        return f"{API_DIR}/{section_id}-section.json"
    return f"{API_DIR}/{section_id}.json"


def _page_content(doc: DocFile, resolver: LinkResolver) -> str:
    return clean_mdx_content(resolver.to_absolute(doc.content, doc))


def build_section_bundle(section: Section, resolver: LinkResolver) -> dict[str, object]:
    """Return the bundle payload for one section."""
    pages = [
        {
            "id": item.id,
            "title": item.title,
            "url": item.url,
            "content": _page_content(item, resolver),
        }
        for item in section.items
    ]
    return {
        "title": section.title,
        "content": "\n\n".join(page["content"] for page in pages),
        "pages": pages,
        "relatedLinks": resolver.related_links(section.items),
    }


def build_section_index(sections: Iterable[Section]) -> dict[str, object]:
    """Return the lightweight index of sections and their pages."""
    return {
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "url": section.url,
                "items": [
                    {"id": item.id, "title": item.title, "url": item.url}
                    for item in section.items
                ],
            }
            for section in sections
        ]
    }


def command_records(docs: Iterable[DocFile]) -> list[dict[str, str]]:
    """Extract command metadata from the CLI reference pages in ``docs``."""
    commands: list[dict[str, str]] = []
    for doc in select_cli_docs(docs):
        metadata = extract_command_metadata(doc.content)
        commands.append(
            {
                "id": doc.id,
                "command": command_slug(doc.title),
                "title": doc.title,
                "url": doc.url,
                "synopsis": metadata.synopsis or "",
                "description": metadata.description or "",
            }
        )
    return commands


def build_cli_commands(docs: Iterable[DocFile]) -> dict[str, object]:
    """Return the CLI catalogue payload."""
    return {"commands": command_records(docs)}


class SectionBundleWriter:
    """Write section bundles, the section index and the CLI catalogue."""

    name: ClassVar[str] = "bundles"

    def write(self, model: DocsModel, context: ExportContext, config: ExportConfig) -> list[Path]:
        del config
        logger = with_fields(LOGGER, operation=self.name)
        out_dir = Path(context.out_dir)
        resolver = LinkResolver(
            model.docs, base_url=context.base_url, internal_prefix=context.internal_prefix
        )
        written: list[Path] = []
        for section in model.sections:
            relpath = section_bundle_relpath(section.id)
            if section.id in _RESERVED_BUNDLE_IDS:
                logger.warning(
                    "Section id collides with a reserved artifact name; bundle renamed",
                    extra={"section": section.id, "artifact": relpath},
                )
            written.append(write_json(out_dir / relpath, build_section_bundle(section, resolver)))
        index = build_section_index(model.sections)
        written.append(write_json(out_dir / SECTION_INDEX_FILENAME, index))
        commands = command_records(model.docs)
        written.append(write_json(out_dir / CLI_COMMANDS_FILENAME, {"commands": commands}))
        logger.info(
            "Generated section bundles",
            extra={
                "section_count": len(model.sections),
                "command_count": len(commands),
            },
        )
        return written
