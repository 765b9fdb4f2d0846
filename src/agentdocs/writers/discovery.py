"""Machine discovery index (``api/docs.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from agentdocs.config import API_DIR, KNOWLEDGE_FILENAME
from agentdocs.logging import get_logger, with_fields
from agentdocs.writers.base import write_json

if TYPE_CHECKING:
    from agentdocs.config import ExportConfig
    from agentdocs.models import DocsModel, ExportContext

__all__ = ["DISCOVERY_FILENAME", "DiscoveryIndexWriter", "build_discovery_index"]

LOGGER = get_logger(__name__)

DISCOVERY_FILENAME = f"{API_DIR}/docs.json"


def build_discovery_index(context: ExportContext, config: ExportConfig) -> dict[str, object]:
    """Return the discovery index payload.

    Schema references are built from the same registry and path helper the
    schema writer uses, so every advertised path exists after a full run.
    """
    return {
        "version": config.version,
        "strata_version_compatibility": config.version_compatibility,
        "semantic_objects": {
            kind.name: {
                "schema": context.site_path(kind.schema_path),
                "file_pattern": kind.file_pattern,
                "description": kind.description,
            }
            for kind in config.object_kinds
        },
        "cli_commands": dict(config.cli_commands),
        "critical_constraints": list(config.critical_constraints),
        "full_knowledge": context.site_path(KNOWLEDGE_FILENAME),
    }


class DiscoveryIndexWriter:
    """Write the discovery index under the API directory."""

    name: ClassVar[str] = "discovery"

    def write(self, model: DocsModel, context: ExportContext, config: ExportConfig) -> list[Path]:
        del model
        path = write_json(
            Path(context.out_dir) / DISCOVERY_FILENAME, build_discovery_index(context, config)
        )
        with_fields(LOGGER, operation=self.name).info(
            "Generated discovery index",
            extra={"artifact": str(path), "object_kinds": len(config.object_kinds)},
        )
        return [path]
