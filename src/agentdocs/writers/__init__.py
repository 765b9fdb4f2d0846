"""Artifact writers keyed by the names used in settings and plugin config."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from agentdocs.writers.base import ArtifactWriter
from agentdocs.writers.bundles import SectionBundleWriter
from agentdocs.writers.discovery import DiscoveryIndexWriter
from agentdocs.writers.knowledge import KnowledgeExportWriter
from agentdocs.writers.schema_registry import SchemaRegistryWriter

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "ARTIFACT_NAMES",
    "WRITERS",
    "ArtifactWriter",
    "DiscoveryIndexWriter",
    "KnowledgeExportWriter",
    "SchemaRegistryWriter",
    "SectionBundleWriter",
    "select_writers",
]

WRITERS: Final[dict[str, type[ArtifactWriter]]] = {
    KnowledgeExportWriter.name: KnowledgeExportWriter,
    DiscoveryIndexWriter.name: DiscoveryIndexWriter,
    SchemaRegistryWriter.name: SchemaRegistryWriter,
    SectionBundleWriter.name: SectionBundleWriter,
}
ARTIFACT_NAMES: Final[tuple[str, ...]] = tuple(WRITERS)


def select_writers(names: Iterable[str] | None = None) -> list[ArtifactWriter]:
    """Instantiate the writers named in ``names`` (all of them by default).

    Raises
    ------
    ValueError
        If a name is not a registered artifact family.
    """
    if names is None:
        return [writer() for writer in WRITERS.values()]
    selected: list[ArtifactWriter] = []
    for name in names:
        try:
            selected.append(WRITERS[name]())
        except KeyError:
            msg = f"Unknown artifact {name!r}; expected one of {', '.join(ARTIFACT_NAMES)}"
            raise ValueError(msg) from None
    return selected
