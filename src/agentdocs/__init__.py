"""Agent-facing documentation export.

The package walks a Markdown document tree once, groups it into ordered
sections, and writes synchronized machine-readable artifacts: a flattened
knowledge file (``llms.txt``), a discovery index, strict validation
schemas, and per-section JSON bundles. It runs as a MkDocs plugin
(:mod:`agentdocs.mkdocs_plugin`) or from the ``agentdocs`` CLI.
"""

from __future__ import annotations

from agentdocs.config import ExportConfig, default_config
from agentdocs.errors import (
    ArtifactWriteError,
    DocumentationBuildError,
    SchemaBuildError,
    SettingsError,
)
from agentdocs.models import DocFile, DocsModel, ExportContext, Section
from agentdocs.pipeline import build_model, run_pipeline

__all__ = [
    "ArtifactWriteError",
    "DocFile",
    "DocsModel",
    "DocumentationBuildError",
    "ExportConfig",
    "ExportContext",
    "SchemaBuildError",
    "Section",
    "SettingsError",
    "build_model",
    "default_config",
    "run_pipeline",
]
