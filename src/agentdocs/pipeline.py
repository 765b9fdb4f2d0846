"""Single-pass export pipeline: walk, group, then fan out to writers.

The model is rebuilt from the filesystem on every run and handed, fully
built, to each writer in turn. Writers are independent; the first
:class:`~agentdocs.errors.DocumentationBuildError` aborts the run and
propagates to the host.
"""

from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from agentdocs.config import default_config
from agentdocs.errors import DocumentationBuildError
from agentdocs.grouping import group_docs_by_section
from agentdocs.logging import CorrelationContext, get_logger, with_fields
from agentdocs.models import DocsModel
from agentdocs.walker import read_docs
from agentdocs.writers import select_writers
from agentdocs.writers.base import ensure_dir

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from agentdocs.config import ExportConfig
    from agentdocs.models import ExportContext
    from agentdocs.writers import ArtifactWriter

__all__ = ["build_model", "run_pipeline"]

LOGGER = get_logger(__name__)


def build_model(context: ExportContext, config: ExportConfig) -> DocsModel:
    """Walk the document root and group the result into sections."""
    docs = read_docs(Path(context.docs_dir), context.base_url, route_prefix=context.route_prefix)
    sections = group_docs_by_section(
        docs,
        context.base_url,
        route_prefix=context.route_prefix,
        order=config.section_order,
        titles=config.section_titles,
    )
    return DocsModel(docs=tuple(docs), sections=tuple(sections))


def run_pipeline(
    context: ExportContext,
    *,
    config: ExportConfig | None = None,
    writers: Sequence[ArtifactWriter] | None = None,
    artifacts: Iterable[str] | None = None,
) -> list[Path]:
    """Build the model once and run every selected writer against it.

    Parameters
    ----------
    context : ExportContext
        Locations and addressing for this run.
    config : ExportConfig | None, optional
        Static content and registries; defaults to :func:`default_config`.
    writers : Sequence[ArtifactWriter] | None, optional
        Explicit writer instances. Takes precedence over ``artifacts``.
    artifacts : Iterable[str] | None, optional
        Names of artifact families to emit; all of them when omitted.

    Returns
    -------
    list[Path]
        Every file written, in writer order.

    Raises
    ------
    DocumentationBuildError
        If an output directory or file cannot be written, or a schema is
        invalid.
    """
    config = config or default_config()
    selected = list(writers) if writers is not None else select_writers(artifacts)
    with CorrelationContext(uuid.uuid4().hex):
        logger = with_fields(LOGGER, operation="export")
        start = time.monotonic()
        ensure_dir(Path(context.out_dir))
        model = build_model(context, config)
        logger.info(
            "Built documentation model",
            extra={
                "status": "started",
                "docs_dir": str(context.docs_dir),
                "doc_count": len(model.docs),
                "section_count": len(model.sections),
            },
        )
        written: list[Path] = []
        try:
            for writer in selected:
                written.extend(writer.write(model, context, config))
        except DocumentationBuildError as exc:
            logger.exception(
                "Artifact generation failed",
                extra={"error": exc.message, "context": dict(exc.context)},
            )
            raise
        logger.info(
            "Export complete",
            extra={
                "artifact_count": len(written),
                "duration_ms": round((time.monotonic() - start) * 1000, 3),
            },
        )
        return written
