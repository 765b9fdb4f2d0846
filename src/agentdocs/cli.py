"""Command-line entry point for running the export outside MkDocs."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from agentdocs.errors import DocumentationBuildError
from agentdocs.logging import get_logger, setup_logging, with_fields
from agentdocs.pipeline import run_pipeline
from agentdocs.settings import load_settings

__all__ = ["app", "build", "main"]

LOGGER = get_logger(__name__)

app = typer.Typer(
    help="Export agent-facing documentation artifacts.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _root() -> None:
    """Export agent-facing documentation artifacts."""


@app.command()
def build(
    docs_dir: Annotated[
        Path | None,
        typer.Option("--docs-dir", help="Document root to walk.", metavar="DIR"),
    ] = None,
    out_dir: Annotated[
        Path | None,
        typer.Option("--out-dir", help="Output root for the artifacts.", metavar="DIR"),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Base path the site is deployed under."),
    ] = None,
    site_url: Annotated[
        str | None,
        typer.Option("--site-url", help="Site origin used in schema $id values."),
    ] = None,
    route_prefix: Annotated[
        str | None,
        typer.Option("--route-prefix", help="Routing segment placed before page paths."),
    ] = None,
    artifact: Annotated[
        list[str] | None,
        typer.Option(
            "--artifact",
            "-a",
            help="Artifact family to emit; repeat to select several (default: all).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
) -> None:
    """Walk the document root and write every selected artifact.

    Flags override ``AGENTDOCS_*`` environment settings.

    Raises
    ------
    typer.Exit
        Raised with exit code 1 when settings are invalid or an artifact
        cannot be written.
    """
    overrides: dict[str, object] = {
        "docs_dir": docs_dir,
        "out_dir": out_dir,
        "base_url": base_url,
        "site_url": site_url,
        "route_prefix": route_prefix,
        "artifacts": artifact or None,
        "log_level": log_level,
    }
    logger = with_fields(LOGGER, operation="build")
    try:
        settings = load_settings(**{key: value for key, value in overrides.items() if value})
        setup_logging(settings.log_level)
        written = run_pipeline(settings.to_context(), artifacts=settings.artifacts)
    except DocumentationBuildError as exc:
        logger.exception("Build failed", extra={"error": exc.message})
        typer.echo(f"error: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    for path in written:
        typer.echo(str(path))


def main() -> None:
    """Run the ``agentdocs`` application."""
    app()


if __name__ == "__main__":
    main()
