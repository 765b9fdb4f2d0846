"""MkDocs plugin that exports agent-facing artifacts after the site is built."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from mkdocs.config import base
from mkdocs.config import config_options as c
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin

from agentdocs.errors import DocumentationBuildError
from agentdocs.models import DEFAULT_SITE_URL, ExportContext
from agentdocs.pipeline import run_pipeline
from agentdocs.writers import ARTIFACT_NAMES

if TYPE_CHECKING:  # pragma: no cover - typing only
    from mkdocs.config.defaults import MkDocsConfig

__all__ = ["AgentDocsPlugin", "AgentDocsPluginConfig", "split_site_url"]

LOGGER = logging.getLogger("mkdocs.plugins.agentdocs")
LOGGER.addHandler(logging.NullHandler())


def split_site_url(site_url: str | None) -> tuple[str | None, str]:
    """Split a configured ``site_url`` into its origin and base path.

    Examples
    --------
    >>> split_site_url("https://example.com/docs/")
    ('https://example.com', '/docs/')
    >>> split_site_url(None)
    (None, '/')
    """
    if not site_url:
        return None, "/"
    parsed = urlparse(site_url)
    origin = f"{parsed.scheme}://{parsed.netloc}" if parsed.scheme and parsed.netloc else None
    return origin, parsed.path or "/"


class AgentDocsPluginConfig(base.Config):
    """Options accepted under ``plugins: - agentdocs`` in ``mkdocs.yml``."""

    artifacts = c.ListOfItems(c.Choice(ARTIFACT_NAMES), default=list(ARTIFACT_NAMES))
    route_prefix = c.Type(str, default="")
    site_origin = c.Optional(c.Type(str))


class AgentDocsPlugin(BasePlugin[AgentDocsPluginConfig]):
    """Run the export pipeline once the static site has been written."""

    def on_post_build(self, *, config: MkDocsConfig) -> None:
        """Write ``llms.txt`` and the ``api/`` artifacts into ``site_dir``.

        Parameters
        ----------
        config : MkDocsConfig
            Global MkDocs configuration; ``docs_dir``, ``site_dir`` and
            ``site_url`` are read from it.

        Raises
        ------
        PluginError
            If any artifact cannot be generated, so the build fails visibly.
        """
        origin, base_url = split_site_url(config.get("site_url"))
        context = ExportContext(
            docs_dir=Path(config["docs_dir"]),
            out_dir=Path(config["site_dir"]),
            base_url=base_url,
            site_url=self.config.site_origin or origin or DEFAULT_SITE_URL,
            route_prefix=self.config.route_prefix,
        )
        try:
            written = run_pipeline(context, artifacts=self.config.artifacts)
        except DocumentationBuildError as exc:
            LOGGER.error("agentdocs: %s", exc.message)
            msg = f"agentdocs export failed: {exc.message}"
            raise PluginError(msg) from exc
        LOGGER.info("agentdocs: wrote %d artifacts to %s", len(written), context.out_dir)
