"""Shared fixtures for agentdocs tests: a small document tree and helpers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from agentdocs.config import default_config
from agentdocs.models import DocFile, ExportContext, section_from_path, slugify_filename

if TYPE_CHECKING:
    from collections.abc import Callable

    from agentdocs.config import ExportConfig

DOCS: dict[str, str] = {
    "index.md": "---\ntitle: Home\n---\n# Welcome\n\nStart with [Alpha](guides/a.md).\n",
    "getting-started/install.mdx": (
        "import Tabs from '@theme/Tabs';\n\n"
        "# Install\n\n"
        '<Tabs><TabItem value="pip">Use pip</TabItem></Tabs>\n'
    ),
    "guides/index.md": "# Guides\n\nGuides overview.\n",
    "guides/a.md": "---\ntitle: Alpha\n---\n[See B](../guides/b.md)\n",
    "guides/b.md": "# Beta\n\nBody of beta.\n\n:::tip\nDo X\n:::\n",
    "guides/_category_.json": '{"label": "Guides"}\n',
    "reference/cli/deploy.md": (
        "# strata deploy\n\n"
        "## Synopsis\n\n"
        "```bash\nstrata deploy [--dry-run]\n```\n\n"
        "## Description\n\n"
        "Deploy the semantic model.\n\n"
        "## Options\n\n"
        "- `--dry-run`\n"
    ),
    "notes.txt": "not a document\n",
    "img/diagram.md": "# Diagram\n",
    "api/generated.md": "# Generated\n",
    ".drafts/secret.md": "# Secret\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Materialise ``files`` (relative path -> text) under ``root``."""
    for rel_path, text in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """Return a document root populated with :data:`DOCS`."""
    return write_tree(tmp_path / "docs", DOCS)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created output directory."""
    return tmp_path / "site"


@pytest.fixture
def context(docs_tree: Path, out_dir: Path) -> ExportContext:
    """Return a root-deployed export context over :func:`docs_tree`."""
    return ExportContext(docs_dir=docs_tree, out_dir=out_dir)


@pytest.fixture
def export_config() -> ExportConfig:
    """Return the shipped export configuration."""
    return default_config()


@pytest.fixture
def make_doc() -> Callable[..., DocFile]:
    """Return a factory building :class:`DocFile` records from a relative path."""

    def _make(path: str, *, title: str | None = None, content: str = "") -> DocFile:
        stem = path.rsplit("/", 1)[-1]
        return DocFile(
            id=slugify_filename(stem),
            title=title or stem,
            url="/" + path.rsplit(".", 1)[0],
            content=content,
            frontmatter={},
            section=section_from_path(path),
            path=path,
        )

    return _make
