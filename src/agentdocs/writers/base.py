"""Writer interface and the file helpers every writer shares.

Writers read the fully built :class:`~agentdocs.models.DocsModel` and
emit files under the context's output root. Output failures are the only
fatal condition of an export run, so both helpers convert ``OSError`` into
:class:`~agentdocs.errors.ArtifactWriteError`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from agentdocs.errors import ArtifactWriteError

if TYPE_CHECKING:
    from pathlib import Path

    from agentdocs.config import ExportConfig
    from agentdocs.models import DocsModel, ExportContext

__all__ = ["ArtifactWriter", "ensure_dir", "render_json", "write_json", "write_text"]


@runtime_checkable
class ArtifactWriter(Protocol):
    """One artifact family.

    Attributes
    ----------
    name : str
        Stable key used to select writers from settings and plugin config.
    """

    name: ClassVar[str]

    def write(self, model: DocsModel, context: ExportContext, config: ExportConfig) -> list[Path]:
        """Emit the artifacts and return the paths written."""
        ...


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) or raise :class:`ArtifactWriteError`."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {path}: {exc}"
        raise ArtifactWriteError(msg, cause=exc, context={"path": str(path)}) from exc
    return path


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` as UTF-8, creating parent directories as needed.

    Raises
    ------
    ArtifactWriteError
        If the directory cannot be created or the file cannot be written.
    """
    ensure_dir(path.parent)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write artifact {path}: {exc}"
        raise ArtifactWriteError(msg, cause=exc, context={"path": str(path)}) from exc
    return path


def render_json(data: object) -> str:
    """Serialise ``data`` with two-space indentation, keeping key order."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, data: object) -> Path:
    """Write ``data`` as pretty-printed JSON with a trailing newline."""
    return write_text(path, render_json(data))
