"""Error hierarchy for documentation export failures.

Only output problems are fatal for the export pipeline: a document tree
that is missing, malformed headers, and unresolved links all degrade
gracefully. The exceptions below mark the paths that must stop the host
build.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "ArtifactWriteError",
    "DocumentationBuildError",
    "SchemaBuildError",
    "SettingsError",
]


class DocumentationBuildError(RuntimeError):
    """Base exception for all documentation export failures.

    Parameters
    ----------
    message : str
        Human-readable error message.
    cause : Exception | None, optional
        Underlying exception, attached as ``__cause__``.
    context : Mapping[str, object] | None, optional
        Structured details (paths, artifact names) for logging.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause


class ArtifactWriteError(DocumentationBuildError):
    """Raised when an output directory cannot be created or a file written."""


class SchemaBuildError(DocumentationBuildError):
    """Raised when a registered schema fails meta-schema validation."""


class SettingsError(DocumentationBuildError):
    """Raised when export settings fail validation."""
