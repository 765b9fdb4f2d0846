"""Export settings with environment support and fail-fast validation.

Examples
--------
>>> from agentdocs.settings import load_settings
>>> settings = load_settings(docs_dir="docs", out_dir="site")
>>> settings.base_url
'/'
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agentdocs.errors import SettingsError
from agentdocs.logging import get_logger
from agentdocs.models import DEFAULT_SITE_URL, ExportContext
from agentdocs.writers import ARTIFACT_NAMES

__all__ = ["ExportSettings", "load_settings"]

logger = get_logger(__name__)


class ExportSettings(BaseSettings):
    """Locations, addressing and artifact selection (``AGENTDOCS_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="AGENTDOCS_",
        extra="forbid",
        case_sensitive=False,
    )

    docs_dir: Path = Field(default=Path("docs"), description="Document root to walk")
    out_dir: Path = Field(default=Path("site"), description="Output root for artifacts")
    base_url: str = Field(default="/", description="Base path the site is deployed under")
    site_url: str = Field(
        default=DEFAULT_SITE_URL, description="Site origin used in schema $id values"
    )
    route_prefix: str = Field(
        default="", description="Routing segment between the base path and page paths"
    )
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    artifacts: list[str] = Field(
        default_factory=lambda: list(ARTIFACT_NAMES),
        description="Artifact families to emit",
    )

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        if not value.startswith("/"):
            msg = f"base_url must start with '/', got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("artifacts")
    @classmethod
    def check_artifacts(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in ARTIFACT_NAMES]
        if unknown:
            msg = f"Unknown artifacts {unknown}; expected a subset of {list(ARTIFACT_NAMES)}"
            raise ValueError(msg)
        return value

    def to_context(self) -> ExportContext:
        """Return the per-run context consumed by the pipeline."""
        return ExportContext(
            docs_dir=self.docs_dir,
            out_dir=self.out_dir,
            base_url=self.base_url,
            site_url=self.site_url,
            route_prefix=self.route_prefix,
        )


def load_settings(**overrides: object) -> ExportSettings:
    """Load :class:`ExportSettings` from the environment with optional overrides.

    Raises
    ------
    SettingsError
        If a value fails validation.
    """
    try:
        return ExportSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        logger.exception(
            "Settings validation failed",
            extra={"error": str(exc), "error_type": type(exc).__name__},
        )
        raise SettingsError(msg, cause=exc, context={"validation_error": str(exc)}) from exc
