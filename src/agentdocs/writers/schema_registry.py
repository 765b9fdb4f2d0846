"""Strict validation schemas (``api/schema/<kind>.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from jsonschema.exceptions import SchemaError
from jsonschema.validators import Draft7Validator

from agentdocs.errors import SchemaBuildError
from agentdocs.logging import get_logger, with_fields
from agentdocs.writers.base import write_json

if TYPE_CHECKING:
    from agentdocs.config import ExportConfig, ObjectKind
    from agentdocs.models import DocsModel, ExportContext

__all__ = ["SchemaRegistryWriter", "build_schema", "schema_id"]

LOGGER = get_logger(__name__)


def schema_id(kind: ObjectKind, context: ExportContext) -> str:
    """Return the absolute ``$id`` URL of ``kind``'s schema."""
    return context.site_url.rstrip("/") + context.site_path(kind.schema_path)


def build_schema(kind: ObjectKind, context: ExportContext) -> dict[str, object]:
    """Build and meta-validate the schema document for ``kind``.

    Raises
    ------
    SchemaBuildError
        If the hand-authored schema is not a valid Draft-07 schema.
    """
    schema = kind.build_schema(schema_id(kind, context))
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as exc:
        msg = f"Schema for {kind.name!r} is not a valid Draft-07 schema: {exc.message}"
        raise SchemaBuildError(msg, cause=exc, context={"kind": kind.name}) from exc
    return schema


class SchemaRegistryWriter:
    """Write one schema file per registered object kind."""

    name: ClassVar[str] = "schemas"

    def write(self, model: DocsModel, context: ExportContext, config: ExportConfig) -> list[Path]:
        del model
        logger = with_fields(LOGGER, operation=self.name)
        written: list[Path] = []
        for kind in config.object_kinds:
            path = write_json(Path(context.out_dir) / kind.schema_path, build_schema(kind, context))
            written.append(path)
            logger.debug("Wrote schema", extra={"artifact": str(path), "kind": kind.name})
        logger.info("Generated validation schemas", extra={"schema_count": len(written)})
        return written
