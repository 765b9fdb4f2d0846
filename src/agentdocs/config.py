"""Static export configuration: text blocks, registries and section layout.

Nothing here is derived from the document tree. The pipeline receives an
:class:`ExportConfig` explicitly so tests (and other sites) can substitute
their own rules, appendices and registries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from typing import TYPE_CHECKING, Final

from agentdocs import schemas
from agentdocs.grouping import DEFAULT_SECTION_ORDER, DEFAULT_SECTION_TITLES

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

__all__ = [
    "API_DIR",
    "KNOWLEDGE_FILENAME",
    "SCHEMA_DIR",
    "Appendix",
    "ExportConfig",
    "ObjectKind",
    "default_config",
    "load_content",
    "schema_relpath",
]

KNOWLEDGE_FILENAME: Final[str] = "llms.txt"
API_DIR: Final[str] = "api"
SCHEMA_DIR: Final[str] = f"{API_DIR}/schema"


def schema_relpath(kind: str) -> str:
    """Return the output-relative path of the schema for ``kind``."""
    return f"{SCHEMA_DIR}/{kind}.json"


@dataclass(frozen=True, slots=True)
class ObjectKind:
    """A semantic object type with its published schema.

    Attributes
    ----------
    name : str
        Registry key, also the schema file stem.
    file_pattern : str
        Glob that files of this kind follow in a project.
    description : str
        One-line description for the discovery index.
    build_schema : Callable[[str], dict[str, object]]
        Returns the schema document given its ``$id``.
    """

    name: str
    file_pattern: str
    description: str
    build_schema: Callable[[str], dict[str, object]]

    @property
    def schema_path(self) -> str:
        return schema_relpath(self.name)


@dataclass(frozen=True, slots=True)
class Appendix:
    """A titled, verbatim block appended to the knowledge export."""

    title: str
    body: str


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Constant inputs of one export run."""

    title: str
    summary: str
    intro: str
    rules: str
    appendices: tuple[Appendix, ...]
    object_kinds: tuple[ObjectKind, ...]
    cli_commands: Mapping[str, str]
    critical_constraints: tuple[str, ...]
    version: str = "1.0"
    version_compatibility: str = ">=0.9.0"
    section_order: tuple[str, ...] = DEFAULT_SECTION_ORDER
    section_titles: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_TITLES)
    )


def load_content(filename: str) -> str:
    """Read a bundled text block from ``agentdocs/content``."""
    return resources.files("agentdocs").joinpath("content", filename).read_text(
        encoding="utf-8"
    ).strip()


DEFAULT_OBJECT_KINDS: Final[tuple[ObjectKind, ...]] = (
    ObjectKind(
        "table",
        "tbl.*.yml",
        "Semantic table definition with dimensions and measures",
        schemas.table_schema,
    ),
    ObjectKind(
        "relation",
        "rel.*.yml",
        "Table relationships and join definitions",
        schemas.relation_schema,
    ),
    ObjectKind(
        "project",
        "project.yml",
        "Project configuration and server connection",
        schemas.project_schema,
    ),
    ObjectKind(
        "datasources",
        "datasources.yml",
        "Database connection configurations",
        schemas.datasources_schema,
    ),
    ObjectKind(
        "migration",
        "migrations/*.yml",
        "Schema migration for renaming/swapping",
        schemas.migration_schema,
    ),
    ObjectKind(
        "test",
        "tests/*.yml",
        "Query validation test definitions",
        schemas.query_test_schema,
    ),
)

DEFAULT_CLI_COMMANDS: Final[dict[str, str]] = {
    "strata init": "Initialize new Strata project in current directory",
    "strata datasource add <name>": "Add and configure a database connection",
    "strata datasource test <name>": "Test database connection",
    "strata datasource list": "List configured datasources",
    "strata table create <name>": "Generate table YAML from database introspection",
    "strata relation create <name>": "Generate relation YAML template",
    "strata audit": "Validate semantic model (syntax + semantics)",
    "strata audit syntax": "Check YAML syntax only",
    "strata audit models": "Validate model semantics only",
    "strata deploy": "Deploy semantic model to Strata server",
    "strata deploy --dry-run": "Preview deployment without applying",
    "strata test": "Run query validation tests",
    "strata migration create": "Create a migration file for renaming",
}

DEFAULT_CRITICAL_CONSTRAINTS: Final[tuple[str, ...]] = (
    "Field names must be globally unique across entire semantic layer",
    "No many_to_many relationships - use junction tables instead",
    "Measures must include aggregation function (sum, count, avg, min, max)",
    "Dimensions must NOT include aggregation functions",
    "Every table requires: datasource, name, physical_name, cost, fields",
    "Every field requires: type, name, data_type, expression",
)


def default_config() -> ExportConfig:
    """Return the shipped Strata export configuration."""
    return ExportConfig(
        title="Strata Semantic Modeling Reference",
        summary="Complete reference for AI agents building semantic models with Strata CLI",
        intro=(
            "Strata is a semantic layer platform that transforms raw database tables into "
            "business-ready analytics models. Data engineers define semantic models using "
            "YAML files, which are version-controlled and deployed via CLI."
        ),
        rules=load_content("rules.md"),
        appendices=(
            Appendix("Canonical YAML Examples", load_content("examples.md")),
            Appendix("Common Mistakes to Avoid", load_content("mistakes.md")),
        ),
        object_kinds=DEFAULT_OBJECT_KINDS,
        cli_commands=dict(DEFAULT_CLI_COMMANDS),
        critical_constraints=DEFAULT_CRITICAL_CONSTRAINTS,
    )
