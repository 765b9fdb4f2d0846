"""Hand-authored JSON Schemas for the Strata semantic model files.

Each builder takes the schema's ``$id`` so the registry writer can place
it at the URL advertised by the discovery index.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "ALLOWED_ADAPTERS",
    "ALLOWED_CARDINALITIES",
    "ALLOWED_DATA_TYPES",
    "JSON_SCHEMA_DIALECT",
    "SCHEMA_VERSION",
    "datasources_schema",
    "migration_schema",
    "project_schema",
    "query_test_schema",
    "relation_schema",
    "table_schema",
]

JSON_SCHEMA_DIALECT: Final[str] = "http://json-schema.org/draft-07/schema#"
SCHEMA_VERSION: Final[str] = "1.0"

ALLOWED_DATA_TYPES: Final[list[str]] = [
    "string",
    "integer",
    "bigint",
    "decimal",
    "date",
    "date_time",
    "boolean",
    "binary",
]
ALLOWED_CARDINALITIES: Final[list[str]] = ["one_to_one", "one_to_many", "many_to_one"]
ALLOWED_ADAPTERS: Final[list[str]] = [
    "postgres",
    "snowflake",
    "mysql",
    "sqlserver",
    "athena",
    "trino",
    "duckdb",
    "druid",
]

_STRING: Final = {"type": "string"}
_STRING_LIST: Final = {"type": "array", "items": {"type": "string"}}


def _header(schema_id: str) -> dict[str, object]:
    return {"$schema": JSON_SCHEMA_DIALECT, "$id": schema_id, "version": SCHEMA_VERSION}


def table_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``tbl.*.yml`` semantic table definitions."""
    return {
        **_header(schema_id),
        "type": "object",
        "required": ["datasource", "name", "physical_name", "cost", "fields"],
        "additionalProperties": False,
        "properties": {
            "datasource": dict(_STRING),
            "name": dict(_STRING),
            "physical_name": dict(_STRING),
            "cost": {"type": "integer", "minimum": 1},
            "snapshot_date": dict(_STRING),
            "tags": dict(_STRING_LIST),
            "partitions": {"type": "array", "items": {"$ref": "#/definitions/partition"}},
            "imports": dict(_STRING_LIST),
            "fields": {
                "type": "array",
                "items": {"$ref": "#/definitions/field"},
                "minItems": 1,
            },
        },
        "definitions": {
            "partition": {
                "type": "object",
                "required": ["dimension", "predicate", "filter_value"],
                "additionalProperties": False,
                "properties": {
                    "dimension": dict(_STRING),
                    "predicate": {"enum": ["between", "in_list"]},
                    "filter_value": dict(_STRING),
                    "filter_value_end": dict(_STRING),
                    "description": dict(_STRING),
                },
            },
            "field": {
                "type": "object",
                "required": ["type", "name", "data_type", "expression"],
                "additionalProperties": False,
                "properties": {
                    "type": {"enum": ["dimension", "measure"]},
                    "name": dict(_STRING),
                    "description": dict(_STRING),
                    "data_type": {"enum": list(ALLOWED_DATA_TYPES)},
                    "hidden": {"type": "boolean", "default": False},
                    "display_type": {
                        "enum": ["default", "html", "url", "email", "phone_number", "image"],
                        "default": "default",
                    },
                    "formatter": dict(_STRING),
                    "disable_value_listing": {"type": "boolean", "default": False},
                    "value_list_size": {"type": "integer", "minimum": 1},
                    "grains": dict(_STRING_LIST),
                    "expression": {"$ref": "#/definitions/expression"},
                },
            },
            "expression": {
                "type": "object",
                "required": ["sql"],
                "additionalProperties": False,
                "properties": {
                    "sql": dict(_STRING),
                    "primary_key": {"type": "boolean", "default": False},
                    "lookup": {"type": "boolean", "default": False},
                    "array": {"type": "boolean", "default": False},
                },
            },
        },
    }


def relation_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``rel.*.yml`` join definitions keyed by relation name."""
    return {
        **_header(schema_id),
        "type": "object",
        "required": ["datasource"],
        "properties": {"datasource": dict(_STRING)},
        "additionalProperties": {
            "type": "object",
            "required": ["left", "right", "sql", "cardinality"],
            "additionalProperties": False,
            "properties": {
                "left": dict(_STRING),
                "right": dict(_STRING),
                "sql": dict(_STRING),
                "cardinality": {"enum": list(ALLOWED_CARDINALITIES)},
                "join": {"enum": ["inner", "left", "right"], "default": "inner"},
                "allow_measure_expansion": {"type": "boolean", "default": False},
            },
        },
    }


def project_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``project.yml``."""
    return {
        **_header(schema_id),
        "type": "object",
        "required": ["name", "server"],
        "additionalProperties": False,
        "properties": {
            "name": dict(_STRING),
            "description": dict(_STRING),
            "uid": dict(_STRING),
            "server": {"type": "string", "format": "uri"},
            "production_branch": {"type": "string", "default": "main"},
            "git": dict(_STRING),
            "project_id": {"type": "integer"},
            "environments": {
                "type": "object",
                "additionalProperties": {
                    "type": "object",
                    "properties": {
                        "server": {"type": "string", "format": "uri"},
                        "api_key": dict(_STRING),
                    },
                },
            },
        },
    }


def datasources_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``datasources.yml``; keys are datasource names."""
    return {
        **_header(schema_id),
        "type": "object",
        "additionalProperties": {
            "type": "object",
            "required": ["adapter"],
            "properties": {
                "adapter": {"enum": list(ALLOWED_ADAPTERS)},
                "host": dict(_STRING),
                "port": {"type": "integer"},
                "database": dict(_STRING),
                "schema": dict(_STRING),
                "warehouse": dict(_STRING),
                "account": dict(_STRING),
                "catalog": dict(_STRING),
                "region": dict(_STRING),
                "workgroup": dict(_STRING),
                "s3_output_location": dict(_STRING),
                "ssl": {"type": "boolean", "default": False},
                "tier": {"enum": ["hot", "warm", "cold"], "default": "hot"},
            },
        },
    }


def _rename_operation(kind: str) -> dict[str, object]:
    return {
        "required": ["type", "from", "to"],
        "properties": {"type": {"const": kind}, "from": dict(_STRING), "to": dict(_STRING)},
    }


def migration_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``migrations/*.yml`` rename and swap operations."""
    return {
        **_header(schema_id),
        "type": "object",
        "required": ["version", "operations"],
        "additionalProperties": False,
        "properties": {
            "version": dict(_STRING),
            "description": dict(_STRING),
            "operations": {
                "type": "array",
                "items": {
                    "type": "object",
                    "oneOf": [
                        _rename_operation("rename_field"),
                        _rename_operation("rename_table"),
                        {
                            "required": ["type", "field_a", "field_b"],
                            "properties": {
                                "type": {"const": "swap_fields"},
                                "field_a": dict(_STRING),
                                "field_b": dict(_STRING),
                            },
                        },
                    ],
                },
                "minItems": 1,
            },
        },
    }


def query_test_schema(schema_id: str) -> dict[str, object]:
    """Schema for ``tests/*.yml`` query validation tests."""
    return {
        **_header(schema_id),
        "type": "object",
        "required": ["name", "query"],
        "additionalProperties": False,
        "properties": {
            "name": dict(_STRING),
            "description": dict(_STRING),
            "query": {
                "type": "object",
                "required": ["dimensions", "measures"],
                "additionalProperties": False,
                "properties": {
                    "dimensions": dict(_STRING_LIST),
                    "measures": dict(_STRING_LIST),
                    "filters": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["field", "operator", "value"],
                            "properties": {
                                "field": dict(_STRING),
                                "operator": {
                                    "enum": [
                                        "equals",
                                        "not_equals",
                                        "greater_than",
                                        "less_than",
                                        "contains",
                                        "in",
                                    ]
                                },
                                "value": {},
                            },
                        },
                    },
                },
            },
            "assert_sql": dict(_STRING),
            "assert_row_count": {"type": "integer", "minimum": 0},
        },
    }

