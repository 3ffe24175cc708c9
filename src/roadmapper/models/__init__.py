"""Data models for Roadmapper."""

from .roadmap import Roadmap, RoadmapNode, RoadmapSource
from .schema import (
    CURRENT_VERSIONS,
    InvalidSchemaError,
    MigrationNotFoundError,
    SchemaError,
    SchemaHeader,
    migrate_if_needed,
    read_schema_header,
    write_schema_fields,
)

__all__ = [
    "CURRENT_VERSIONS",
    "InvalidSchemaError",
    "MigrationNotFoundError",
    "Roadmap",
    "RoadmapNode",
    "RoadmapSource",
    "SchemaError",
    "SchemaHeader",
    "migrate_if_needed",
    "read_schema_header",
    "write_schema_fields",
]
