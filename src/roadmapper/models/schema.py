"""Schema versioning for persisted storage slots.

Every slot payload carries a version header so that:
- Foreign or corrupt content is recognized on load
- Legacy payloads are migrated in memory before use
- The persistence format can evolve

Schema Types:
- roadmap_history: Saved roadmap collection
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Current schema versions
CURRENT_VERSIONS: dict[str, str] = {
    "roadmap_history": "1.0",
}

LEGACY_VERSION = "0.0"


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class MigrationNotFoundError(SchemaError):
    """Raised when no migration path exists."""

    def __init__(self, schema_type: str, from_version: str, to_version: str) -> None:
        self.schema_type = schema_type
        self.from_version = from_version
        self.to_version = to_version
        super().__init__(
            f"No migration for {schema_type} from {from_version} to {to_version}"
        )


class InvalidSchemaError(SchemaError):
    """Raised when a payload does not match the expected schema."""


@dataclass
class SchemaHeader:
    """Schema header read from a slot payload."""

    schema_type: str
    schema_version: str

    @property
    def is_current(self) -> bool:
        """Check if this payload is at the current version."""
        current = CURRENT_VERSIONS.get(self.schema_type)
        return self.schema_version == current


def read_schema_header(payload: Any, expected_type: str) -> SchemaHeader:
    """Read and validate the schema header of a decoded payload.

    A bare JSON array is the legacy layout (no header) and reports version 0.0.

    Raises:
        InvalidSchemaError: If the payload has the wrong shape or schema type.
    """
    if isinstance(payload, list):
        logger.debug("Legacy payload detected (bare array) for %s", expected_type)
        return SchemaHeader(schema_type=expected_type, schema_version=LEGACY_VERSION)

    if not isinstance(payload, dict):
        raise InvalidSchemaError(
            f"Expected object or array, got {type(payload).__name__}"
        )

    schema_type = payload.get("_schema")
    schema_version = payload.get("_version")
    if schema_type is None or schema_version is None:
        raise InvalidSchemaError("Payload is missing _schema/_version fields")

    if schema_type != expected_type:
        raise InvalidSchemaError(
            f"Expected schema '{expected_type}', got '{schema_type}'"
        )

    return SchemaHeader(schema_type=schema_type, schema_version=str(schema_version))


def write_schema_fields(schema_type: str) -> dict[str, str]:
    """Get schema fields to include in a payload header.

    Raises:
        ValueError: If schema_type is unknown.
    """
    if schema_type not in CURRENT_VERSIONS:
        raise ValueError(f"Unknown schema type: {schema_type}")

    return {
        "_schema": schema_type,
        "_version": CURRENT_VERSIONS[schema_type],
    }


# Migration registry
Migrator = Callable[[Any], dict[str, Any]]
MIGRATORS: dict[tuple[str, str, str], Migrator] = {}


def register_migrator(
    schema_type: str, from_version: str, to_version: str
) -> Callable[[Migrator], Migrator]:
    """Decorator to register a payload migration function.

    Example:
        @register_migrator("roadmap_history", "1.0", "2.0")
        def migrate_history_1_to_2(payload: Any) -> dict[str, Any]:
            ...
    """

    def decorator(fn: Migrator) -> Migrator:
        key = (schema_type, from_version, to_version)
        MIGRATORS[key] = fn
        logger.debug(
            "Registered migrator: %s %s -> %s", schema_type, from_version, to_version
        )
        return fn

    return decorator


def migrate_if_needed(payload: Any, schema_type: str) -> tuple[dict[str, Any], bool]:
    """Bring a decoded payload to the current schema version.

    Returns:
        Tuple of (current payload, whether a migration ran).

    Raises:
        MigrationNotFoundError: If no migration path exists.
        InvalidSchemaError: If the payload is not a recognizable slot payload.
    """
    header = read_schema_header(payload, schema_type)
    if header.is_current:
        return payload, False

    current_version = CURRENT_VERSIONS[schema_type]
    migrator = MIGRATORS.get((schema_type, header.schema_version, current_version))
    if migrator is None:
        raise MigrationNotFoundError(
            schema_type, header.schema_version, current_version
        )

    logger.info(
        "Migrating %s payload from %s to %s",
        schema_type,
        header.schema_version,
        current_version,
    )
    return migrator(payload), True


# =============================================================================
# Legacy Migrations (0.0 -> 1.0)
# =============================================================================


@register_migrator("roadmap_history", LEGACY_VERSION, "1.0")
def _migrate_history_legacy(payload: Any) -> dict[str, Any]:
    """Wrap a bare roadmap array in a versioned envelope.

    Legacy format: [{"id": ..., "generatedAt": 1700000000000, ...}, ...]
    New format: {"_schema": "roadmap_history", "_version": "1.0", "roadmaps": [...]}

    Entry-level camelCase fields are handled by restore_roadmap.
    """
    return {**write_schema_fields("roadmap_history"), "roadmaps": list(payload)}
