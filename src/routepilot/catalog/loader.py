"""
RoutePilot Field Catalog Loader

Loads and validates the field catalog from a YAML or JSON file and converts
the Pydantic schema models to RoutePilot domain models.

The process-wide catalog is loaded once, behind a lock, on first use and is
never reloaded. Components that need a catalog take one as a parameter and
fall back to get_field_catalog().
"""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .. import config
from ..exceptions import CatalogLoadError, CatalogValidationError, CatalogVersionMismatch
from ..models import FieldCatalog, FieldDescriptor, FieldGroup, FieldKind, RuleCategory
from .schema import (
    SCHEMA_VERSION,
    FieldCatalogSchema,
    FieldDescriptorSchema,
    FieldGroupSchema,
    check_schema_version,
    validate_field_catalog,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_descriptor(
    schema: FieldDescriptorSchema,
    categories: frozenset[RuleCategory],
) -> FieldDescriptor:
    """Convert FieldDescriptorSchema to FieldDescriptor model."""
    return FieldDescriptor(
        path=schema.path,
        kind=FieldKind(schema.kind),
        categories=categories,
        description=schema.description,
    )


def _convert_group(schema: FieldGroupSchema) -> FieldGroup:
    """Convert FieldGroupSchema to FieldGroup model."""
    categories = tuple(RuleCategory(c) for c in schema.categories)
    category_set = frozenset(categories)
    return FieldGroup(
        name=schema.name,
        categories=categories,
        fields=tuple(_convert_descriptor(f, category_set) for f in (schema.fields or [])),
        kind=FieldKind(schema.kind) if schema.kind else None,
        description=schema.description,
    )


def _convert_catalog(schema: FieldCatalogSchema, source: Optional[str] = None) -> FieldCatalog:
    """Convert FieldCatalogSchema to FieldCatalog model."""
    return FieldCatalog(
        groups=tuple(_convert_group(g) for g in schema.groups),
        schema_version=schema.schema_version,
        source=source,
    )


# =============================================================================
# Field Catalog Loader
# =============================================================================

class FieldCatalogLoader:
    """
    Loads the field catalog from a YAML or JSON file.

    Usage:
        loader = FieldCatalogLoader()
        catalog = loader.load("path/to/field_catalog.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject catalogs with incompatible schema versions
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> FieldCatalog:
        """
        Load the field catalog from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Loaded FieldCatalog

        Raises:
            CatalogLoadError: If the file cannot be read or parsed
            CatalogValidationError: If validation fails
            CatalogVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            logger.error("Failed to load field catalog from %s: %s", path, e)
            raise CatalogLoadError(
                message=f"Failed to load field catalog: {e}",
                details={"path": str(path), "error": str(e)},
            )

        catalog = self.load_data(data, source=str(path))
        logger.info(
            "Loaded field catalog: %d groups, %d paths from %s",
            len(catalog.groups), len(catalog.all_paths), path,
        )
        return catalog

    def load_data(self, data: Any, source: Optional[str] = None) -> FieldCatalog:
        """Validate already-decoded catalog data and convert it."""
        if data is None:
            raise CatalogLoadError(
                message="Field catalog is empty",
                details={"path": source},
            )

        if self.strict_version and not check_schema_version(data):
            catalog_version = data.get("schema_version", "unknown")
            raise CatalogVersionMismatch(
                message=f"Schema version mismatch: catalog has {catalog_version}, expected {SCHEMA_VERSION}",
                details={
                    "catalog_version": catalog_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_field_catalog(data)
        except ValidationError as e:
            logger.error("Field catalog validation failed: %d errors", e.error_count())
            raise CatalogValidationError(
                message=f"Field catalog validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
            )

        return _convert_catalog(schema, source)

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)


# =============================================================================
# Process-wide Catalog
# =============================================================================

_catalog: Optional[FieldCatalog] = None
_catalog_lock = threading.Lock()


def get_field_catalog() -> FieldCatalog:
    """
    Return the process-wide field catalog, loading it on first call.

    Loaded from ROUTEPILOT_CATALOG_PATH exactly once; concurrent first
    calls wait on a lock instead of loading twice. A load failure raises
    and leaves the catalog unset.
    """
    global _catalog

    if _catalog is not None:
        return _catalog

    with _catalog_lock:
        if _catalog is None:
            _catalog = FieldCatalogLoader().load(config.ROUTEPILOT_CATALOG_PATH)
        return _catalog


def reset_field_catalog() -> None:
    """Forget the process-wide catalog. For tests only."""
    global _catalog
    with _catalog_lock:
        _catalog = None


# =============================================================================
# Convenience Functions
# =============================================================================

def load_field_catalog(path: Union[str, Path]) -> FieldCatalog:
    """
    Load a field catalog from a file.

    Convenience function that creates a temporary loader.
    """
    return FieldCatalogLoader().load(path)


def load_field_catalog_from_string(content: str, format: str = "yaml") -> FieldCatalog:
    """
    Load a field catalog from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogLoadError(
            message=f"Failed to parse field catalog: {e}",
            details={"format": format},
        )
    return FieldCatalogLoader().load_data(data, source="<string>")
