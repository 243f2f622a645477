"""
RoutePilot Field Catalog

Schema validation and loading for the field catalog.

The field catalog is a YAML or JSON file listing every data path a rule may
reference, grouped, with the rule categories each group is legal in.

Usage:
    from routepilot.catalog import get_field_catalog

    catalog = get_field_catalog()
    allowed = catalog.paths_for("quote_evaluation")
    prompt_text = catalog.serialize()
"""
from __future__ import annotations

from .loader import (
    FieldCatalogLoader,
    get_field_catalog,
    load_field_catalog,
    load_field_catalog_from_string,
    reset_field_catalog,
)
from .schema import (
    SCHEMA_VERSION,
    FieldCatalogSchema,
    FieldDescriptorSchema,
    FieldGroupSchema,
    check_schema_version,
    validate_field_catalog,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "FieldCatalogLoader",
    "get_field_catalog",
    "reset_field_catalog",
    "load_field_catalog",
    "load_field_catalog_from_string",
    # Validation
    "validate_field_catalog",
    "check_schema_version",
    # Schemas
    "FieldCatalogSchema",
    "FieldGroupSchema",
    "FieldDescriptorSchema",
]
