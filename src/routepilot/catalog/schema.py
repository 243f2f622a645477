"""
RoutePilot Field Catalog Schemas

Pydantic models for validating the field catalog YAML/JSON file.

These schemas define the on-disk structure of the catalog. They map to the
domain models in routepilot.models.catalog.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

RuleCategoryValue = Literal["provider_selection", "quote_evaluation"]

FieldKindValue = Literal["string", "number", "boolean", "object", "array"]

# Dotted segments, each optionally followed by one or more `[]`
PATH_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\[\])*(\.[A-Za-z_][A-Za-z0-9_]*(\[\])*)*$")


# =============================================================================
# Schemas
# =============================================================================

class FieldDescriptorSchema(BaseModel):
    """Schema for one field of a composite group."""
    path: str = Field(..., description="Dotted path, '[]' marks array elements")
    kind: FieldKindValue = Field(..., description="JSON kind of the value")
    description: Optional[str] = Field(None, description="Human-readable description")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not PATH_PATTERN.match(v):
            raise ValueError(f"Invalid field path: '{v}'")
        return v


class FieldGroupSchema(BaseModel):
    """
    Schema for a field group.

    A leaf group omits `fields` and declares its own `kind`; its name is
    the path. A composite group lists its fields.
    """
    name: str = Field(..., description="Group name; the path for leaf groups")
    categories: list[RuleCategoryValue] = Field(..., min_length=1)
    kind: Optional[FieldKindValue] = Field(None, description="Kind of a leaf group")
    description: Optional[str] = Field(None)
    fields: Optional[list[FieldDescriptorSchema]] = Field(None)

    @model_validator(mode="after")
    def validate_structure(self) -> "FieldGroupSchema":
        """Validate leaf vs composite shape."""
        if self.fields is None:
            if not PATH_PATTERN.match(self.name):
                raise ValueError(f"Leaf group name is not a valid path: '{self.name}'")
            if self.kind is None:
                raise ValueError(f"Leaf group '{self.name}' requires 'kind'")
        else:
            if not self.fields:
                raise ValueError(f"Composite group '{self.name}' has an empty 'fields' list")
            if self.kind is not None:
                raise ValueError(f"Composite group '{self.name}' cannot declare 'kind'")
        return self


class FieldCatalogSchema(BaseModel):
    """Schema for the whole field catalog file."""
    schema_version: str = Field(SCHEMA_VERSION)
    groups: list[FieldGroupSchema] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_unique_paths(self) -> "FieldCatalogSchema":
        """Every path belongs to exactly one group."""
        seen: dict[str, str] = {}
        duplicates: list[str] = []
        for group in self.groups:
            paths = [group.name] if group.fields is None else [f.path for f in group.fields]
            for path in paths:
                if path in seen:
                    duplicates.append(f"'{path}' in groups '{seen[path]}' and '{group.name}'")
                else:
                    seen[path] = group.name
        if duplicates:
            raise ValueError("Duplicate field paths: " + "; ".join(duplicates))
        return self


# =============================================================================
# Validation Functions
# =============================================================================

def validate_field_catalog(data: Any) -> FieldCatalogSchema:
    """
    Validate raw catalog data.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    if isinstance(data, list):
        data = {"groups": data}
    return FieldCatalogSchema.model_validate(data)


def check_schema_version(data: Any) -> bool:
    """Check the major schema version matches SCHEMA_VERSION."""
    if not isinstance(data, dict):
        return True
    version = str(data.get("schema_version", SCHEMA_VERSION))
    return version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
