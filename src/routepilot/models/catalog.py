"""
RoutePilot Field Catalog Model

The Field Catalog is the static registry of which data paths exist and in
which rule categories a rule may reference them. It is immutable once built:
groups and fields are frozen dataclasses held in tuples.

Paths are dotted, with `[]` marking an array element:

    order.order_value
    provider_quotes[].fee
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .enums import FieldKind, RuleCategory


@dataclass(frozen=True)
class FieldDescriptor:
    """One declarable unit of data."""
    path: str
    kind: FieldKind
    categories: frozenset[RuleCategory] = field(default_factory=frozenset)
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"path": self.path, "kind": self.kind.value}
        if self.description:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class FieldGroup:
    """
    A named group of fields.

    A leaf group has no descriptors and exposes a single path equal to its
    own name. A composite group exposes the paths of its descriptors.
    """
    name: str
    categories: tuple[RuleCategory, ...]
    fields: tuple[FieldDescriptor, ...] = ()
    kind: Optional[FieldKind] = None
    description: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return not self.fields

    @property
    def paths(self) -> tuple[str, ...]:
        if self.is_leaf:
            return (self.name,)
        return tuple(f.path for f in self.fields)

    def applies_to(self, category: RuleCategory) -> bool:
        return category in self.categories

    def descriptors(self) -> tuple[FieldDescriptor, ...]:
        """Descriptors exposed by the group; a leaf group yields one synthesised."""
        if self.is_leaf:
            return (
                FieldDescriptor(
                    path=self.name,
                    kind=self.kind or FieldKind.STRING,
                    categories=frozenset(self.categories),
                    description=self.description,
                ),
            )
        return self.fields

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "categories": [c.value for c in self.categories],
        }
        if self.description:
            result["description"] = self.description
        if self.is_leaf:
            result["kind"] = (self.kind or FieldKind.STRING).value
        else:
            result["fields"] = [f.to_dict() for f in self.fields]
        return result


@dataclass(frozen=True)
class FieldCatalog:
    """
    The full ordered list of field groups.

    Usage:
        catalog = get_field_catalog()
        allowed = catalog.paths_for("provider_selection")
        prompt_text = catalog.serialize()
    """
    groups: tuple[FieldGroup, ...]
    schema_version: str = "1.0.0"
    source: Optional[str] = None

    def paths_for(self, category: Union[str, RuleCategory]) -> frozenset[str]:
        """
        Derive the set of paths a rule of `category` may reference.

        Returns a new set on every call.

        Raises:
            UnknownCategoryError: If category is not a RuleCategory
        """
        cat = RuleCategory.coerce(category)
        paths: set[str] = set()
        for group in self.groups:
            if not group.applies_to(cat):
                continue
            paths.update(group.paths)
        return frozenset(paths)

    def fields_for(self, category: Union[str, RuleCategory]) -> list[FieldDescriptor]:
        """Descriptors legal for `category`, in catalog order."""
        cat = RuleCategory.coerce(category)
        result: list[FieldDescriptor] = []
        for group in self.groups:
            if group.applies_to(cat):
                result.extend(group.descriptors())
        return result

    def get_group(self, name: str) -> Optional[FieldGroup]:
        for group in self.groups:
            if group.name == name:
                return group
        return None

    @property
    def all_paths(self) -> frozenset[str]:
        return frozenset(p for g in self.groups for p in g.paths)

    def to_list(self) -> list[dict[str, Any]]:
        return [g.to_dict() for g in self.groups]

    def serialize(self) -> str:
        """The whole catalog as indented JSON, unfiltered, in catalog order."""
        return json.dumps(self.to_list(), indent=2)
