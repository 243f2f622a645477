"""
RoutePilot Rule Validator

Checks that every field a condition tree references is allowed for the
rule's category.

Key features:
- Pre-order, left-to-right extraction of field references
- Index-agnostic matching: provider_quotes[0].fee matches provider_quotes[].fee
- Policy violations are returned as data, never raised
- Tolerates malformed trees (structure is the evaluator's concern)
"""
from __future__ import annotations

import re
from typing import Any, Optional, Union

from .. import config
from ..catalog import get_field_catalog
from ..models import (
    VAR_TAG,
    Branch,
    Comparison,
    ConditionNode,
    FieldCatalog,
    FieldRef,
    LogicalAnd,
    LogicalOr,
    RuleCategory,
    ValidationReport,
)


_INDEX_PATTERN = re.compile(r"\[\d+\]")


# =============================================================================
# Path Helpers
# =============================================================================

def normalize_path(path: str) -> str:
    """
    Replace every concrete array index with an empty bracket pair.

    Examples:
        normalize_path("provider_quotes[0].fee") -> "provider_quotes[].fee"
        normalize_path("provider_quotes[].fee")  -> "provider_quotes[].fee"
    """
    return _INDEX_PATTERN.sub("[]", path)


def referenced_fields(
    tree: Union[ConditionNode, Any],
    max_depth: Optional[int] = None,
) -> list[str]:
    """
    Collect every field path in a tree.

    Order is pre-order, left to right; duplicates are kept. Works on both
    parsed trees and raw wire JSON, and ignores anything malformed. Nodes
    nested deeper than max_depth (defaults to ROUTEPILOT_MAX_TREE_DEPTH)
    are not visited; the evaluator rejects such trees anyway.
    """
    limit = config.ROUTEPILOT_MAX_TREE_DEPTH if max_depth is None else max_depth
    paths: list[str] = []
    # Each wire node is an object holding an argument list: two levels per node
    _collect_fields(tree, paths, 1, 2 * limit)
    return paths


def _collect_fields(raw: Any, paths: list[str], level: int, limit: int) -> None:
    """Recursively collect {"var": "<path>"} references."""
    if level > limit:
        return
    if isinstance(raw, FieldRef):
        if isinstance(raw.path, str):
            paths.append(raw.path)
    elif isinstance(raw, Comparison):
        for child in (raw.left, raw.right):
            _collect_fields(child, paths, level + 2, limit)
    elif isinstance(raw, (LogicalAnd, LogicalOr)):
        for child in raw.children:
            _collect_fields(child, paths, level + 2, limit)
    elif isinstance(raw, Branch):
        for child in (raw.test, raw.then, raw.otherwise):
            _collect_fields(child, paths, level + 2, limit)
    elif isinstance(raw, dict):
        for key, value in raw.items():
            if key == VAR_TAG and isinstance(value, str):
                paths.append(value)
            else:
                _collect_fields(value, paths, level + 1, limit)
    elif isinstance(raw, (list, tuple)):
        for item in raw:
            _collect_fields(item, paths, level + 1, limit)


# =============================================================================
# Rule Validator
# =============================================================================

class RuleValidator:
    """
    Validates condition trees against a field catalog.

    Usage:
        validator = RuleValidator(catalog)
        report = validator.validate(tree, "provider_selection")

        if not report.valid:
            for error in report.errors:
                print(error)
    """

    def __init__(self, catalog: Optional[FieldCatalog] = None):
        self.catalog = catalog or get_field_catalog()

    def validate(
        self,
        tree: Union[ConditionNode, Any],
        category: Union[str, RuleCategory],
    ) -> ValidationReport:
        """
        Check the tree's field references against the category.

        Args:
            tree: Parsed tree or wire JSON
            category: Rule category

        Returns:
            ValidationReport with one error per illegal reference

        Raises:
            UnknownCategoryError: If category is not a RuleCategory
        """
        cat = RuleCategory.coerce(category)
        allowed = self.catalog.paths_for(cat)

        errors = [
            f"Field '{path}' is not available for {cat.value}"
            for path in referenced_fields(tree)
            if normalize_path(path) not in allowed
        ]
        return ValidationReport(valid=not errors, errors=errors)


# =============================================================================
# Convenience Functions
# =============================================================================

def validate(
    tree: Union[ConditionNode, Any],
    category: Union[str, RuleCategory],
    catalog: Optional[FieldCatalog] = None,
) -> ValidationReport:
    """
    Validate a tree's field references for a category.

    Convenience function that creates a temporary validator.
    """
    return RuleValidator(catalog).validate(tree, category)
