"""
RoutePilot - Rule Engine for Natural-Language Delivery Routing Rules

Operators describe routing logic in plain language ("send big orders to
DoorDash"); an upstream step turns that into a condition tree. RoutePilot
is the engine that decides whether that tree may be trusted and runs it.

Key Features:
- Field catalog: which data paths each rule category may reference
- Condition trees: a small JSON-logic language (var, comparisons, and/or, if)
- Validation of field references, reported as data
- Deterministic evaluation against live order data
- Plain-English explanations of any tree
- Simulation over sample orders before a rule goes live

Quick Start:
    from routepilot import evaluate, preview_rule

    tree = {"if": [{">": [{"var": "order.order_value"}, 15000]}, "doordash", "uber"]}

    preview = preview_rule(tree, "provider_selection")
    print(preview.explanation)
    # If order.order_value > 15000 → doordash, otherwise → uber

    evaluate(tree, {"order": {"order_value": 25000}})
    # 'doordash'

Version: 1.0.0
"""
from __future__ import annotations

__version__ = "1.0.0"
__author__ = "RoutePilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    Branch,
    Comparison,
    ComparisonOperator,
    ConditionNode,
    FieldCatalog,
    FieldDescriptor,
    FieldGroup,
    FieldKind,
    FieldRef,
    Literal,
    LogicalAnd,
    LogicalOperator,
    LogicalOr,
    RuleCategory,
    RulePreview,
    ValidationReport,
    parse_condition,
    to_json,
)

# =============================================================================
# Field Catalog
# =============================================================================
from .catalog import (
    FieldCatalogLoader,
    get_field_catalog,
    load_field_catalog,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    RuleEvaluator,
    RuleExplainer,
    RulePreviewer,
    RuleSimulator,
    RuleValidator,
    evaluate,
    explain,
    normalize_path,
    preview_rule,
    referenced_fields,
    simulate,
    validate,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CatalogLoadError,
    CatalogValidationError,
    CatalogVersionMismatch,
    ConditionDepthError,
    InvalidConditionError,
    RoutePilotError,
    UnknownCategoryError,
)

__all__ = [
    "__version__",
    # Models
    "RuleCategory",
    "FieldKind",
    "ComparisonOperator",
    "LogicalOperator",
    "FieldCatalog",
    "FieldDescriptor",
    "FieldGroup",
    "ConditionNode",
    "Literal",
    "FieldRef",
    "Comparison",
    "LogicalAnd",
    "LogicalOr",
    "Branch",
    "parse_condition",
    "to_json",
    "ValidationReport",
    "RulePreview",
    # Catalog
    "FieldCatalogLoader",
    "get_field_catalog",
    "load_field_catalog",
    # Engine
    "RuleValidator",
    "RuleEvaluator",
    "RuleExplainer",
    "RuleSimulator",
    "RulePreviewer",
    "validate",
    "evaluate",
    "explain",
    "simulate",
    "preview_rule",
    "normalize_path",
    "referenced_fields",
    # Exceptions
    "RoutePilotError",
    "CatalogLoadError",
    "CatalogValidationError",
    "CatalogVersionMismatch",
    "UnknownCategoryError",
    "InvalidConditionError",
    "ConditionDepthError",
]
