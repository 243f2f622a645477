"""
RoutePilot Domain Models

Re-exports the condition tree, field catalog, enumeration and result types.
"""
from __future__ import annotations

from .catalog import FieldCatalog, FieldDescriptor, FieldGroup
from .conditions import (
    AND,
    COMPARE,
    EQ,
    GT,
    GTE,
    IF,
    LT,
    LTE,
    NE,
    NODE_TYPES,
    OR,
    VAR,
    Branch,
    Comparison,
    ConditionNode,
    FieldRef,
    Literal,
    LogicalAnd,
    LogicalOr,
    Scalar,
    is_scalar,
    parse_condition,
    to_json,
)
from .enums import (
    IF_TAG,
    VAR_TAG,
    ComparisonOperator,
    FieldKind,
    LogicalOperator,
    RuleCategory,
)
from .results import RulePreview, ValidationReport

__all__ = [
    # Enums
    "RuleCategory",
    "FieldKind",
    "ComparisonOperator",
    "LogicalOperator",
    "VAR_TAG",
    "IF_TAG",
    # Catalog
    "FieldCatalog",
    "FieldDescriptor",
    "FieldGroup",
    # Condition tree
    "ConditionNode",
    "Scalar",
    "Literal",
    "FieldRef",
    "Comparison",
    "LogicalAnd",
    "LogicalOr",
    "Branch",
    "NODE_TYPES",
    "is_scalar",
    "parse_condition",
    "to_json",
    # Builders
    "VAR",
    "IF",
    "AND",
    "OR",
    "COMPARE",
    "GT",
    "GTE",
    "LT",
    "LTE",
    "EQ",
    "NE",
    # Results
    "ValidationReport",
    "RulePreview",
]
