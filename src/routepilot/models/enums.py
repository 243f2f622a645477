"""
RoutePilot Enumerations

All enumeration types used throughout the RoutePilot rule engine.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum
from typing import Union

from ..exceptions import UnknownCategoryError


# =============================================================================
# Rule Categories
# =============================================================================

class RuleCategory(str, Enum):
    """
    Closed set of rule categories.

    A category decides which catalog fields a rule may reference and what
    kind of outcome the rule produces.
    """
    PROVIDER_SELECTION = "provider_selection"
    QUOTE_EVALUATION = "quote_evaluation"

    @property
    def result_type(self) -> str:
        """Downstream result type produced by rules of this category."""
        return _RESULT_TYPES[self]

    @classmethod
    def coerce(cls, value: Union[str, RuleCategory]) -> RuleCategory:
        """Convert a category string, raising UnknownCategoryError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownCategoryError(
                message=f"Unknown rule category: {value!r}",
                details={"valid": [c.value for c in cls]},
            )


_RESULT_TYPES = {
    RuleCategory.PROVIDER_SELECTION: "provider",
    RuleCategory.QUOTE_EVALUATION: "quote_provider",
}


# =============================================================================
# Field Kinds
# =============================================================================

class FieldKind(str, Enum):
    """JSON kind of a catalog field."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


# =============================================================================
# Operators
# =============================================================================

class ComparisonOperator(str, Enum):
    """Binary comparison operators. Values are the wire tags."""
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    EQ = "=="
    NE = "!="

    @property
    def is_ordering(self) -> bool:
        """Ordering operators only compare numbers."""
        return self in _ORDERING_OPERATORS


_ORDERING_OPERATORS = frozenset({
    ComparisonOperator.GT,
    ComparisonOperator.LT,
    ComparisonOperator.GTE,
    ComparisonOperator.LTE,
})


class LogicalOperator(str, Enum):
    """N-ary logical combinators."""
    AND = "and"
    OR = "or"


# Wire tags for the two remaining node kinds
VAR_TAG = "var"
IF_TAG = "if"
