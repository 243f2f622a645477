"""
RoutePilot Condition Evaluator

Evaluates condition trees against a data document.

Key features:
- Field path resolution with array indexes (e.g., "provider_quotes[0].fee")
- Missing fields resolve to None and never raise
- Ordering operators only compare numbers; anything else is False
- Strict deep equality (booleans never equal numbers)
- Short-circuit AND/OR, if/then/else branches returning outcome labels
- Structural errors always raise; nothing is silently coerced
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

from .. import config
from ..exceptions import ConditionDepthError, InvalidConditionError
from ..models import (
    Branch,
    Comparison,
    ComparisonOperator,
    ConditionNode,
    FieldRef,
    Literal,
    LogicalAnd,
    LogicalOr,
    parse_condition,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Field Path Resolution
# =============================================================================

_SEGMENT_PATTERN = re.compile(r"([^.\[\]]+)|\[(\d*)\]")
# Key or index, then any run of `[n]` and `.key`
_PATH_PATTERN = re.compile(r"(?:[^.\[\]]+|\[\d*\])(?:\[\d*\]|\.[^.\[\]]+)*")


def is_well_formed_path(path: str) -> bool:
    """Check a field path is a dotted/bracketed path. The empty path is well formed."""
    return path == "" or _PATH_PATTERN.fullmatch(path) is not None


def split_path(path: str) -> list[Union[str, int, None]]:
    """
    Split a field path into keys and indexes.

    A bare `[]` becomes None, which never resolves against a document.
    Assumes a well-formed path; see is_well_formed_path.

    Examples:
        split_path("order.order_value") -> ["order", "order_value"]
        split_path("provider_quotes[1].fee") -> ["provider_quotes", 1, "fee"]
    """
    segments: list[Union[str, int, None]] = []
    for match in _SEGMENT_PATTERN.finditer(path):
        key, index = match.groups()
        if key is not None:
            segments.append(key)
        elif index:
            segments.append(int(index))
        else:
            segments.append(None)
    return segments


def resolve_field_path(document: Any, path: str) -> tuple[Any, bool]:
    """
    Resolve a field path against a document.

    A malformed path (e.g. "order]order_value", "order..value") resolves
    to absent; it is never repaired into a neighbouring well-formed path.

    Returns:
        Tuple of (resolved_value, found). If not found, returns (None, False).
    """
    current = document

    if not is_well_formed_path(path):
        return (None, False)

    for segment in split_path(path):
        if isinstance(segment, str):
            if isinstance(current, Mapping) and segment in current:
                current = current[segment]
            else:
                return (None, False)
        elif isinstance(segment, int):
            if (
                isinstance(current, Sequence)
                and not isinstance(current, str)
                and segment < len(current)
            ):
                current = current[segment]
            else:
                return (None, False)
        else:
            # `[]` wildcard has no single value
            return (None, False)

    return (current, True)


# =============================================================================
# Comparison Operators
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def values_equal(left: Any, right: Any) -> bool:
    """
    Deep structural equality over JSON values.

    Booleans only equal booleans, so `true == 1` is False.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[k], right[k]) for k in left)

    left_seq = isinstance(left, (list, tuple))
    right_seq = isinstance(right, (list, tuple))
    if left_seq or right_seq:
        if not (left_seq and right_seq) or len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    return left == right


def compare_values(operator: ComparisonOperator, left: Any, right: Any) -> bool:
    """
    Apply a comparison operator to two evaluated operands.

    Ordering operators return False unless both operands are numbers,
    which covers missing (None) operands.
    """
    if operator.is_ordering:
        if not (_is_number(left) and _is_number(right)):
            return False
        if operator == ComparisonOperator.GT:
            return left > right
        if operator == ComparisonOperator.LT:
            return left < right
        if operator == ComparisonOperator.GTE:
            return left >= right
        return left <= right

    if operator == ComparisonOperator.EQ:
        return values_equal(left, right)
    if operator == ComparisonOperator.NE:
        return not values_equal(left, right)

    raise InvalidConditionError(
        message=f"Unknown comparison operator: {operator!r}",
        details={"operator": str(operator)},
    )


# =============================================================================
# Rule Evaluator
# =============================================================================

@dataclass
class RuleEvaluator:
    """
    Evaluates condition trees against data documents.

    Usage:
        evaluator = RuleEvaluator()
        provider = evaluator.evaluate(tree, {"order": {"order_value": 25000}})
    """

    max_depth: Optional[int] = None

    @property
    def depth_limit(self) -> int:
        return config.ROUTEPILOT_MAX_TREE_DEPTH if self.max_depth is None else self.max_depth

    def evaluate(self, tree: Union[ConditionNode, Any], document: Any) -> Any:
        """
        Evaluate a tree against a document.

        Args:
            tree: Parsed tree or wire JSON
            document: Decoded JSON data document

        Returns:
            The result value: a boolean for tests, or whatever the chosen
            branch yields (usually an outcome label)

        Raises:
            InvalidConditionError: If the tree is structurally malformed
        """
        try:
            node = parse_condition(tree, max_depth=self.depth_limit)
            return self._evaluate(node, document, 1)
        except InvalidConditionError as e:
            logger.debug("Condition evaluation failed: %s", e)
            raise

    def _evaluate(self, node: ConditionNode, document: Any, depth: int) -> Any:
        """Recursively evaluate a node."""
        if depth > self.depth_limit:
            raise ConditionDepthError(
                message=f"Condition tree exceeds maximum depth of {self.depth_limit}",
                details={"max_depth": self.depth_limit},
            )

        if isinstance(node, Literal):
            return node.value

        if isinstance(node, FieldRef):
            if not isinstance(node.path, str):
                raise InvalidConditionError(
                    message="Field reference path must be a string",
                    details={"path": repr(node.path)},
                )
            value, _ = resolve_field_path(document, node.path)
            return value

        if isinstance(node, Comparison):
            left = self._evaluate(node.left, document, depth + 1)
            right = self._evaluate(node.right, document, depth + 1)
            return compare_values(node.operator, left, right)

        if isinstance(node, LogicalAnd):
            self._require_children(node)
            for child in node.children:
                if not self._evaluate(child, document, depth + 1):
                    return False
            return True

        if isinstance(node, LogicalOr):
            self._require_children(node)
            for child in node.children:
                if self._evaluate(child, document, depth + 1):
                    return True
            return False

        if isinstance(node, Branch):
            if self._evaluate(node.test, document, depth + 1):
                return self._evaluate(node.then, document, depth + 1)
            return self._evaluate(node.otherwise, document, depth + 1)

        raise InvalidConditionError(
            message=f"Unsupported condition node: {type(node).__name__}",
        )

    @staticmethod
    def _require_children(node: Union[LogicalAnd, LogicalOr]) -> None:
        if not node.children:
            raise InvalidConditionError(
                message=f"Operator '{node.operator.value}' requires at least one condition",
                details={"operator": node.operator.value},
            )


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate(tree: Union[ConditionNode, Any], document: Any) -> Any:
    """
    Evaluate a tree against a document.

    Convenience function that creates a temporary evaluator.
    """
    return RuleEvaluator().evaluate(tree, document)


def check_condition(tree: Union[ConditionNode, Any], document: Any) -> bool:
    """Evaluate a tree and coerce the result to a boolean."""
    return bool(evaluate(tree, document))
