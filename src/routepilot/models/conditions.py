"""
RoutePilot Condition Trees

A Condition Tree is the restricted, JSON-logic-style expression language a
routing rule is written in. The wire shape is plain JSON where object keys
double as operator tags:

    {"if": [{">": [{"var": "order.order_value"}, 15000]}, "doordash", "uber"]}

In Python the tree is a closed sum type with one frozen dataclass per node
kind. Every component walks it with an exhaustive isinstance match.

Node kinds:
- Literal: scalar (str, int, float, bool, None); also used as outcome label
- FieldRef: {"var": "<path>"}
- Comparison: {">" | "<" | ">=" | "<=" | "==" | "!=": [left, right]}
- LogicalAnd / LogicalOr: {"and" | "or": [child, ...]}
- Branch: {"if": [test, then, else]}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .. import config
from ..exceptions import ConditionDepthError, InvalidConditionError
from .enums import IF_TAG, VAR_TAG, ComparisonOperator, LogicalOperator


Scalar = Union[str, int, float, bool, None]


# =============================================================================
# Node Kinds
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """A scalar value, or an outcome label such as a provider name."""
    value: Scalar

    def to_json(self) -> Scalar:
        return self.value


@dataclass(frozen=True)
class FieldRef:
    """Reference to a field path, resolved against a data document."""
    path: str

    def to_json(self) -> dict[str, Any]:
        return {VAR_TAG: self.path}


@dataclass(frozen=True)
class Comparison:
    """Binary comparison of two child nodes."""
    operator: ComparisonOperator
    left: ConditionNode
    right: ConditionNode

    def to_json(self) -> dict[str, Any]:
        return {self.operator.value: [self.left.to_json(), self.right.to_json()]}


@dataclass(frozen=True)
class LogicalAnd:
    """True when every child is truthy. Short-circuits left to right."""
    children: tuple[ConditionNode, ...]

    operator = LogicalOperator.AND

    def to_json(self) -> dict[str, Any]:
        return {self.operator.value: [c.to_json() for c in self.children]}


@dataclass(frozen=True)
class LogicalOr:
    """True when any child is truthy. Short-circuits left to right."""
    children: tuple[ConditionNode, ...]

    operator = LogicalOperator.OR

    def to_json(self) -> dict[str, Any]:
        return {self.operator.value: [c.to_json() for c in self.children]}


@dataclass(frozen=True)
class Branch:
    """If/then/else. `then` and `otherwise` are usually outcome literals."""
    test: ConditionNode
    then: ConditionNode
    otherwise: ConditionNode

    def to_json(self) -> dict[str, Any]:
        return {IF_TAG: [self.test.to_json(), self.then.to_json(), self.otherwise.to_json()]}


ConditionNode = Union[Literal, FieldRef, Comparison, LogicalAnd, LogicalOr, Branch]

NODE_TYPES = (Literal, FieldRef, Comparison, LogicalAnd, LogicalOr, Branch)

_COMPARISON_TAGS = {op.value: op for op in ComparisonOperator}
_LOGICAL_TAGS = {op.value: op for op in LogicalOperator}


def is_scalar(value: Any) -> bool:
    """Check if a wire value is a literal scalar."""
    return value is None or isinstance(value, (str, int, float, bool))


# =============================================================================
# Wire Parsing
# =============================================================================

def parse_condition(raw: Any, max_depth: Optional[int] = None) -> ConditionNode:
    """
    Build a Condition Tree from its JSON wire shape.

    Already-parsed nodes are returned unchanged.

    Args:
        raw: Decoded JSON value (dict, scalar) or a ConditionNode
        max_depth: Nesting limit (defaults to ROUTEPILOT_MAX_TREE_DEPTH)

    Returns:
        The root ConditionNode

    Raises:
        InvalidConditionError: If any node violates the grammar
        ConditionDepthError: If the tree is nested deeper than max_depth
    """
    if isinstance(raw, NODE_TYPES):
        return raw
    limit = config.ROUTEPILOT_MAX_TREE_DEPTH if max_depth is None else max_depth
    return _parse_node(raw, "$", 1, limit)


def _parse_node(raw: Any, location: str, depth: int, limit: int) -> ConditionNode:
    if depth > limit:
        raise ConditionDepthError(
            message=f"Condition tree exceeds maximum depth of {limit}",
            details={"node": location, "max_depth": limit},
        )

    if isinstance(raw, NODE_TYPES):
        return raw

    if is_scalar(raw):
        return Literal(raw)

    if isinstance(raw, (list, tuple)):
        raise InvalidConditionError(
            message="Arrays are not valid condition nodes",
            details={"node": location},
        )

    if not isinstance(raw, dict):
        raise InvalidConditionError(
            message=f"Unsupported condition node type: {type(raw).__name__}",
            details={"node": location},
        )

    if len(raw) != 1:
        raise InvalidConditionError(
            message=f"Condition node must have exactly one operator key, found {len(raw)}",
            details={"node": location, "keys": sorted(str(k) for k in raw)},
        )

    tag, args = next(iter(raw.items()))
    here = f"{location}.{tag}"

    if tag == VAR_TAG:
        if not isinstance(args, str):
            raise InvalidConditionError(
                message="Field reference path must be a string",
                details={"node": here, "path": repr(args)},
            )
        return FieldRef(args)

    if tag in _COMPARISON_TAGS:
        left, right = _expect_args(tag, args, here, 2)
        return Comparison(
            operator=_COMPARISON_TAGS[tag],
            left=_parse_node(left, f"{here}[0]", depth + 1, limit),
            right=_parse_node(right, f"{here}[1]", depth + 1, limit),
        )

    if tag in _LOGICAL_TAGS:
        if not isinstance(args, (list, tuple)) or not args:
            raise InvalidConditionError(
                message=f"Operator '{tag}' requires a non-empty list of conditions",
                details={"node": here},
            )
        children = tuple(
            _parse_node(child, f"{here}[{i}]", depth + 1, limit)
            for i, child in enumerate(args)
        )
        if _LOGICAL_TAGS[tag] == LogicalOperator.AND:
            return LogicalAnd(children)
        return LogicalOr(children)

    if tag == IF_TAG:
        test, then, otherwise = _expect_args(tag, args, here, 3)
        return Branch(
            test=_parse_node(test, f"{here}[0]", depth + 1, limit),
            then=_parse_node(then, f"{here}[1]", depth + 1, limit),
            otherwise=_parse_node(otherwise, f"{here}[2]", depth + 1, limit),
        )

    raise InvalidConditionError(
        message=f"Unknown operator: {tag!r}",
        details={"node": location, "operator": str(tag)},
    )


def _expect_args(tag: str, args: Any, location: str, arity: int) -> list[Any]:
    """Check an operator's argument list has exactly `arity` entries."""
    if not isinstance(args, (list, tuple)) or len(args) != arity:
        found = len(args) if isinstance(args, (list, tuple)) else "non-list"
        raise InvalidConditionError(
            message=f"Operator '{tag}' requires exactly {arity} arguments, got {found}",
            details={"node": location, "operator": tag},
        )
    return list(args)


def to_json(node: Union[ConditionNode, Any]) -> Any:
    """Return the wire shape of a tree. Raw wire values pass through."""
    if isinstance(node, NODE_TYPES):
        return node.to_json()
    return node


# =============================================================================
# Helper Functions for Building Trees
# =============================================================================

def _node(value: Any) -> ConditionNode:
    return value if isinstance(value, NODE_TYPES) else Literal(value)


def VAR(path: str) -> FieldRef:
    """
    Create a field reference.

    Example:
        VAR("order.order_value")
    """
    return FieldRef(path)


def IF(test: Any, then: Any, otherwise: Any) -> Branch:
    """
    Create a branch. Plain values become literals.

    Example:
        IF(GT(VAR("order.order_value"), 15000), "doordash", "uber")
    """
    return Branch(_node(test), _node(then), _node(otherwise))


def AND(*conditions: Any) -> LogicalAnd:
    """Create an AND of one or more conditions."""
    return LogicalAnd(tuple(_node(c) for c in conditions))


def OR(*conditions: Any) -> LogicalOr:
    """Create an OR of one or more conditions."""
    return LogicalOr(tuple(_node(c) for c in conditions))


def COMPARE(operator: ComparisonOperator, left: Any, right: Any) -> Comparison:
    """Create a comparison. Plain values become literals."""
    return Comparison(operator, _node(left), _node(right))


def GT(left: Any, right: Any) -> Comparison:
    """left > right"""
    return COMPARE(ComparisonOperator.GT, left, right)


def GTE(left: Any, right: Any) -> Comparison:
    """left >= right"""
    return COMPARE(ComparisonOperator.GTE, left, right)


def LT(left: Any, right: Any) -> Comparison:
    """left < right"""
    return COMPARE(ComparisonOperator.LT, left, right)


def LTE(left: Any, right: Any) -> Comparison:
    """left <= right"""
    return COMPARE(ComparisonOperator.LTE, left, right)


def EQ(left: Any, right: Any) -> Comparison:
    """left == right"""
    return COMPARE(ComparisonOperator.EQ, left, right)


def NE(left: Any, right: Any) -> Comparison:
    """left != right"""
    return COMPARE(ComparisonOperator.NE, left, right)
