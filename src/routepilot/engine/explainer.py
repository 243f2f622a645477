"""
RoutePilot Rule Explainer

Renders a condition tree as a plain-English sentence:

    {"if": [{">": [{"var": "order.order_value"}, 15000]}, "doordash", "uber"]}
    -> "If order.order_value > 15000 → doordash, otherwise → uber"

The explanation is diagnostic, not authoritative: it never raises. Any
node it does not recognise (unknown operator, wrong arity, non-string
path) is shown as compact JSON so an explanation is always available,
even for a tree the evaluator would reject. No parentheses are added, so
nested and/or combinations may read ambiguously.
"""
from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Optional

from .. import config
from ..models import (
    IF_TAG,
    NODE_TYPES,
    VAR_TAG,
    Branch,
    Comparison,
    ComparisonOperator,
    FieldRef,
    Literal,
    LogicalAnd,
    LogicalOperator,
    LogicalOr,
    is_scalar,
)

_COMPARISON_TAGS = frozenset(op.value for op in ComparisonOperator)
_JOINERS = {
    LogicalOperator.AND.value: " and ",
    LogicalOperator.OR.value: " or ",
}


_ELIDED = "…"


def render_literal(value: Any) -> str:
    """Render a scalar the way rule authors write it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value):
        if value.is_integer():
            return str(int(value))
        # Plain decimal, never exponent notation (1e-07 -> 0.0000001)
        return format(Decimal(repr(value)), "f")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return render_raw(value)


def render_raw(value: Any, max_nesting: Optional[int] = None) -> str:
    """
    Compact JSON for anything the explainer cannot put into words.

    Containers nested deeper than max_nesting (defaults to
    ROUTEPILOT_MAX_TREE_DEPTH) are elided as "…", so the output stays
    bounded for arbitrarily deep input.
    """
    limit = config.ROUTEPILOT_MAX_TREE_DEPTH if max_nesting is None else max_nesting
    try:
        bounded = _bounded(value, limit)
    except (AttributeError, TypeError, RecursionError):
        return _ELIDED
    try:
        return json.dumps(bounded, separators=(",", ":"), ensure_ascii=False, default=repr)
    except (TypeError, ValueError):
        return repr(bounded)


def _wire_level(node: Any) -> Any:
    """One level of a parsed node's wire shape; children stay as nodes."""
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, FieldRef):
        return {VAR_TAG: node.path}
    if isinstance(node, Comparison):
        return {node.operator.value: [node.left, node.right]}
    if isinstance(node, (LogicalAnd, LogicalOr)):
        return {node.operator.value: list(node.children)}
    return {IF_TAG: [node.test, node.then, node.otherwise]}


def _bounded(value: Any, remaining: int) -> Any:
    """Copy of value with containers below `remaining` levels elided."""
    if isinstance(value, NODE_TYPES):
        value = _wire_level(value)
    if isinstance(value, dict):
        if remaining <= 0:
            return _ELIDED
        return {k: _bounded(v, remaining - 1) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        if remaining <= 0:
            return _ELIDED
        return [_bounded(v, remaining - 1) for v in value]
    return value


class RuleExplainer:
    """
    Renders condition trees as text.

    Usage:
        explainer = RuleExplainer()
        print(explainer.explain(tree))
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = config.ROUTEPILOT_MAX_TREE_DEPTH if max_depth is None else max_depth

    def explain(self, tree: Any) -> str:
        """Render a parsed tree or wire JSON. Never raises."""
        return self._render(tree, 1)

    def _render(self, node: Any, depth: int) -> str:
        if depth > self.max_depth:
            return render_raw(node)
        if isinstance(node, NODE_TYPES):
            return self._render_node(node, depth)
        if is_scalar(node):
            return render_literal(node)
        if isinstance(node, dict) and len(node) == 1:
            tag, args = next(iter(node.items()))
            return self._render_operator(node, tag, args, depth)
        return render_raw(node)

    def _render_node(self, node: Any, depth: int) -> str:
        if isinstance(node, Literal):
            return render_literal(node.value)
        if isinstance(node, FieldRef):
            return node.path if isinstance(node.path, str) else render_raw(node)
        if isinstance(node, Comparison):
            return self._comparison(node.left, node.operator.value, node.right, depth)
        if isinstance(node, (LogicalAnd, LogicalOr)):
            if not node.children:
                return render_raw(node)
            return self._join(node.operator.value, node.children, depth)
        if isinstance(node, Branch):
            return self._branch(node.test, node.then, node.otherwise, depth)
        return render_raw(node)

    def _render_operator(self, node: dict, tag: Any, args: Any, depth: int) -> str:
        if tag == VAR_TAG and isinstance(args, str):
            return args
        if not isinstance(args, (list, tuple)):
            return render_raw(node)
        if tag in _COMPARISON_TAGS and len(args) == 2:
            return self._comparison(args[0], tag, args[1], depth)
        if tag in _JOINERS and args:
            return self._join(tag, args, depth)
        if tag == IF_TAG and len(args) == 3:
            return self._branch(args[0], args[1], args[2], depth)
        return render_raw(node)

    def _comparison(self, left: Any, symbol: str, right: Any, depth: int) -> str:
        return f"{self._render(left, depth + 1)} {symbol} {self._render(right, depth + 1)}"

    def _join(self, tag: str, children: Any, depth: int) -> str:
        return _JOINERS[tag].join(self._render(c, depth + 1) for c in children)

    def _branch(self, test: Any, then: Any, otherwise: Any, depth: int) -> str:
        return (
            f"If {self._render(test, depth + 1)} → {self._render(then, depth + 1)}, "
            f"otherwise → {self._render(otherwise, depth + 1)}"
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def explain(tree: Any) -> str:
    """
    Render a tree as a sentence.

    Convenience function that creates a temporary explainer.
    """
    return RuleExplainer().explain(tree)
