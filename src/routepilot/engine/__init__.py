"""
RoutePilot Rule Engine

The four operations over condition trees, plus a combined preview:

- validate: field references legal for the rule category?
- evaluate: result of the tree against a data document
- explain: the tree as a sentence
- simulate: the tree run over three sample documents
- preview_rule: validate + explain + simulate together

Usage:
    from routepilot.engine import evaluate, preview_rule

    tree = {"if": [{">": [{"var": "order.order_value"}, 15000]}, "doordash", "uber"]}
    preview = preview_rule(tree, "provider_selection")
    provider = evaluate(tree, {"order": {"order_value": 25000}})
"""
from __future__ import annotations

from .evaluator import (
    RuleEvaluator,
    check_condition,
    compare_values,
    evaluate,
    is_well_formed_path,
    resolve_field_path,
    split_path,
    values_equal,
)
from .explainer import RuleExplainer, explain, render_literal, render_raw
from .preview import RulePreviewer, preview_rule
from .sample_fixtures import fixture_amount, sample_fixtures
from .simulator import RuleSimulator, simulate
from .validator import RuleValidator, normalize_path, referenced_fields, validate

__all__ = [
    # Validator
    "RuleValidator",
    "validate",
    "normalize_path",
    "referenced_fields",
    # Evaluator
    "RuleEvaluator",
    "evaluate",
    "check_condition",
    "compare_values",
    "values_equal",
    "resolve_field_path",
    "is_well_formed_path",
    "split_path",
    # Explainer
    "RuleExplainer",
    "explain",
    "render_literal",
    "render_raw",
    # Simulator
    "RuleSimulator",
    "simulate",
    "sample_fixtures",
    "fixture_amount",
    # Preview
    "RulePreviewer",
    "preview_rule",
]
