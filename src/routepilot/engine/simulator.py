"""
RoutePilot Rule Simulator

Runs a candidate rule against the sample fixtures of its category and
produces one readable trace line per fixture:

    Order $45.00 → uber
    Order $150.00 → uber
    Order $320.00 → doordash

A structural error on any fixture fails the whole simulation; callers
are expected to validate the tree first.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from ..models import ConditionNode, RuleCategory, parse_condition
from .evaluator import RuleEvaluator
from .explainer import render_literal
from .sample_fixtures import fixture_amount, sample_fixtures

logger = logging.getLogger(__name__)


class RuleSimulator:
    """
    Simulates a rule over a category's sample fixtures.

    Usage:
        simulator = RuleSimulator()
        for line in simulator.simulate(tree, "provider_selection"):
            print(line)
    """

    def __init__(self, evaluator: Optional[RuleEvaluator] = None):
        self.evaluator = evaluator or RuleEvaluator()

    def run(
        self,
        tree: Union[ConditionNode, Any],
        category: Union[str, RuleCategory],
    ) -> list[tuple[dict[str, Any], Any]]:
        """
        Evaluate the tree against each fixture.

        Returns:
            (fixture, result) pairs in fixture order

        Raises:
            InvalidConditionError: If the tree is structurally malformed
            UnknownCategoryError: If category is not a RuleCategory
        """
        cat = RuleCategory.coerce(category)
        node = parse_condition(tree, max_depth=self.evaluator.depth_limit)
        results = [
            (fixture, self.evaluator.evaluate(node, fixture))
            for fixture in sample_fixtures(cat)
        ]
        logger.debug("Simulated rule over %d %s fixtures", len(results), cat.value)
        return results

    def simulate(
        self,
        tree: Union[ConditionNode, Any],
        category: Union[str, RuleCategory],
    ) -> list[str]:
        """Evaluate the tree against each fixture and render trace lines."""
        return [
            f"Order {fixture_amount(fixture)} → {render_literal(result)}"
            for fixture, result in self.run(tree, category)
        ]


# =============================================================================
# Convenience Functions
# =============================================================================

def simulate(
    tree: Union[ConditionNode, Any],
    category: Union[str, RuleCategory],
) -> list[str]:
    """
    Simulate a rule over the sample fixtures of its category.

    Convenience function that creates a temporary simulator.
    """
    return RuleSimulator().simulate(tree, category)
