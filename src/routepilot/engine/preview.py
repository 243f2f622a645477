"""
RoutePilot Rule Preview

Combines validation, explanation and simulation of a candidate rule into a
single result, the view shown to a user before a rule is saved.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from ..models import ConditionNode, FieldCatalog, RuleCategory, RulePreview
from .explainer import RuleExplainer
from .simulator import RuleSimulator
from .validator import RuleValidator


class RulePreviewer:
    """
    Builds previews of candidate rules.

    Usage:
        previewer = RulePreviewer(catalog)
        preview = previewer.preview(tree, "provider_selection")
    """

    def __init__(
        self,
        catalog: Optional[FieldCatalog] = None,
        simulator: Optional[RuleSimulator] = None,
        explainer: Optional[RuleExplainer] = None,
    ):
        self.validator = RuleValidator(catalog)
        self.simulator = simulator or RuleSimulator()
        self.explainer = explainer or RuleExplainer()

    def preview(
        self,
        tree: Union[ConditionNode, Any],
        category: Union[str, RuleCategory],
    ) -> RulePreview:
        """
        Validate, explain and simulate a tree.

        Raises:
            InvalidConditionError: If the tree cannot be simulated
            UnknownCategoryError: If category is not a RuleCategory
        """
        report = self.validator.validate(tree, category)
        explanation = self.explainer.explain(tree)
        simulation = self.simulator.simulate(tree, category)
        return RulePreview(
            valid=report.valid,
            errors=report.errors,
            explanation=explanation,
            simulation=simulation,
        )


def preview_rule(
    tree: Union[ConditionNode, Any],
    category: Union[str, RuleCategory],
    catalog: Optional[FieldCatalog] = None,
) -> RulePreview:
    """
    Preview a candidate rule.

    Convenience function that creates a temporary previewer.
    """
    return RulePreviewer(catalog).preview(tree, category)
