"""
RoutePilot Result Models

Outputs of the rule engine operations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationReport:
    """
    Result of checking a tree's field references against a category.

    errors holds one message per illegal reference, in the order the
    references were encountered.
    """
    valid: bool
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


@dataclass
class RulePreview:
    """Everything a caller needs to show a candidate rule before saving it."""
    valid: bool
    errors: list[str]
    explanation: str
    simulation: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "explanation": self.explanation,
            "simulation": list(self.simulation),
        }
