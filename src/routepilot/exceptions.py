"""
RoutePilot Exception Hierarchy

Domain-specific exceptions for the routing rule engine.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: RP_<CATEGORY>_<SPECIFIC>

Policy errors (a rule references a field its category does not allow) are
NOT exceptions; they are reported as data in a ValidationReport.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RoutePilotError(Exception):
    """
    Base exception for all RoutePilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (RP_*)
        details: Additional context about the error
        category: Rule category involved, if applicable
    """
    message: str
    code: str = "RP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    category: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.category:
            parts.append(f"(category: {self.category})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.category:
            result["category"] = self.category
        return result


# =============================================================================
# Field Catalog Errors
# =============================================================================

@dataclass
class CatalogLoadError(RoutePilotError):
    """Failed to read the field catalog source."""
    code: str = "RP_CATALOG_LOAD_ERROR"


@dataclass
class CatalogValidationError(RoutePilotError):
    """Field catalog failed schema or integrity validation."""
    code: str = "RP_CATALOG_VALIDATION_ERROR"


@dataclass
class CatalogVersionMismatch(RoutePilotError):
    """Field catalog schema version is not supported."""
    code: str = "RP_CATALOG_VERSION_MISMATCH"


@dataclass
class UnknownCategoryError(RoutePilotError):
    """Rule category is not one of the closed set of categories."""
    code: str = "RP_UNKNOWN_CATEGORY"


# =============================================================================
# Condition Tree Errors
# =============================================================================

@dataclass
class InvalidConditionError(RoutePilotError):
    """Condition tree violates the node-shape grammar."""
    code: str = "RP_INVALID_CONDITION"


@dataclass
class ConditionDepthError(InvalidConditionError):
    """Condition tree is nested deeper than the configured limit."""
    code: str = "RP_CONDITION_TOO_DEEP"
