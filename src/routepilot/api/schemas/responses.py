"""Response schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str
    catalog_groups: int
    catalog_source: Optional[str] = None


class CategoryPathsResponse(BaseModel):
    """Paths a rule of one category may reference."""
    category: str
    result_type: str
    paths: list[str]


class ValidationResponse(BaseModel):
    """Field-reference validation result."""
    valid: bool
    errors: list[str]


class ExplainResponse(BaseModel):
    explanation: str


class SimulationResponse(BaseModel):
    lines: list[str]


class PreviewResponse(BaseModel):
    """Validation, explanation and simulation of a candidate rule."""
    valid: bool
    errors: list[str]
    explanation: str
    simulation: list[str]


class EvaluateResponse(BaseModel):
    category: str
    result: Any


class ErrorResponse(BaseModel):
    """Structured error response."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    category: Optional[str] = None
    request_id: str
