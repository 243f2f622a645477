"""
Rule endpoints.

Thin adapters over routepilot.engine. Structural and category errors are
raised as RoutePilotError and mapped to HTTP responses in main.py.
"""

import logging

from fastapi import APIRouter, Request

from routepilot.api.schemas.requests import EvaluateRequest, ExplainRequest, RuleRequest
from routepilot.api.schemas.responses import (
    ErrorResponse,
    EvaluateResponse,
    ExplainResponse,
    PreviewResponse,
    SimulationResponse,
    ValidationResponse,
)
from routepilot.engine import evaluate, explain, preview_rule, simulate, validate
from routepilot.models import RuleCategory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rules",
    tags=["Rules"],
    responses={
        404: {"model": ErrorResponse, "description": "Unknown rule category"},
        422: {"model": ErrorResponse, "description": "Malformed condition tree"},
    },
)


@router.post("/validate", response_model=ValidationResponse)
async def validate_rule(req: RuleRequest):
    """Check every field the rule references is allowed for its category."""
    report = validate(req.condition, req.category)
    return ValidationResponse(**report.to_dict())


@router.post("/explain", response_model=ExplainResponse)
async def explain_rule(req: ExplainRequest):
    """Render the rule as a sentence. Works for malformed rules too."""
    return ExplainResponse(explanation=explain(req.condition))


@router.post("/simulate", response_model=SimulationResponse)
async def simulate_rule(req: RuleRequest):
    """Run the rule over the category's three sample orders."""
    return SimulationResponse(lines=simulate(req.condition, req.category))


@router.post("/preview", response_model=PreviewResponse)
async def preview(req: RuleRequest):
    """Validate, explain and simulate a candidate rule in one call."""
    result = preview_rule(req.condition, req.category)
    return PreviewResponse(**result.to_dict())


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_rule(req: EvaluateRequest, request: Request):
    """Run the rule against a live data document."""
    category = RuleCategory.coerce(req.category)
    result = evaluate(req.condition, req.data)
    logger.info(
        "Rule evaluated for %s",
        category.value,
        extra={"request_id": getattr(request.state, "request_id", "unknown")},
    )
    return EvaluateResponse(category=category.value, result=result)
