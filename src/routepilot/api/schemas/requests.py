"""Request schemas for the API."""

from typing import Any

from pydantic import BaseModel, Field


_EXAMPLE_CONDITION = {
    "if": [{">": [{"var": "order.order_value"}, 15000]}, "doordash", "uber"]
}


class ExplainRequest(BaseModel):
    """A condition tree to put into words."""
    condition: Any = Field(..., description="Condition tree in JSON-logic wire shape")

    model_config = {
        "json_schema_extra": {
            "examples": [{"condition": _EXAMPLE_CONDITION}]
        }
    }


class RuleRequest(BaseModel):
    """A condition tree together with its rule category."""
    category: str = Field(..., description="provider_selection|quote_evaluation")
    condition: Any = Field(..., description="Condition tree in JSON-logic wire shape")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"category": "provider_selection", "condition": _EXAMPLE_CONDITION},
            ]
        }
    }


class EvaluateRequest(RuleRequest):
    """A rule plus the live data document to run it against."""
    data: dict[str, Any] = Field(..., description="Data document, e.g. the order being dispatched")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category": "provider_selection",
                    "condition": _EXAMPLE_CONDITION,
                    "data": {"order": {"order_value": 25000}},
                },
            ]
        }
    }
