"""
Sample fixtures for rule simulation.

Three literal, category-shaped documents per rule category: a small, a
mid-sized and a large order. They are constants and are not derived from
the field catalog. quote_evaluation fixtures also carry two provider quotes.

Money amounts are integers in cents.
"""
from __future__ import annotations

import copy
from typing import Any, Union

from ..models import RuleCategory


_PROVIDER_SELECTION_FIXTURES: tuple[dict[str, Any], ...] = (
    {
        "order": {
            "id": "SIM-1001",
            "order_value": 4500,
            "subtotal": 3900,
            "tip": 600,
            "item_count": 2,
            "is_catering": False,
            "is_scheduled": False,
            "channel": "app",
        },
        "store": {
            "id": "store-017",
            "name": "Downtown",
            "city": "Austin",
            "state": "TX",
            "zip": "78701",
        },
        "delivery": {
            "distance_miles": 1.8,
            "dropoff_city": "Austin",
            "dropoff_zip": "78702",
            "requires_id_check": False,
        },
        "time": {"hour": 12, "day_of_week": "tuesday", "is_weekend": False},
        "preferred_provider": "uber",
    },
    {
        "order": {
            "id": "SIM-1002",
            "order_value": 15000,
            "subtotal": 13200,
            "tip": 1800,
            "item_count": 6,
            "is_catering": False,
            "is_scheduled": False,
            "channel": "web",
        },
        "store": {
            "id": "store-017",
            "name": "Downtown",
            "city": "Austin",
            "state": "TX",
            "zip": "78701",
        },
        "delivery": {
            "distance_miles": 4.5,
            "dropoff_city": "Austin",
            "dropoff_zip": "78704",
            "requires_id_check": False,
        },
        "time": {"hour": 18, "day_of_week": "friday", "is_weekend": False},
        "preferred_provider": "doordash",
    },
    {
        "order": {
            "id": "SIM-1003",
            "order_value": 32000,
            "subtotal": 28500,
            "tip": 3500,
            "item_count": 24,
            "is_catering": True,
            "is_scheduled": True,
            "channel": "phone",
        },
        "store": {
            "id": "store-042",
            "name": "Round Rock",
            "city": "Round Rock",
            "state": "TX",
            "zip": "78664",
        },
        "delivery": {
            "distance_miles": 9.2,
            "dropoff_city": "Pflugerville",
            "dropoff_zip": "78660",
            "requires_id_check": True,
        },
        "time": {"hour": 11, "day_of_week": "saturday", "is_weekend": True},
        "preferred_provider": "doordash",
    },
)

_QUOTES: tuple[list[dict[str, Any]], ...] = (
    [
        {"provider": "uber", "fee": 599, "eta_minutes": 28},
        {"provider": "doordash", "fee": 699, "eta_minutes": 24},
    ],
    [
        {"provider": "doordash", "fee": 899, "eta_minutes": 35},
        {"provider": "uber", "fee": 949, "eta_minutes": 31},
    ],
    [
        {"provider": "doordash", "fee": 1499, "eta_minutes": 52},
        {"provider": "uber", "fee": 1299, "eta_minutes": 47},
    ],
)


def _quote_evaluation_fixtures() -> tuple[dict[str, Any], ...]:
    fixtures = []
    for base, quotes in zip(_PROVIDER_SELECTION_FIXTURES, _QUOTES):
        doc = copy.deepcopy(base)
        doc["provider_quotes"] = copy.deepcopy(quotes)
        doc["quote_count"] = len(quotes)
        fixtures.append(doc)
    return tuple(fixtures)


_FIXTURES: dict[RuleCategory, tuple[dict[str, Any], ...]] = {
    RuleCategory.PROVIDER_SELECTION: _PROVIDER_SELECTION_FIXTURES,
    RuleCategory.QUOTE_EVALUATION: _quote_evaluation_fixtures(),
}


def sample_fixtures(category: Union[str, RuleCategory]) -> list[dict[str, Any]]:
    """
    Return the three sample documents for a category, in fixed order.

    Copies are returned so callers cannot alter the constants.

    Raises:
        UnknownCategoryError: If category is not a RuleCategory
    """
    cat = RuleCategory.coerce(category)
    return copy.deepcopy(list(_FIXTURES[cat]))


def fixture_amount(document: dict[str, Any]) -> str:
    """Human-readable order value of a fixture, e.g. '$150.00'."""
    cents = document.get("order", {}).get("order_value", 0)
    return f"${cents / 100:.2f}"
