"""
Pytest configuration and fixtures for RoutePilot tests.

Provides the packaged field catalog, a small hand-written catalog, and
the condition trees used across test modules.
"""
import pytest

from routepilot.catalog import (
    get_field_catalog,
    load_field_catalog_from_string,
    reset_field_catalog,
)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_threshold_tree(threshold=15000, above="doordash", below="uber"):
    """The canonical 'big orders go to one provider' rule."""
    return {
        "if": [
            {">": [{"var": "order.order_value"}, threshold]},
            above,
            below,
        ]
    }


def make_order(order_value, **extra):
    """Minimal provider_selection document."""
    order = {"order_value": order_value}
    order.update(extra)
    return {"order": order}


SMALL_CATALOG_YAML = """
schema_version: "1.0.0"
groups:
  - name: order
    categories: [provider_selection, quote_evaluation]
    fields:
      - {path: order.order_value, kind: number}
      - {path: order.item_count, kind: number}
  - name: preferred_provider
    kind: string
    categories: [provider_selection]
  - name: provider_quotes
    categories: [quote_evaluation]
    fields:
      - {path: "provider_quotes[].provider", kind: string}
      - {path: "provider_quotes[].fee", kind: number}
"""


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def catalog():
    """The packaged field catalog."""
    return get_field_catalog()


@pytest.fixture
def small_catalog():
    """A three-group catalog for precise path-set assertions."""
    return load_field_catalog_from_string(SMALL_CATALOG_YAML)


@pytest.fixture
def fresh_catalog_singleton():
    """Reset the process-wide catalog before and after a test."""
    reset_field_catalog()
    yield
    reset_field_catalog()


@pytest.fixture
def threshold_tree():
    return make_threshold_tree()


@pytest.fixture
def quote_tree():
    """quote_evaluation rule picking the cheaper of the first two quotes."""
    return {
        "if": [
            {"<=": [{"var": "provider_quotes[0].fee"}, {"var": "provider_quotes[1].fee"}]},
            {"var": "provider_quotes[0].provider"},
            {"var": "provider_quotes[1].provider"},
        ]
    }
