"""
Tests for the RoutePilot Rule Validator

Tests cover:
- Path normalization of concrete array indexes
- Field reference extraction order
- Legal and illegal references per category
- Malformed trees never raise
"""
import pytest

from routepilot.engine import RuleValidator, normalize_path, referenced_fields, validate
from routepilot.exceptions import UnknownCategoryError
from routepilot.models import AND, EQ, GT, IF, VAR

from tests.conftest import make_threshold_tree


# =============================================================================
# Path Normalization
# =============================================================================

class TestNormalizePath:
    """Tests for normalize_path."""

    @pytest.mark.parametrize("path,expected", [
        ("order.order_value", "order.order_value"),
        ("provider_quotes[0].fee", "provider_quotes[].fee"),
        ("provider_quotes[12].provider", "provider_quotes[].provider"),
        ("provider_quotes[].fee", "provider_quotes[].fee"),
        ("a[1].b[2].c", "a[].b[].c"),
        ("a[1][2]", "a[][]"),
    ])
    def test_normalize(self, path, expected):
        assert normalize_path(path) == expected

    def test_idempotent(self):
        once = normalize_path("provider_quotes[3].fee")
        assert normalize_path(once) == once


class TestReferencedFields:
    """Tests for referenced_fields."""

    def test_pre_order_left_to_right(self):
        tree = {
            "if": [
                {"and": [
                    {">": [{"var": "order.order_value"}, 100]},
                    {"==": [{"var": "store.city"}, {"var": "delivery.dropoff_city"}]},
                ]},
                {"var": "preferred_provider"},
                "uber",
            ]
        }
        assert referenced_fields(tree) == [
            "order.order_value",
            "store.city",
            "delivery.dropoff_city",
            "preferred_provider",
        ]

    def test_duplicates_kept(self):
        tree = AND(GT(VAR("order.tip"), 0), GT(VAR("order.tip"), 100))
        assert referenced_fields(tree) == ["order.tip", "order.tip"]

    def test_no_fields(self):
        assert referenced_fields({"if": [True, "doordash", "uber"]}) == []

    def test_depth_limit_matches_evaluator(self):
        """Test fields are collected exactly down to the evaluator's depth cap."""
        tree = {"var": "order.tip"}
        for _ in range(3):
            tree = {"and": [tree]}
        # The field node sits at depth 4
        assert referenced_fields(tree, max_depth=4) == ["order.tip"]
        assert referenced_fields(tree, max_depth=3) == []

    def test_parsed_and_wire_agree(self, quote_tree):
        from routepilot.models import parse_condition

        assert referenced_fields(parse_condition(quote_tree)) == referenced_fields(quote_tree)


# =============================================================================
# Validation
# =============================================================================

class TestValidate:
    """Tests for RuleValidator.validate."""

    def test_legal_reference(self, catalog):
        report = validate({">": [{"var": "order.order_value"}, 15000]}, "provider_selection", catalog)
        assert report.valid is True
        assert report.errors == []

    def test_illegal_reference(self, catalog):
        report = validate({">": [{"var": "order.customer_age"}, 18]}, "provider_selection", catalog)
        assert report.valid is False
        assert report.errors == [
            "Field 'order.customer_age' is not available for provider_selection"
        ]

    def test_indexed_quote_reference(self, catalog, quote_tree):
        """Test provider_quotes[0].fee matches provider_quotes[].fee."""
        assert validate(quote_tree, "quote_evaluation", catalog).valid

    def test_quote_fields_not_in_selection(self, catalog, quote_tree):
        """Test the error keeps the original, un-normalized path."""
        report = validate(quote_tree, "provider_selection", catalog)
        assert not report.valid
        assert report.errors[0] == (
            "Field 'provider_quotes[0].fee' is not available for provider_selection"
        )
        assert len(report.errors) == 4

    def test_one_error_per_occurrence(self, small_catalog):
        tree = AND(EQ(VAR("order.city"), "Austin"), EQ(VAR("order.city"), "Dallas"))
        report = validate(tree, "provider_selection", small_catalog)
        assert report.errors == [
            "Field 'order.city' is not available for provider_selection",
            "Field 'order.city' is not available for provider_selection",
        ]

    def test_errors_in_traversal_order(self, small_catalog):
        tree = IF(GT(VAR("b.second"), VAR("a.first")), VAR("order.order_value"), VAR("c.third"))
        report = validate(tree, "provider_selection", small_catalog)
        assert [e.split("'")[1] for e in report.errors] == ["b.second", "a.first", "c.third"]

    def test_leaf_group_path(self, small_catalog):
        tree = EQ(VAR("preferred_provider"), "uber")
        assert validate(tree, "provider_selection", small_catalog).valid
        assert not validate(tree, "quote_evaluation", small_catalog).valid

    def test_literal_only_tree_valid(self, small_catalog):
        assert validate("uber", "quote_evaluation", small_catalog).valid

    def test_category_member_accepted(self, small_catalog):
        from routepilot.models import RuleCategory

        report = RuleValidator(small_catalog).validate(
            make_threshold_tree(), RuleCategory.PROVIDER_SELECTION
        )
        assert report.valid

    def test_unknown_category(self, small_catalog):
        with pytest.raises(UnknownCategoryError):
            validate(make_threshold_tree(), "pricing", small_catalog)

    def test_malformed_tree_does_not_raise(self, small_catalog):
        """Test structural problems are left to the evaluator."""
        tree = {"between": [{"var": "order.customer_age"}, 18]}
        report = validate(tree, "provider_selection", small_catalog)
        assert report.errors == [
            "Field 'order.customer_age' is not available for provider_selection"
        ]

    def test_report_to_dict(self, small_catalog):
        report = validate(make_threshold_tree(), "provider_selection", small_catalog)
        assert report.to_dict() == {"valid": True, "errors": []}

    def test_defaults_to_process_catalog(self, fresh_catalog_singleton):
        assert validate(make_threshold_tree(), "provider_selection").valid

    def test_very_deep_tree_does_not_raise(self, small_catalog):
        """Test fields past the depth cap are skipped, not a crash."""
        deep = {"var": "order.buried"}
        for _ in range(5000):
            deep = {"and": [deep]}
        tree = {"or": [{"==": [{"var": "order.customer_age"}, 1]}, deep]}

        report = validate(tree, "provider_selection", small_catalog)
        assert report.errors == [
            "Field 'order.customer_age' is not available for provider_selection"
        ]

    def test_very_deep_parsed_tree_does_not_raise(self, small_catalog):
        deep = VAR("order.buried")
        for _ in range(5000):
            deep = AND(deep)
        assert validate(deep, "provider_selection", small_catalog).valid
