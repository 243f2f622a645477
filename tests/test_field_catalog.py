"""
Tests for the RoutePilot Field Catalog

Validates:
- Packaged catalog loads and satisfies its invariants
- Per-category path sets (leaf and composite groups)
- serialize() shows everything, in order
- Malformed / missing / duplicate-path catalogs fail
- The process-wide catalog is loaded exactly once
"""
import json
import threading

import pytest

from routepilot import config
from routepilot.catalog import (
    FieldCatalogLoader,
    get_field_catalog,
    load_field_catalog,
    load_field_catalog_from_string,
)
from routepilot.catalog import loader as loader_module
from routepilot.exceptions import (
    CatalogLoadError,
    CatalogValidationError,
    CatalogVersionMismatch,
    UnknownCategoryError,
)
from routepilot.models import FieldKind, RuleCategory

from tests.conftest import SMALL_CATALOG_YAML


# =============================================================================
# Packaged Catalog
# =============================================================================

class TestPackagedCatalog:
    """Tests for the catalog shipped with the package."""

    def test_loads(self, catalog):
        assert len(catalog.groups) > 0
        assert catalog.schema_version == "1.0.0"

    def test_every_path_in_one_group(self, catalog):
        """Test no path is declared twice."""
        all_paths = [p for g in catalog.groups for p in g.paths]
        assert len(all_paths) == len(set(all_paths))

    def test_every_group_has_a_category(self, catalog):
        assert all(g.categories for g in catalog.groups)

    def test_provider_selection_paths(self, catalog):
        paths = catalog.paths_for("provider_selection")
        assert "order.order_value" in paths
        assert "preferred_provider" in paths
        assert "order.customer_age" not in paths
        assert not any(p.startswith("provider_quotes") for p in paths)

    def test_quote_evaluation_is_superset(self, catalog):
        """Test quote_evaluation allows everything provider_selection does and more."""
        selection = catalog.paths_for(RuleCategory.PROVIDER_SELECTION)
        quotes = catalog.paths_for(RuleCategory.QUOTE_EVALUATION)
        assert selection < quotes
        assert "provider_quotes[].provider" in quotes
        assert "provider_quotes[].fee" in quotes


# =============================================================================
# Path Sets
# =============================================================================

class TestPathsFor:
    """Tests for FieldCatalog.paths_for."""

    def test_leaf_and_composite(self, small_catalog):
        """Test leaf groups add their name and composite groups their fields."""
        assert small_catalog.paths_for("provider_selection") == {
            "order.order_value",
            "order.item_count",
            "preferred_provider",
        }
        assert small_catalog.paths_for("quote_evaluation") == {
            "order.order_value",
            "order.item_count",
            "provider_quotes[].provider",
            "provider_quotes[].fee",
        }

    def test_group_name_of_composite_not_a_path(self, small_catalog):
        assert "order" not in small_catalog.paths_for("provider_selection")

    def test_stable_across_calls(self, catalog):
        """Test repeated calls return equal sets."""
        first = catalog.paths_for("quote_evaluation")
        second = catalog.paths_for("quote_evaluation")
        assert first == second

    def test_unknown_category(self, catalog):
        with pytest.raises(UnknownCategoryError):
            catalog.paths_for("pricing")

    def test_fields_for(self, small_catalog):
        """Test descriptors come back in catalog order with kinds."""
        fields = small_catalog.fields_for("provider_selection")
        assert [f.path for f in fields] == [
            "order.order_value",
            "order.item_count",
            "preferred_provider",
        ]
        assert fields[2].kind == FieldKind.STRING
        assert RuleCategory.PROVIDER_SELECTION in fields[0].categories

    def test_get_group(self, small_catalog):
        quotes = small_catalog.get_group("provider_quotes")
        assert quotes.paths == ("provider_quotes[].provider", "provider_quotes[].fee")
        assert not quotes.is_leaf
        assert small_catalog.get_group("preferred_provider").is_leaf
        assert small_catalog.get_group("store") is None


# =============================================================================
# Serialization
# =============================================================================

class TestSerialize:
    """Tests for FieldCatalog.serialize."""

    def test_serialize_is_unfiltered_json(self, small_catalog):
        data = json.loads(small_catalog.serialize())
        assert [g["name"] for g in data] == ["order", "preferred_provider", "provider_quotes"]
        assert data[1] == {
            "name": "preferred_provider",
            "categories": ["provider_selection"],
            "kind": "string",
        }
        assert data[2]["fields"][0] == {"path": "provider_quotes[].provider", "kind": "string"}

    def test_serialize_is_indented(self, small_catalog):
        assert "\n  " in small_catalog.serialize()

    def test_serialized_catalog_loads_back(self, catalog):
        """Test the serialized list is itself a loadable catalog."""
        reloaded = load_field_catalog_from_string(catalog.serialize(), format="json")
        assert reloaded.paths_for("quote_evaluation") == catalog.paths_for("quote_evaluation")


# =============================================================================
# Loader Failures
# =============================================================================

class TestLoaderErrors:
    """Tests for catalog load failures."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            load_field_catalog(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("groups: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_field_catalog(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_field_catalog(path)

    def test_json_file(self, tmp_path, small_catalog):
        path = tmp_path / "catalog.json"
        path.write_text(small_catalog.serialize(), encoding="utf-8")
        loaded = load_field_catalog(path)
        assert loaded.paths_for("quote_evaluation") == small_catalog.paths_for("quote_evaluation")
        assert loaded.source == str(path)

    def test_duplicate_path(self):
        content = """
groups:
  - name: order
    categories: [provider_selection]
    fields:
      - {path: order.order_value, kind: number}
  - name: totals
    categories: [quote_evaluation]
    fields:
      - {path: order.order_value, kind: number}
"""
        with pytest.raises(CatalogValidationError):
            load_field_catalog_from_string(content)

    def test_group_without_category(self):
        content = """
groups:
  - name: preferred_provider
    kind: string
    categories: []
"""
        with pytest.raises(CatalogValidationError):
            load_field_catalog_from_string(content)

    def test_unknown_category(self):
        content = """
groups:
  - name: preferred_provider
    kind: string
    categories: [pricing]
"""
        with pytest.raises(CatalogValidationError):
            load_field_catalog_from_string(content)

    def test_leaf_group_needs_kind(self):
        content = """
groups:
  - name: preferred_provider
    categories: [provider_selection]
"""
        with pytest.raises(CatalogValidationError):
            load_field_catalog_from_string(content)

    def test_bad_path(self):
        content = """
groups:
  - name: order
    categories: [provider_selection]
    fields:
      - {path: "order..value", kind: number}
"""
        with pytest.raises(CatalogValidationError):
            load_field_catalog_from_string(content)

    def test_version_mismatch(self):
        content = SMALL_CATALOG_YAML.replace('"1.0.0"', '"2.0.0"')
        with pytest.raises(CatalogVersionMismatch):
            load_field_catalog_from_string(content)

    def test_version_mismatch_lenient(self):
        import yaml
        data = yaml.safe_load(SMALL_CATALOG_YAML.replace('"1.0.0"', '"2.0.0"'))
        catalog = FieldCatalogLoader(strict_version=False).load_data(data)
        assert catalog.schema_version == "2.0.0"


# =============================================================================
# Process-wide Catalog
# =============================================================================

class TestProcessCatalog:
    """Tests for get_field_catalog."""

    def test_same_instance(self, fresh_catalog_singleton):
        assert get_field_catalog() is get_field_catalog()

    def test_loaded_once_under_concurrency(self, fresh_catalog_singleton, monkeypatch):
        """Test concurrent first calls trigger a single load."""
        calls = []
        original = FieldCatalogLoader.load

        def counting_load(self, path):
            calls.append(path)
            return original(self, path)

        monkeypatch.setattr(FieldCatalogLoader, "load", counting_load)

        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(get_field_catalog())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is results[0] for r in results)

    def test_configured_path(self, fresh_catalog_singleton, monkeypatch, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(SMALL_CATALOG_YAML, encoding="utf-8")
        monkeypatch.setattr(config, "ROUTEPILOT_CATALOG_PATH", path)

        catalog = get_field_catalog()
        assert catalog.source == str(path)
        assert "preferred_provider" in catalog.paths_for("provider_selection")

    def test_failed_load_is_fatal_and_not_cached(self, fresh_catalog_singleton, monkeypatch, tmp_path):
        monkeypatch.setattr(config, "ROUTEPILOT_CATALOG_PATH", tmp_path / "missing.yaml")
        with pytest.raises(CatalogLoadError):
            get_field_catalog()
        assert loader_module._catalog is None
