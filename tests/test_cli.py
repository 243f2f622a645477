"""
Tests for the RoutePilot CLI
"""
import io
import json

import pytest

from routepilot.cli import main

from tests.conftest import make_order, make_threshold_tree


@pytest.fixture
def rule_file(tmp_path):
    path = tmp_path / "rule.json"
    path.write_text(json.dumps(make_threshold_tree()), encoding="utf-8")
    return path


@pytest.fixture
def bad_rule_file(tmp_path):
    path = tmp_path / "bad_rule.json"
    path.write_text(json.dumps({">": [{"var": "order.customer_age"}, 18]}), encoding="utf-8")
    return path


class TestCLI:
    """Tests for routepilot.cli.main."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_catalog(self, capsys):
        assert main(["catalog"]) == 0
        groups = json.loads(capsys.readouterr().out)
        assert groups[0]["name"] == "order"

    def test_paths(self, capsys):
        assert main(["paths", "provider_selection"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == sorted(lines)
        assert "order.order_value" in lines
        assert "provider_quotes[].fee" not in lines

    def test_validate_valid(self, rule_file, capsys):
        assert main(["validate", str(rule_file)]) == 0
        assert capsys.readouterr().out.strip() == "VALID"

    def test_validate_invalid(self, bad_rule_file, capsys):
        assert main(["validate", str(bad_rule_file), "--category", "provider_selection"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("INVALID")
        assert "Field 'order.customer_age' is not available for provider_selection" in out

    def test_explain(self, rule_file, capsys):
        assert main(["explain", str(rule_file)]) == 0
        assert capsys.readouterr().out.strip() == (
            "If order.order_value > 15000 → doordash, otherwise → uber"
        )

    def test_simulate(self, rule_file, capsys):
        assert main(["simulate", str(rule_file)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Order $45.00 → uber",
            "Order $150.00 → uber",
            "Order $320.00 → doordash",
        ]

    def test_preview_json(self, bad_rule_file, capsys):
        assert main(["preview", str(bad_rule_file), "--json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert len(data["simulation"]) == 3

    def test_preview_text(self, rule_file, capsys):
        assert main(["preview", str(rule_file)]) == 0
        out = capsys.readouterr().out
        assert "RULE PREVIEW" in out
        assert "Valid: yes" in out

    def test_evaluate(self, rule_file, tmp_path, capsys):
        data_file = tmp_path / "order.json"
        data_file.write_text(json.dumps(make_order(25000)), encoding="utf-8")
        assert main(["evaluate", str(rule_file), str(data_file)]) == 0
        assert capsys.readouterr().out.strip() == "doordash"

    def test_rule_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(make_threshold_tree())))
        assert main(["explain", "-"]) == 0
        assert "→ doordash" in capsys.readouterr().out

    def test_malformed_rule(self, tmp_path, capsys):
        path = tmp_path / "rule.json"
        path.write_text(json.dumps({"if": [True, "uber"]}), encoding="utf-8")
        assert main(["simulate", str(path)]) == 1
        assert "RP_INVALID_CONDITION" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["explain", str(tmp_path / "nope.json")]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_unknown_category_rejected_by_argparse(self, rule_file):
        with pytest.raises(SystemExit):
            main(["validate", str(rule_file), "--category", "pricing"])
