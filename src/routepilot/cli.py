"""
RoutePilot CLI

Command-line interface over the rule engine.

Usage:
    routepilot catalog
    routepilot paths quote_evaluation
    routepilot validate rule.json --category provider_selection
    routepilot explain rule.json
    routepilot simulate rule.json --category provider_selection
    routepilot preview rule.json --category provider_selection
    routepilot evaluate rule.json order.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .catalog import get_field_catalog
from .engine import evaluate, explain, preview_rule, simulate, validate
from .engine.explainer import render_literal
from .exceptions import RoutePilotError
from .models import RuleCategory


def _read_json(path: str) -> Any:
    """Read a JSON document from a file, or stdin when path is '-'."""
    if path == "-":
        return json.load(sys.stdin)
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def cmd_catalog(args: argparse.Namespace) -> int:
    """Print the full catalog."""
    print(get_field_catalog().serialize())
    return 0


def cmd_paths(args: argparse.Namespace) -> int:
    """Print the paths allowed for a category."""
    for path in sorted(get_field_catalog().paths_for(args.category)):
        print(path)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate field references."""
    report = validate(_read_json(args.rule), args.category)
    if report.valid:
        print("VALID")
        return 0
    print("INVALID")
    print("-" * 40)
    for error in report.errors:
        print(f"  - {error}")
    return 1


def cmd_explain(args: argparse.Namespace) -> int:
    """Print the rule as a sentence."""
    print(explain(_read_json(args.rule)))
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Run the rule over sample orders."""
    for line in simulate(_read_json(args.rule), args.category):
        print(line)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    """Validate, explain and simulate."""
    preview = preview_rule(_read_json(args.rule), args.category)
    if args.json:
        print(json.dumps(preview.to_dict(), indent=2, ensure_ascii=False))
        return 0 if preview.valid else 1

    print("RULE PREVIEW")
    print("=" * 60)
    print(preview.explanation)
    print()
    print(f"Valid: {'yes' if preview.valid else 'no'}")
    for error in preview.errors:
        print(f"  - {error}")
    print()
    print("Simulation:")
    for line in preview.simulation:
        print(f"  {line}")
    return 0 if preview.valid else 1


def cmd_evaluate(args: argparse.Namespace) -> int:
    """Run the rule against a data document."""
    result = evaluate(_read_json(args.rule), _read_json(args.data))
    print(render_literal(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="RoutePilot rule engine CLI",
        prog="routepilot",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    categories = [c.value for c in RuleCategory]

    catalog_parser = subparsers.add_parser("catalog", help="Print the full field catalog")
    catalog_parser.set_defaults(func=cmd_catalog)

    paths_parser = subparsers.add_parser("paths", help="List paths allowed for a category")
    paths_parser.add_argument("category", choices=categories)
    paths_parser.set_defaults(func=cmd_paths)

    for name, func, help_text in (
        ("validate", cmd_validate, "Check a rule's field references"),
        ("simulate", cmd_simulate, "Run a rule over sample orders"),
        ("preview", cmd_preview, "Validate, explain and simulate a rule"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("rule", help="Rule JSON file ('-' for stdin)")
        sub.add_argument(
            "--category",
            choices=categories,
            default=RuleCategory.PROVIDER_SELECTION.value,
        )
        sub.set_defaults(func=func)
    subparsers.choices["preview"].add_argument(
        "--json", action="store_true", help="Print the preview as JSON",
    )

    explain_parser = subparsers.add_parser("explain", help="Print a rule as a sentence")
    explain_parser.add_argument("rule", help="Rule JSON file ('-' for stdin)")
    explain_parser.set_defaults(func=cmd_explain)

    evaluate_parser = subparsers.add_parser("evaluate", help="Run a rule against a data document")
    evaluate_parser.add_argument("rule", help="Rule JSON file ('-' for stdin)")
    evaluate_parser.add_argument("data", help="Data document JSON file")
    evaluate_parser.set_defaults(func=cmd_evaluate)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except RoutePilotError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
