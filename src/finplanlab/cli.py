"""
Command-line interface for FinPlanLab.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from finplanlab.core.assumptions import get_current_rates
from finplanlab.core.engine import calculate_projections
from finplanlab.core.errors import ConfigError, PlanLoadError
from finplanlab.core.kinds import K
from finplanlab.core.plan_loader import load_plan
from finplanlab.core.validation import validate_plan


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _print_projection_summary(summary) -> None:
    """Print a compact per-year table to stdout."""
    print(f"Projection {summary.start_year}-{summary.end_year} ({summary.source})")
    print(f"{'Year':>6} {'Assets':>14} {'Income':>12} {'Commitments':>12} {'Cash flow':>12} {'Net worth':>14}")
    for s in summary.snapshots:
        print(
            f"{s.year:>6} {s.total_assets:>14,.0f} {s.total_income:>12,.0f} "
            f"{s.total_commitments:>12,.0f} {s.cash_flow:>12,.0f} {s.net_worth:>14,.0f}"
        )
    print(f"Warnings: {summary.total_warnings}")


def cmd_example(_) -> int:
    """Print a minimal working plan JSON."""
    example = {
        "id": "demo",
        "name": "Demo Household",
        "people": [
            {"id": "alex", "name": "Alex", "date_of_birth": "1985-04-12", "sex": "F"}
        ],
        "assets": [
            {
                "id": "isa",
                "name": "Stocks ISA",
                "type": "ISA",
                "current_value": 50000.0,
                "owner_ids": ["alex"],
                "growth_rate": 5.0,
            },
            {
                "id": "home",
                "name": "Home",
                "type": "Property",
                "current_value": 350000.0,
                "owner_ids": ["alex"],
                "loans": [
                    {
                        "id": "mortgage",
                        "name": "Mortgage",
                        "amount": 200000.0,
                        "interest_rate": 4.0,
                        "term_years": 25,
                        "start_year": 2024,
                    }
                ],
            },
        ],
        "income": [
            {
                "id": "salary",
                "name": "Salary",
                "amount": 5000.0,
                "frequency": "monthly",
                "start_year": 2024,
                "owner_ids": ["alex"],
            }
        ],
        "commitments": [
            {
                "id": "bills",
                "name": "Household bills",
                "amount": 1500.0,
                "frequency": "monthly",
                "start_year": 2024,
                "owner_ids": ["alex"],
            }
        ],
        "events": [
            {"id": "car", "name": "New car", "year": 2027, "amount": -25000.0, "type": "Expense"}
        ],
        "overrides": [
            {
                "entity_type": "category",
                "category": "Property",
                "override_type": "growth",
                "value": 2.0,
                "start_year": 2025,
                "end_year": 2027,
                "description": "Flat housing market",
            }
        ],
        "scenarios": [
            {"id": "base", "name": "Base", "is_base": True},
            {
                "id": "high_inflation",
                "name": "High inflation",
                "assumptions": {"inflation_rate": 5.0},
            },
        ],
    }
    json.dump(example, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_run(args) -> int:
    """Project a plan file and print or export the results."""
    try:
        plan = load_plan(args.input)
        scenario = plan.get_scenario(args.scenario) if args.scenario else None
        summary = calculate_projections(plan, scenario, args.start, args.end)

        _print_projection_summary(summary)

        if args.output:
            _save_json(args.output, summary.to_dict())
            print(f"Results saved to {args.output}")
        if args.csv:
            summary.to_frame().to_csv(args.csv)
            print(f"Yearly totals saved to {args.csv}")
        return 0

    except (ConfigError, PlanLoadError, OSError, TypeError, ValueError) as e:
        print(f"Error running projection: {e}", file=sys.stderr)
        return 1


def cmd_rates(args) -> int:
    """Show the rates in force for one item and where they come from."""
    try:
        plan = load_plan(args.input)
        item = plan.find_item(args.item)
        if item is None or item.kind not in K.rate_bearing_kinds():
            print(f"Error: no asset, income or commitment '{args.item}'", file=sys.stderr)
            return 1
        scenario = plan.get_scenario(args.scenario) if args.scenario else None
        assumptions, overrides, _ = plan.effective_inputs(scenario)
        year = args.year if args.year is not None else date.today().year
        preview = get_current_rates(item, year, assumptions, overrides)
        print(f"{item.name} ({item.kind}) in {year}")
        print(f"  Growth:    {preview.growth:.2f}% [{preview.growth_source}]")
        print(f"  Inflation: {preview.inflation:.2f}% [{preview.inflation_source}]")
        print(f"  Source:    {preview.source}")
        return 0

    except (ConfigError, PlanLoadError, OSError, TypeError, ValueError) as e:
        print(f"Error previewing rates: {e}", file=sys.stderr)
        return 1


def cmd_validate(args) -> int:
    """Validate a plan file and print the report."""
    try:
        plan = load_plan(args.input)
    except (PlanLoadError, OSError) as e:
        print(f"Error loading plan: {e}", file=sys.stderr)
        return 1

    report = validate_plan(plan)
    if args.json:
        json.dump(report.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for key, value in report.to_dict().items():
            if value and key not in {"has_errors", "has_warnings"}:
                print(f"{key}: {value}")
        print("OK" if report.is_valid() else "INVALID")
    return report.get_exit_code()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="finplanlab", description="FinPlanLab household projection CLI"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_example = sub.add_parser("example", help="Print an example plan JSON")
    p_example.set_defaults(func=cmd_example)

    p_run = sub.add_parser("run", help="Project a plan")
    p_run.add_argument("input", help="Plan file (JSON or YAML)")
    p_run.add_argument("--start", type=int, default=None, help="First year (default: this year)")
    p_run.add_argument("--end", type=int, default=None, help="Last year (default: start + 50)")
    p_run.add_argument("--scenario", default=None, help="Scenario id to apply")
    p_run.add_argument("-o", "--output", default=None, help="Write the full summary as JSON")
    p_run.add_argument("--csv", default=None, help="Write yearly totals as CSV")
    p_run.set_defaults(func=cmd_run)

    p_rates = sub.add_parser("rates", help="Preview the rates applied to an item")
    p_rates.add_argument("input", help="Plan file (JSON or YAML)")
    p_rates.add_argument("--item", required=True, help="Item id")
    p_rates.add_argument("--year", type=int, default=None, help="Year to resolve (default: this year)")
    p_rates.add_argument("--scenario", default=None, help="Scenario id to apply")
    p_rates.set_defaults(func=cmd_rates)

    p_validate = sub.add_parser("validate", help="Validate a plan file")
    p_validate.add_argument("input", help="Plan file (JSON or YAML)")
    p_validate.add_argument("--json", action="store_true", help="Output JSON format")
    p_validate.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
