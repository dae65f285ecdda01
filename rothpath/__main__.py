"""CLI entry point for rothpath."""

from __future__ import annotations

import argparse
from dataclasses import replace
from decimal import Decimal, InvalidOperation
import logging
import sys

from .projection import project_scenario
from .report import render_json, render_table, write_report
from .schema import ALGORITHMS, OBJECTIVES, SchemaError, load_scenario
from .validate import validate_scenario


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Optimal IRA to Roth conversion planner")
    parser.add_argument("scenario", help="Path to scenario JSON file")
    parser.add_argument("-o", "--output", help="Write the report to this path instead of stdout")
    parser.add_argument("--objective", choices=OBJECTIVES, help="Override search objective")
    parser.add_argument("--algorithm", choices=ALGORITHMS, help="Override search algorithm")
    parser.add_argument("--rollover-step", type=_decimal_arg, help="Override yearly conversion increment")
    parser.add_argument("--no-memo", action="store_true", help="Disable memoization in exhaustive search")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        scenario = load_scenario(args.scenario)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load scenario: {exc}", file=sys.stderr)
        return 2

    overrides = {}
    if args.objective:
        overrides["objective"] = args.objective
    if args.algorithm:
        overrides["algorithm"] = args.algorithm
    if args.rollover_step is not None:
        overrides["rollover_step"] = args.rollover_step
    if args.no_memo:
        overrides["memoize"] = False
    if overrides:
        scenario = replace(scenario, search=replace(scenario.search, **overrides))

    validation = validate_scenario(scenario)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("Scenario is valid.")
        return 0

    result = project_scenario(scenario)
    if result is None:
        print("No feasible path reaches the end year.", file=sys.stderr)
        return 1

    if args.json:
        content = render_json(result, scenario.parameters)
    else:
        content = render_table(result, scenario.parameters)

    if args.output:
        write_report(args.output, content)
        print(f"Wrote report to {args.output}")
    else:
        print(content)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
