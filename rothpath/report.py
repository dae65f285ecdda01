"""Text and JSON rendering of a projection result."""

from __future__ import annotations

from decimal import Decimal
import json
from pathlib import Path
from typing import Any

from .money import format_money
from .projection import year_breakdown
from .schema import ScenarioParameters
from .search import SearchResult
from .state import AccountState, Transition
from .tax import marginal_rate, room_in_bracket

COLUMNS = ("Year", "Action", "RMD", "Converted", "Taxable", "Tax", "Rate", "Bracket room", "Roth", "IRA")


def _percent(value: Decimal) -> str:
    return f"{value * 100:.0f}%"


def _row(transition: Transition, year: int) -> list[str]:
    room = room_in_bracket(transition.taxable_income)
    action = transition.state.previous_action
    return [
        str(year),
        action.describe() if action is not None else "",
        format_money(transition.rmd),
        format_money(transition.rollover),
        format_money(transition.taxable_income),
        format_money(transition.tax),
        _percent(marginal_rate(transition.taxable_income)),
        "top" if room is None else format_money(room),
        format_money(transition.state.roth),
        format_money(transition.state.ira),
    ]


def render_table(result: SearchResult, params: ScenarioParameters) -> str:
    transitions = year_breakdown(result, params)
    rows = [list(COLUMNS)]
    for state, transition in zip(result.path, transitions):
        rows.append(_row(transition, state.year))

    widths = [max(len(row[i]) for row in rows) for i in range(len(COLUMNS))]
    lines = ["  ".join(cell.rjust(widths[i]) for i, cell in enumerate(row)) for row in rows]
    lines.insert(1, "  ".join("-" * width for width in widths))

    final = result.path[-1]
    lines.append("")
    lines.append(f"Objective: {result.objective} ({result.algorithm}, {result.nodes_expanded} states expanded)")
    lines.append(f"Total cost: {format_money(result.total_cost, 2)}")
    lines.append(f"Total tax paid: {format_money(final.total_tax)}")
    lines.append(f"Cash received: {format_money(final.total_cash)}")
    return "\n".join(lines)


def _state_payload(state: AccountState) -> dict[str, Any]:
    action = state.previous_action
    return {
        "year": state.year,
        "action": None if action is None else action.describe(),
        "roth": str(state.roth),
        "ira": str(state.ira),
        "basis": str(state.basis),
        "total_cash": str(state.total_cash),
        "total_tax": str(state.total_tax),
    }


def build_payload(result: SearchResult, params: ScenarioParameters) -> dict[str, Any]:
    years = [
        {
            "year": state.year,
            "rmd": str(transition.rmd),
            "rollover": str(transition.rollover),
            "nontaxable": str(transition.nontaxable),
            "taxable_income": str(transition.taxable_income),
            "tax": str(transition.tax),
            "cash": str(transition.cash),
        }
        for state, transition in zip(result.path, year_breakdown(result, params))
    ]
    return {
        "objective": result.objective,
        "algorithm": result.algorithm,
        "total_cost": str(result.total_cost),
        "nodes_expanded": result.nodes_expanded,
        "path": [_state_payload(state) for state in result.path],
        "years": years,
    }


def render_json(result: SearchResult, params: ScenarioParameters) -> str:
    return json.dumps(build_payload(result, params), indent=2)


def write_report(path: str | Path, content: str) -> None:
    Path(path).write_text(content, encoding="utf-8")
