"""Scenario schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import json
from pathlib import Path
from typing import Any

from .money import to_decimal

OBJECTIVES = ("minimize_tax", "maximize_after_tax_cash")
ALGORITHMS = ("dijkstra", "exhaustive")
DEFAULT_ROLLOVER_STEP = Decimal("1000")


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _decimal(value: Any, path: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise SchemaError(f"{path}: expected number")
    try:
        result = to_decimal(value)
    except InvalidOperation:
        raise SchemaError(f"{path}: expected number") from None
    if not result.is_finite():
        raise SchemaError(f"{path}: expected finite number")
    return result


def _integer(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{path}: expected integer")
    return value


@dataclass(frozen=True, slots=True)
class ScenarioParameters:
    yearly_taxable_income: Decimal
    inflation_rate: Decimal
    roth_value: Decimal
    roth_rate: Decimal
    ira_value: Decimal
    ira_rate: Decimal
    basis: Decimal
    birth_year: int
    birth_month: int
    start_year: int
    end_year: int
    starting_cash: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "parameters") -> "ScenarioParameters":
        return cls(
            yearly_taxable_income=_decimal(_require(data, "yearly_taxable_income", path), f"{path}.yearly_taxable_income"),
            inflation_rate=_decimal(_require(data, "inflation_rate", path), f"{path}.inflation_rate"),
            roth_value=_decimal(_require(data, "roth_value", path), f"{path}.roth_value"),
            roth_rate=_decimal(_require(data, "roth_rate", path), f"{path}.roth_rate"),
            ira_value=_decimal(_require(data, "ira_value", path), f"{path}.ira_value"),
            ira_rate=_decimal(_require(data, "ira_rate", path), f"{path}.ira_rate"),
            basis=_decimal(_optional(data, "basis", 0), f"{path}.basis"),
            birth_year=_integer(_require(data, "birth_year", path), f"{path}.birth_year"),
            birth_month=_integer(_require(data, "birth_month", path), f"{path}.birth_month"),
            start_year=_integer(_require(data, "start_year", path), f"{path}.start_year"),
            end_year=_integer(_require(data, "end_year", path), f"{path}.end_year"),
            starting_cash=_decimal(_optional(data, "starting_cash", 0), f"{path}.starting_cash"),
        )

    @property
    def horizon_years(self) -> int:
        return self.end_year - self.start_year


@dataclass(frozen=True, slots=True)
class SearchSettings:
    objective: str = "minimize_tax"
    algorithm: str = "dijkstra"
    rollover_step: Decimal = DEFAULT_ROLLOVER_STEP
    memoize: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "search") -> "SearchSettings":
        return cls(
            objective=str(_optional(data, "objective", "minimize_tax")),
            algorithm=str(_optional(data, "algorithm", "dijkstra")),
            rollover_step=_decimal(_optional(data, "rollover_step", DEFAULT_ROLLOVER_STEP), f"{path}.rollover_step"),
            memoize=bool(_optional(data, "memoize", True)),
        )


@dataclass(frozen=True, slots=True)
class Scenario:
    parameters: ScenarioParameters
    search: SearchSettings = field(default_factory=SearchSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scenario":
        parameters = ScenarioParameters.from_dict(_expect_dict(_require(data, "parameters", "scenario"), "parameters"))
        search_raw = _optional(data, "search")
        search = SearchSettings()
        if search_raw is not None:
            search = SearchSettings.from_dict(_expect_dict(search_raw, "search"))
        return cls(parameters=parameters, search=search)


def load_scenario(path: str | Path) -> Scenario:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("scenario: root must be a JSON object")
    return Scenario.from_dict(raw)
