"""Semantic validation for scenarios."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Final

from .rmd import first_rmd_year
from .schema import ALGORITHMS, OBJECTIVES, Scenario, ScenarioParameters, SearchSettings

# Beyond this many years an unmemoized exhaustive search visits millions of paths.
EXHAUSTIVE_HORIZON_WARNING: Final[int] = 20

# Exhaustive search recurses once per decision year.
MAX_HORIZON_YEARS: Final[int] = 200

NON_NEGATIVE_OBJECTIVES: Final[set[str]] = {"minimize_tax"}


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_rate(result: ValidationResult, path: str, value: Decimal) -> None:
    if value < 0 or value > 1:
        result.errors.append(f"{path}: must be between 0 and 1")


def _check_non_negative(result: ValidationResult, path: str, value: Decimal) -> None:
    if value < 0:
        result.errors.append(f"{path}: must be >= 0")


def _check_enum(result: ValidationResult, path: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        expected = ", ".join(sorted(allowed))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def validate_parameters(params: ScenarioParameters, result: ValidationResult | None = None) -> ValidationResult:
    if result is None:
        result = ValidationResult()
    base = "parameters"

    _check_non_negative(result, f"{base}.yearly_taxable_income", params.yearly_taxable_income)
    _check_rate(result, f"{base}.inflation_rate", params.inflation_rate)
    _check_non_negative(result, f"{base}.roth_value", params.roth_value)
    _check_rate(result, f"{base}.roth_rate", params.roth_rate)
    _check_non_negative(result, f"{base}.ira_value", params.ira_value)
    _check_rate(result, f"{base}.ira_rate", params.ira_rate)
    _check_non_negative(result, f"{base}.basis", params.basis)
    _check_non_negative(result, f"{base}.starting_cash", params.starting_cash)

    if params.basis > params.ira_value:
        result.errors.append(f"{base}.basis: must be <= ira_value")
    if params.birth_year > params.start_year:
        result.errors.append(f"{base}.birth_year: must be <= start_year")
    if params.start_year > params.end_year:
        result.errors.append(f"{base}.start_year/{base}.end_year: start_year must be <= end_year")
    elif params.horizon_years > MAX_HORIZON_YEARS:
        result.errors.append(f"{base}.end_year: horizon must be at most {MAX_HORIZON_YEARS} years")
    if not 1 <= params.birth_month <= 12:
        result.errors.append(f"{base}.birth_month: must be between 1 and 12")

    if result.is_valid and first_rmd_year(params.birth_year, params.birth_month) >= params.end_year:
        result.warnings.append(f"{base}.end_year: horizon ends before the first RMD year")
    return result


def validate_search(settings: SearchSettings, horizon_years: int, result: ValidationResult | None = None) -> ValidationResult:
    if result is None:
        result = ValidationResult()
    base = "search"

    _check_enum(result, f"{base}.objective", settings.objective, OBJECTIVES)
    _check_enum(result, f"{base}.algorithm", settings.algorithm, ALGORITHMS)
    if settings.rollover_step <= 0:
        result.errors.append(f"{base}.rollover_step: must be > 0")
    if settings.algorithm == "dijkstra" and settings.objective in OBJECTIVES and settings.objective not in NON_NEGATIVE_OBJECTIVES:
        result.errors.append(
            f"{base}.algorithm: 'dijkstra' requires non-negative edge costs; use 'exhaustive' with '{settings.objective}'"
        )
    if settings.algorithm == "exhaustive" and not settings.memoize and horizon_years > EXHAUSTIVE_HORIZON_WARNING:
        result.warnings.append(
            f"{base}.memoize: exhaustive search over {horizon_years} years without memoization explores up to 2^{horizon_years} paths"
        )
    return result


def validate_scenario(scenario: Scenario) -> ValidationResult:
    result = validate_parameters(scenario.parameters)
    validate_search(scenario.search, scenario.parameters.horizon_years, result)
    return result
