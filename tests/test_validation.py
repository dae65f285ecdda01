import pytest

from rothpath.schema import Scenario, SearchSettings, load_scenario
from rothpath.validate import validate_scenario
from tests.helpers import clone_scenario, make_params, write_scenario


def _run_validation(tmp_path, sample_scenario_dict, mutator):
    data = clone_scenario(sample_scenario_dict)
    mutator(data)
    path = write_scenario(tmp_path, data)
    return validate_scenario(load_scenario(path))


def test_sample_scenario_validates(sample_scenario_path):
    result = validate_scenario(load_scenario(sample_scenario_path))
    assert result.errors == []
    assert result.warnings == []


@pytest.mark.parametrize(
    ("mutator", "expected_error"),
    [
        (
            lambda d: d["parameters"].update({"inflation_rate": 1.2}),
            "parameters.inflation_rate: must be between 0 and 1",
        ),
        (
            lambda d: d["parameters"].update({"roth_rate": -0.01}),
            "parameters.roth_rate: must be between 0 and 1",
        ),
        (
            lambda d: d["parameters"].update({"ira_rate": 2}),
            "parameters.ira_rate: must be between 0 and 1",
        ),
        (
            lambda d: d["parameters"].update({"yearly_taxable_income": -10}),
            "parameters.yearly_taxable_income: must be >= 0",
        ),
        (
            lambda d: d["parameters"].update({"ira_value": -1, "basis": -2}),
            "parameters.ira_value: must be >= 0",
        ),
        (
            lambda d: d["parameters"].update({"starting_cash": -5}),
            "parameters.starting_cash: must be >= 0",
        ),
        (
            lambda d: d["parameters"].update({"basis": 6001}),
            "parameters.basis: must be <= ira_value",
        ),
        (
            lambda d: d["parameters"].update({"birth_year": 2036}),
            "parameters.birth_year: must be <= start_year",
        ),
        (
            lambda d: d["parameters"].update({"end_year": 2034}),
            "parameters.start_year/parameters.end_year: start_year must be <= end_year",
        ),
        (
            lambda d: d["parameters"].update({"end_year": 2236}),
            "parameters.end_year: horizon must be at most 200 years",
        ),
        (
            lambda d: d["parameters"].update({"birth_month": 13}),
            "parameters.birth_month: must be between 1 and 12",
        ),
        (
            lambda d: d["search"].update({"objective": "maximize_happiness"}),
            "search.objective: 'maximize_happiness' is not valid; expected one of [maximize_after_tax_cash, minimize_tax]",
        ),
        (
            lambda d: d["search"].update({"algorithm": "astar"}),
            "search.algorithm: 'astar' is not valid; expected one of [dijkstra, exhaustive]",
        ),
        (
            lambda d: d["search"].update({"rollover_step": 0}),
            "search.rollover_step: must be > 0",
        ),
        (
            lambda d: d["search"].update({"objective": "maximize_after_tax_cash", "algorithm": "dijkstra"}),
            "search.algorithm: 'dijkstra' requires non-negative edge costs; use 'exhaustive' with 'maximize_after_tax_cash'",
        ),
    ],
)
def test_validation_error_cases(tmp_path, sample_scenario_dict, mutator, expected_error):
    result = _run_validation(tmp_path, sample_scenario_dict, mutator)
    assert expected_error in result.errors
    assert not result.is_valid


def test_basis_equal_to_ira_is_allowed():
    result = validate_scenario(Scenario(parameters=make_params(basis=6000)))
    assert result.errors == []


def test_horizon_before_first_rmd_warns():
    result = validate_scenario(Scenario(parameters=make_params(birth_year=1980)))
    assert result.errors == []
    assert "parameters.end_year: horizon ends before the first RMD year" in result.warnings


def test_long_unmemoized_exhaustive_search_warns():
    settings = SearchSettings(algorithm="exhaustive", memoize=False)
    result = validate_scenario(Scenario(parameters=make_params(start_year=2019, end_year=2045), search=settings))

    assert result.is_valid
    assert any(msg.startswith("search.memoize:") for msg in result.warnings)


def test_longest_allowed_horizon_is_valid():
    result = validate_scenario(Scenario(parameters=make_params(start_year=2035, end_year=2235)))
    assert result.errors == []
