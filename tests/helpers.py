import copy
import json
from pathlib import Path

from rothpath.schema import ScenarioParameters

BASE_PARAMETERS = {
    "yearly_taxable_income": 10000,
    "inflation_rate": 0.03,
    "roth_value": 5000,
    "roth_rate": 0.08,
    "ira_value": 6000,
    "ira_rate": 0.08,
    "basis": 0,
    "birth_year": 1955,
    "birth_month": 6,
    "start_year": 2035,
    "end_year": 2040,
    "starting_cash": 5000,
}


def write_scenario(tmp_path: Path, data: dict, filename: str = "scenario.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_scenario(data: dict) -> dict:
    return copy.deepcopy(data)


def make_params(**overrides) -> ScenarioParameters:
    data = dict(BASE_PARAMETERS)
    data.update(overrides)
    return ScenarioParameters.from_dict(data)
