from decimal import Decimal

import pytest

from rothpath.schema import SchemaError, SearchSettings, load_scenario
from tests.helpers import clone_scenario, write_scenario


def test_load_sample_scenario(sample_scenario_path):
    scenario = load_scenario(sample_scenario_path)

    assert scenario.parameters.ira_value == Decimal("6000")
    assert scenario.parameters.inflation_rate == Decimal("0.03")
    assert scenario.parameters.birth_month == 6
    assert scenario.search.rollover_step == Decimal("1000")


def test_load_scenario_rejects_non_object_root(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(SchemaError, match="scenario: root must be a JSON object"):
        load_scenario(path)


def test_load_scenario_requires_parameters(tmp_path):
    path = write_scenario(tmp_path, {"search": {}})

    with pytest.raises(SchemaError, match=r"scenario\.parameters: missing required field"):
        load_scenario(path)


def test_load_scenario_requires_required_field(tmp_path, sample_scenario_dict):
    data = clone_scenario(sample_scenario_dict)
    del data["parameters"]["ira_value"]
    path = write_scenario(tmp_path, data)

    with pytest.raises(SchemaError, match=r"parameters\.ira_value: missing required field"):
        load_scenario(path)


def test_load_scenario_rejects_non_numeric_amount(tmp_path, sample_scenario_dict):
    data = clone_scenario(sample_scenario_dict)
    data["parameters"]["roth_value"] = "lots"
    path = write_scenario(tmp_path, data)

    with pytest.raises(SchemaError, match=r"parameters\.roth_value: expected number"):
        load_scenario(path)


def test_load_scenario_rejects_fractional_year(tmp_path, sample_scenario_dict):
    data = clone_scenario(sample_scenario_dict)
    data["parameters"]["start_year"] = 2035.5
    path = write_scenario(tmp_path, data)

    with pytest.raises(SchemaError, match=r"parameters\.start_year: expected integer"):
        load_scenario(path)


def test_load_scenario_rejects_wrong_nested_type(tmp_path, sample_scenario_dict):
    data = clone_scenario(sample_scenario_dict)
    data["search"] = "fast"
    path = write_scenario(tmp_path, data)

    with pytest.raises(SchemaError, match=r"search: expected object"):
        load_scenario(path)


def test_search_section_is_optional(tmp_path, sample_scenario_dict):
    data = clone_scenario(sample_scenario_dict)
    del data["search"]
    del data["parameters"]["basis"]
    del data["parameters"]["starting_cash"]
    path = write_scenario(tmp_path, data)

    scenario = load_scenario(path)
    assert scenario.search == SearchSettings()
    assert scenario.parameters.basis == 0
    assert scenario.parameters.starting_cash == 0
