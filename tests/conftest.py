import json
from pathlib import Path

import pytest

SAMPLE_SCENARIO = Path(__file__).resolve().parent.parent / "sample_scenario.json"


@pytest.fixture
def sample_scenario_path() -> Path:
    return SAMPLE_SCENARIO


@pytest.fixture
def sample_scenario_dict() -> dict:
    return json.loads(SAMPLE_SCENARIO.read_text(encoding="utf-8"))
