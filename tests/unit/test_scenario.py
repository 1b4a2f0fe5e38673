"""
Unit tests for scenario records and presets.
"""

import json

import pytest

from data.scenario import (
    DEFAULT_SCENARIO,
    PRESETS,
    Scenario,
    get_preset,
    load_scenario,
    save_scenario,
)


@pytest.fixture
def scenario_record():
    return {
        "name": "Edge case",
        "description": "Values outside the editor ranges",
        "clusters": [
            {"id": "c1", "x": 8.0, "y": -0.5, "weight": 1.5, "spread": 0.01},
            {"id": "c2", "x": 1.0, "y": 1.0, "weight": 0.3, "spread": 0.6},
        ],
        "candidates": [
            {"id": "A", "label": "Alice", "x": -7.0, "y": 0.0},
            {"id": "B", "x": 2.0, "y": 2.0},
        ],
        "seed": 77,
    }


@pytest.mark.unit
def test_from_dict_clamps(scenario_record):
    """Test that out-of-range numbers are clamped on load."""
    scenario = Scenario.from_dict(scenario_record)
    c1 = scenario.clusters[0]
    assert (c1.x, c1.weight, c1.spread) == (5.0, 1.0, 0.05)
    assert scenario.candidates[0].x == -5.0
    assert scenario.candidates[0].label == "Alice"
    assert scenario.candidates[1].label == "B"
    assert scenario.seed == 77


@pytest.mark.unit
def test_file_round_trip(scenario_record, tmp_path):
    """Test saving and loading preserves the clamped scenario."""
    scenario = Scenario.from_dict(scenario_record)
    path = save_scenario(scenario, tmp_path / "scenario.json")

    with open(path) as f:
        assert json.load(f)["clusters"][0]["x"] == 5.0
    assert load_scenario(path) == scenario


@pytest.mark.unit
def test_seed_optional(scenario_record):
    del scenario_record["seed"]
    scenario = Scenario.from_dict(scenario_record)
    assert scenario.seed is None
    assert "seed" not in scenario.to_dict()


@pytest.mark.unit
def test_missing_field_rejected(scenario_record):
    del scenario_record["clusters"][0]["spread"]
    with pytest.raises(ValueError, match="Invalid scenario record"):
        Scenario.from_dict(scenario_record)


@pytest.mark.unit
def test_non_numeric_rejected(scenario_record):
    scenario_record["candidates"][0]["x"] = "left"
    with pytest.raises(ValueError):
        Scenario.from_dict(scenario_record)


@pytest.mark.unit
def test_duplicate_candidate_ids_rejected(scenario_record):
    scenario_record["candidates"][1]["id"] = "A"
    with pytest.raises(ValueError, match="Duplicate"):
        Scenario.from_dict(scenario_record)


@pytest.mark.unit
def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_scenario(path)


@pytest.mark.unit
def test_presets():
    """Test the built-in presets and lookup."""
    assert [p.name for p in PRESETS] == [
        "Plurality Split",
        "IRV vs Condorcet",
        "Approval Compromise",
    ]
    assert get_preset("irv vs condorcet").seed == 9
    assert get_preset("approval-compromise").seed == 2024
    assert DEFAULT_SCENARIO.seed == 42
    with pytest.raises(KeyError):
        get_preset("nope")


@pytest.mark.unit
def test_presets_survive_round_trip():
    for preset in PRESETS:
        assert Scenario.from_dict(preset.to_dict()) == preset
