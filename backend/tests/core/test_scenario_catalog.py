"""Tests for the scenario catalog — closed, ordered, uniquely keyed."""

import dataclasses

import pytest

from decision_sim.core.domain_types import ScenarioCategory
from decision_sim.core.scenario_catalog import (
    default_scenario,
    find_scenario,
    list_scenarios,
)


def test_catalog_has_one_scenario_per_category():
    scenarios = list_scenarios()
    assert len(scenarios) == 4
    assert [s.category for s in scenarios] == list(ScenarioCategory)


def test_ids_are_unique():
    ids = [s.id for s in list_scenarios()]
    assert len(ids) == len(set(ids))


def test_default_is_first_entry():
    assert default_scenario() is list_scenarios()[0]
    assert default_scenario().id == "crisis_1"


def test_find_scenario_by_id():
    assert find_scenario("env_1").title == "글로벌 탄소 규제 강화"


def test_find_unknown_scenario_returns_none():
    assert find_scenario("does_not_exist") is None


def test_scenarios_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_scenario().title = "changed"
