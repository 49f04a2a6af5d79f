"""Tests for the balance config tree and overrides."""

import dataclasses
import json

import pytest

from alien_clicker.data.balance import BALANCE, balance_to_dict, load_balance, override_balance
from alien_clicker.errors import AlienClickerError, ConfigError


def test_balance_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        BALANCE.crit.max_chance = 100.0


def test_override_changes_only_named_keys():
    tuned = override_balance(BALANCE, {"crit": {"max_chance": 50.0}})
    assert tuned.crit.max_chance == 50.0
    assert tuned.crit.base_chance == BALANCE.crit.base_chance
    assert tuned.upgrades == BALANCE.upgrades
    assert BALANCE.crit.max_chance == 95.0


def test_override_arrays_replace():
    tuned = override_balance(BALANCE, {"ascension": {"hull_cost_table": [1, 2, 3]}})
    assert tuned.ascension.hull_cost_table == (1, 2, 3)


def test_unknown_key_rejected():
    with pytest.raises(ConfigError):
        override_balance(BALANCE, {"crit": {"max_chanse": 50.0}})
    with pytest.raises(ConfigError):
        override_balance(BALANCE, {"economy": {}})


def test_non_mapping_for_section_rejected():
    with pytest.raises(ConfigError):
        override_balance(BALANCE, {"crit": 5})


def test_load_balance(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text(json.dumps({"ascension": {"prestige_points": {"base_level": 50}}}))
    tuned = load_balance(path)
    assert tuned.ascension.prestige_points.base_level == 50


def test_load_balance_bad_file(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text("{oops")
    with pytest.raises(ConfigError):
        load_balance(path)
    with pytest.raises(AlienClickerError):
        load_balance(tmp_path / "missing.json")


def test_balance_to_dict_round_trips_through_override():
    as_dict = json.loads(json.dumps(balance_to_dict(BALANCE)))
    assert override_balance(BALANCE, as_dict) == BALANCE
