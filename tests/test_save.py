"""Tests for save/load."""

import json
import logging

from alien_clicker.engine.game_state import GameState, GameStats
from alien_clicker.engine.save import delete_game, dict_to_state, load_game, save_game, state_to_dict


def test_missing_keys_default_to_zero_values():
    state = dict_to_state({})
    assert state == GameState()


def test_partial_save_keeps_known_fields():
    state = dict_to_state({"points": 12.5, "prestige_upgrades": {"prestige_damage": 3}, "stats": {}})
    assert state.points == 12.5
    assert state.prestige_upgrades == {"prestige_damage": 3}
    assert state.sub_upgrades == {}
    assert state.stats == GameStats()


def test_save_and_load(tmp_path):
    path = tmp_path / "save.json"
    state = GameState(
        points=1234.0,
        ships_count=7,
        level=42,
        sub_upgrades={"death_pact": True},
        prestige_points=5,
        auto_buy_enabled=True,
        stats=GameStats(total_clicks=99, critical_hits=3),
    )
    assert save_game(state, path)
    assert load_game(path) == state


def test_load_missing_file(tmp_path):
    assert load_game(tmp_path / "nothing.json") is None


def test_corrupt_save_is_ignored(tmp_path, caplog):
    path = tmp_path / "save.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING):
        assert load_game(path) is None
    assert "unreadable save" in caplog.text


def test_save_shape_is_plain_json(tmp_path):
    data = state_to_dict(GameState(sub_upgrades={"lucky_dice": True}))
    assert json.loads(json.dumps(data)) == data
    assert data["level"] == 1
    assert data["stats"]["max_level"] == 1


def test_delete_game(tmp_path):
    path = tmp_path / "save.json"
    save_game(GameState(), path)
    delete_game(path)
    assert not path.exists()
    delete_game(path)
