"""Tests for hit resolution, passive ticks and number formatting."""

from unittest.mock import MagicMock

import pytest

from alien_clicker.engine.bonuses import ArtifactBonuses, PowerUpBuffs
from alien_clicker.engine.economy import format_number, handle_hit, tick_passive
from alien_clicker.engine.game_state import GameState
from alien_clicker.engine.multipliers import MultiplierEngine
from alien_clicker.engine.store import GameStateStore


def _rng(value: float) -> MagicMock:
    rng = MagicMock()
    rng.random.return_value = value
    return rng


def test_format_number_small():
    assert format_number(0) == "0"
    assert format_number(5) == "5"
    assert format_number(99.5) == "99.5"


def test_format_number_thousands():
    result = format_number(1500)
    assert "K" in result
    assert "1.5" in result


def test_format_number_large_suffixes():
    assert "M" in format_number(2_300_000)
    assert format_number(25_000_000_000_000).endswith("T")
    assert format_number(-1500).startswith("-")


def test_click_without_crit():
    store = GameStateStore()
    engine = MultiplierEngine()
    earned = handle_hit(store, engine, _rng(0.99), is_click=True)
    assert earned == pytest.approx(1.0)
    assert store.state.points == pytest.approx(1.0)
    assert store.state.stats.total_clicks == 1
    assert store.state.stats.critical_hits == 0


def test_click_crit_uses_crit_multiplier():
    store = GameStateStore()
    engine = MultiplierEngine()
    earned = handle_hit(store, engine, _rng(0.0), is_click=True)
    assert earned == pytest.approx(2.0)
    assert store.state.stats.critical_hits == 1


def test_fleet_volley_does_not_count_as_click():
    store = GameStateStore(GameState(sub_upgrades={"ship_swarm": True}))
    engine = MultiplierEngine()
    earned = handle_hit(store, engine, _rng(0.99), is_click=False)
    assert earned == pytest.approx(1.2)
    assert store.state.stats.total_clicks == 0


def test_click_only_upgrades_skip_fleet():
    state = GameState(sub_upgrades={"master_clicker": True})
    engine = MultiplierEngine()
    assert engine.get_click_damage(state) == pytest.approx(2.0)
    assert engine.get_auto_fire_damage(state) == pytest.approx(1.0)


def test_income_multiplier_applies_to_awarded_points():
    store = GameStateStore()
    engine = MultiplierEngine(
        artifacts=ArtifactBonuses(points=0.5),
        power_ups=PowerUpBuffs(points_active=True),
    )
    earned = handle_hit(store, engine, _rng(0.99))
    assert earned == pytest.approx(3.0)


def test_passive_tick():
    store = GameStateStore(GameState(resource_gen_level=10))
    engine = MultiplierEngine()
    earned = tick_passive(store, engine, 2.0)
    assert earned == pytest.approx(40.0)
    assert store.state.points == pytest.approx(40.0)
    assert store.state.stats.play_time == pytest.approx(2.0)


def test_passive_tick_ignores_non_positive_dt():
    store = GameStateStore(GameState(resource_gen_level=10))
    assert tick_passive(store, MultiplierEngine(), 0.0) == 0.0
    assert store.state.points == 0.0


def test_format_number_precision():
    assert format_number(12.34) == "12.3"
    assert format_number(250) == "250"
    assert format_number(250_000) == "250K"
    assert format_number(12_500_000) == "12.5M"
    assert format_number(float("inf")) == "∞"
