"""Tests for stat cost curves and the discount pipeline."""

import math

import pytest

from alien_clicker.data.balance import BALANCE, override_balance
from alien_clicker.data.stats import ALL_STATS
from alien_clicker.engine.cost import CostEngine
from alien_clicker.engine.game_state import GameState


def test_raw_cost_curve_with_offset():
    balance = override_balance(
        BALANCE, {"upgrades": {"stat_costs": {"point_multiplier": {"base_cost": 38}}}}
    )
    costs = CostEngine(balance)
    assert costs.get_raw_cost("point_multiplier", 0) == 38
    assert costs.get_raw_cost("point_multiplier", 1) == 49


def test_ship_costs():
    costs = CostEngine()
    assert costs.get_raw_cost("ship", 0) == 10
    assert costs.get_raw_cost("ship", 1) == 11
    assert costs.get_raw_cost("ship", 2) == 13


@pytest.mark.parametrize("owned", [
    {},
    {"cheat_codes": True},
    {"energy_recycling": True, "cheat_codes": True, "omniscient_ai": True, "universal_translator": True},
])
def test_costs_strictly_increase_under_discount(owned):
    costs = CostEngine()
    state = GameState(sub_upgrades=dict(owned))
    for stat_id in ALL_STATS:
        prices = [costs.get_cost(stat_id, level, state) for level in range(40)]
        assert all(b > a for a, b in zip(prices, prices[1:])), (stat_id, prices[:5])


def test_cheap_ship_levels_stay_distinct_with_deep_discount():
    costs = CostEngine()
    state = GameState(sub_upgrades={"cheat_codes": True})
    assert costs.get_cost("ship", 0, state) == 8
    assert costs.get_cost("ship", 1, state) == 9


def test_stats_have_distinct_curves():
    costs = CostEngine()
    assert len({costs.get_raw_cost(s, 20) / costs.get_raw_cost(s, 0) for s in ALL_STATS}) == len(ALL_STATS)


def test_unknown_stat_raises():
    with pytest.raises(KeyError):
        CostEngine().get_raw_cost("warp_drive", 0)


def test_no_discount_by_default():
    costs = CostEngine()
    state = GameState()
    assert costs.get_discount(state) == 1.0
    assert costs.apply_discount(100, state) == 100


def test_single_discount_floors():
    costs = CostEngine()
    state = GameState(sub_upgrades={"ancient_texts": True})
    assert costs.get_discount(state) == pytest.approx(0.975)
    assert costs.apply_discount(100, state) == 97


def test_discounts_multiply():
    costs = CostEngine()
    state = GameState(sub_upgrades={"energy_recycling": True, "cheat_codes": True})
    assert costs.get_discount(state) == pytest.approx(0.95 * 0.80)


def test_discount_never_raises_price():
    costs = CostEngine()
    state = GameState(sub_upgrades={"energy_recycling": True, "universal_translator": True})
    for level in range(30):
        assert costs.get_cost("crit_chance", level, state) <= costs.get_raw_cost("crit_chance", level)


def test_next_cost_reads_current_level():
    costs = CostEngine()
    state = GameState(ships_count=2)
    assert costs.get_next_cost("ship", state) == costs.get_raw_cost("ship", 2)


def test_sub_upgrade_cost_discounted():
    costs = CostEngine()
    state = GameState(sub_upgrades={"cheat_codes": True})
    assert costs.get_sub_upgrade_cost("laser_focusing", state) == 800


def test_prestige_gate_is_never_discounted():
    costs = CostEngine()
    state = GameState(sub_upgrades={"cheat_codes": True, "omniscient_ai": True})
    assert costs.get_sub_upgrade_cost("meaning_of_life", state) == 25_000_000


def test_unknown_sub_upgrade_costs_infinity():
    assert math.isinf(CostEngine().get_sub_upgrade_cost("nope", GameState()))
