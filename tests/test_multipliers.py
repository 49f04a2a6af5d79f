"""Tests for the damage, crit, XP, speed and passive pipelines."""

import pytest

from alien_clicker.data.balance import BALANCE, override_balance
from alien_clicker.engine.bonuses import ArtifactBonuses, PowerUpBuffs
from alien_clicker.engine.game_state import GameState
from alien_clicker.engine.multipliers import MultiplierEngine


# ── Points per hit ───────────────────────────────────────────────────────────

def test_fresh_state_hits_for_base_points():
    assert MultiplierEngine().get_points_per_hit(GameState()) == pytest.approx(1.0)


def test_amplifier_levels_add_damage():
    state = GameState(point_multiplier_level=4)
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(5.0)


def test_damage_sub_upgrade_applies_once():
    state = GameState(point_multiplier_level=4, sub_upgrades={"laser_focusing": True})
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(5.0 * 1.15)


def test_unowned_flags_do_nothing():
    state = GameState(sub_upgrades={"laser_focusing": False})
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(1.0)


def test_hull_switches_per_level_damage_and_doubles():
    state = GameState(point_multiplier_level=3, prestige_upgrades={"prestige_hull": 1})
    # (1 + 3 × 2) × 2^1
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(14.0)
    state.prestige_upgrades["prestige_hull"] = 2
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(28.0)


def test_unspent_prestige_points_boost_live():
    state = GameState(prestige_points=400)
    engine = MultiplierEngine()
    assert engine.get_points_per_hit(state) == pytest.approx(2.0)
    state.prestige_points = 0
    assert engine.get_points_per_hit(state) == pytest.approx(1.0)


def test_ascension_damage_is_dampened():
    state = GameState(prestige_upgrades={"prestige_damage": 10})
    # raw ×2.0, dampened to ×1.5
    assert MultiplierEngine().get_points_per_hit(state) == pytest.approx(1.5)


def test_dampening_is_configurable():
    balance = override_balance(BALANCE, {"ascension": {"bonus_dampening": 1.0}})
    state = GameState(prestige_upgrades={"prestige_points": 10})
    assert MultiplierEngine(balance).get_points_per_hit(state) == pytest.approx(2.5)


def test_artifact_and_power_up_damage():
    engine = MultiplierEngine(
        artifacts=ArtifactBonuses(damage=0.5),
        power_ups=PowerUpBuffs(damage_active=True),
    )
    assert engine.get_points_per_hit(GameState()) == pytest.approx(1.5 * 3.0)


def test_modifiers_keep_catalog_order():
    engine = MultiplierEngine()
    damage_ids = [m.upgrade_id for m in engine.modifiers["damage"]]
    assert damage_ids[0] == "laser_focusing"
    assert damage_ids.index("overclocked_reactors") < damage_ids.index("universe_seed")


def test_boss_damage():
    state = GameState(sub_upgrades={"alien_cookbook": True}, prestige_upgrades={"prestige_boss_power": 5})
    assert MultiplierEngine().get_boss_damage(state) == pytest.approx(1.0 * 2.0 * 2.0)


# ── Crits ────────────────────────────────────────────────────────────────────

def test_crit_chance_base_and_levels():
    engine = MultiplierEngine()
    assert engine.get_crit_chance(GameState()) == pytest.approx(2.0)
    assert engine.get_crit_chance(GameState(crit_chance_level=10)) == pytest.approx(7.0)


def test_crit_chance_additive_sources():
    state = GameState(
        sub_upgrades={"lucky_dice": True},
        prestige_upgrades={"prestige_crit": 1},
    )
    engine = MultiplierEngine(artifacts=ArtifactBonuses(crit=0.01))
    # 2 + 2 (dice) + 2 (ascension) + 1 (artifact)
    assert engine.get_crit_chance(state) == pytest.approx(7.0)


def test_crit_chance_clamped():
    engine = MultiplierEngine()
    assert engine.get_crit_chance(GameState(crit_chance_level=1000)) == 95.0
    low = MultiplierEngine(artifacts=ArtifactBonuses(crit=-1.0))
    assert low.get_crit_chance(GameState()) == 0.0


def test_crit_multiplier_base():
    assert MultiplierEngine().get_crit_multiplier(GameState()) == pytest.approx(2.0)


def test_crit_multiplier_sub_upgrades():
    state = GameState(sub_upgrades={"lucky_horseshoe": True})
    assert MultiplierEngine().get_crit_multiplier(state) == pytest.approx(2.4)


def test_crit_multiplier_artifact_cube_root():
    engine = MultiplierEngine(artifacts=ArtifactBonuses(crit=8.0))
    # 2 × (1 + 2 × 0.015)
    assert engine.get_crit_multiplier(GameState()) == pytest.approx(2.06)


def test_crit_multiplier_bounds():
    huge = MultiplierEngine(artifacts=ArtifactBonuses(crit=1e9))
    assert huge.get_crit_multiplier(GameState()) == 10.0
    negative = MultiplierEngine(artifacts=ArtifactBonuses(crit=-5.0))
    assert negative.get_crit_multiplier(GameState()) == 2.0


# ── XP ───────────────────────────────────────────────────────────────────────

def test_xp_multiplier_levels():
    assert MultiplierEngine().get_xp_multiplier(GameState(xp_boost_level=5)) == pytest.approx(1.5)


def test_xp_per_ship_tracks_fleet_size():
    state = GameState(xp_boost_level=5, ships_count=10, sub_upgrades={"fleet_academy": True})
    engine = MultiplierEngine()
    assert engine.get_xp_multiplier(state) == pytest.approx(1.5 * 1.3)
    state.ships_count = 20
    assert engine.get_xp_multiplier(state) == pytest.approx(1.5 * 1.6)


def test_ascension_xp_is_not_dampened():
    state = GameState(prestige_upgrades={"prestige_xp": 5})
    engine = MultiplierEngine(artifacts=ArtifactBonuses(xp=0.5))
    assert engine.get_xp_multiplier(state) == pytest.approx(2.0 * 1.5)


def test_kill_xp():
    state = GameState(sub_upgrades={"void_channeling": True})
    assert MultiplierEngine().get_bonus_xp(state, 10.0) == pytest.approx(20.0)


# ── Speed / passive ──────────────────────────────────────────────────────────

def test_fire_cooldown_base():
    engine = MultiplierEngine()
    assert engine.get_fire_cooldown(GameState()) == 1000
    assert engine.get_fire_cooldown(GameState(attack_speed_level=100)) == 120


def test_fire_cooldown_floor():
    state = GameState(
        attack_speed_level=100,
        sub_upgrades={"holographic_decoys": True, "temporal_acceleration": True},
    )
    assert MultiplierEngine().get_fire_cooldown(state) == 50


def test_fire_cooldown_speed_sources():
    engine = MultiplierEngine(
        artifacts=ArtifactBonuses(speed=1.0),
        power_ups=PowerUpBuffs(speed_active=True),
    )
    assert engine.get_fire_cooldown(GameState()) == 250


def test_passive_generation_order():
    state = GameState(
        resource_gen_level=10,
        sub_upgrades={"coffee_machine": True, "philosophers_stone": True},
    )
    # (10 × 2 + 50) × 5
    assert MultiplierEngine().get_passive_generation(state) == pytest.approx(350.0)


def test_passive_generation_ascension():
    state = GameState(resource_gen_level=10, prestige_upgrades={"prestige_passive": 4})
    assert MultiplierEngine().get_passive_generation(state) == pytest.approx(40.0)


@pytest.mark.parametrize("bonus", [-1.0, -3.0])
def test_fire_cooldown_ignores_negative_artifact_speed(bonus):
    engine = MultiplierEngine(artifacts=ArtifactBonuses(speed=bonus))
    assert engine.get_fire_cooldown(GameState()) == 1000


def test_fire_cooldown_ignores_non_positive_power_up():
    engine = MultiplierEngine(power_ups=PowerUpBuffs(speed_active=True, speed_factor=0.0))
    assert engine.get_fire_cooldown(GameState()) == 1000
