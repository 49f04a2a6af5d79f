"""Multiplier engine — composes damage, crit, XP, speed and passive income.

Every getter is a pure function of the state passed in plus the injected
providers.  Nothing is cached, so these are safe to call every frame.

Sub-upgrade effects are compiled once into ordered ``Modifier`` records, one
list per pipeline, preserving catalog order.  A record applies only while
its upgrade is owned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.data.sub_upgrades import SUB_UPGRADES, Channel, Effect, SubUpgradeDef
from alien_clicker.engine.ascension import AscensionEngine
from alien_clicker.engine.bonuses import ArtifactBonuses, PowerUpBuffs
from alien_clicker.engine.game_state import GameState

Apply = Callable[[float, GameState], float]


@dataclass(frozen=True)
class Modifier:
    upgrade_id: str
    apply: Apply


def _make_apply(effect: Effect) -> Apply:
    v = effect.value
    if effect.channel in (Channel.CRIT_CHANCE, Channel.PASSIVE_ADD):
        return lambda value, state: value + v
    if effect.channel == Channel.XP_PER_SHIP:
        return lambda value, state: value * (1.0 + state.ships_count * v)
    return lambda value, state: value * v


# Pipeline name → channels feeding it
_PIPELINES: dict[str, tuple[Channel, ...]] = {
    "damage": (Channel.DAMAGE,),
    "click": (Channel.CLICK_DAMAGE,),
    "fleet": (Channel.FLEET_DAMAGE,),
    "boss": (Channel.BOSS_DAMAGE,),
    "crit_chance": (Channel.CRIT_CHANCE,),
    "crit_multiplier": (Channel.CRIT_MULTIPLIER,),
    "xp": (Channel.XP, Channel.XP_PER_SHIP),
    "kill_xp": (Channel.KILL_XP,),
    "speed": (Channel.SPEED,),
    "passive": (Channel.PASSIVE_ADD, Channel.PASSIVE_MULT),
}


def build_modifiers(catalog: dict[str, SubUpgradeDef]) -> dict[str, list[Modifier]]:
    """Compile the catalog's effects into per-pipeline modifier lists."""
    modifiers: dict[str, list[Modifier]] = {name: [] for name in _PIPELINES}
    for upgrade in catalog.values():
        for effect in upgrade.effects:
            for name, channels in _PIPELINES.items():
                if effect.channel in channels:
                    modifiers[name].append(Modifier(upgrade.id, _make_apply(effect)))
    return modifiers


class MultiplierEngine:
    def __init__(
        self,
        balance: GameBalance = BALANCE,
        catalog: dict[str, SubUpgradeDef] = SUB_UPGRADES,
        ascension: AscensionEngine | None = None,
        artifacts: ArtifactBonuses | None = None,
        power_ups: PowerUpBuffs | None = None,
    ) -> None:
        self.balance = balance
        self.catalog = catalog
        self.ascension = ascension or AscensionEngine(balance)
        self.artifacts = artifacts or ArtifactBonuses()
        self.power_ups = power_ups or PowerUpBuffs()
        self.modifiers = build_modifiers(catalog)

    def _run(self, pipeline: str, value: float, state: GameState) -> float:
        for mod in self.modifiers[pipeline]:
            if state.owns(mod.upgrade_id):
                value = mod.apply(value, state)
        return value

    def _dampen(self, multiplier: float) -> float:
        return 1.0 + (multiplier - 1.0) * self.balance.ascension.bonus_dampening

    # ── Damage ───────────────────────────────────────────

    def get_points_per_hit(self, state: GameState) -> float:
        bal = self.balance.upgrades
        hull_level = self.ascension.get_hull_level(state)

        per_level = bal.hull_damage_per_level if hull_level > 0 else bal.damage_per_level
        points = bal.base_points + state.point_multiplier_level * per_level
        if hull_level > 0:
            points *= bal.hull_damage_base ** hull_level

        points *= self.ascension.get_unspent_pp_multiplier(state)
        points = self._run("damage", points, state)

        points *= self._dampen(self.ascension.get_damage_multiplier(state))
        points *= self._dampen(self.ascension.get_points_multiplier(state))

        points *= 1.0 + self.artifacts.get_damage_bonus()
        points *= self.power_ups.get_damage_multiplier()
        return max(0.0, points)

    def get_click_damage(self, state: GameState) -> float:
        return self._run("click", self.get_points_per_hit(state), state)

    def get_auto_fire_damage(self, state: GameState) -> float:
        """Damage of one fleet volley (fleet-only factors on top of points per hit)."""
        return self._run("fleet", self.get_points_per_hit(state), state)

    def get_boss_damage(self, state: GameState, base_damage: float | None = None) -> float:
        damage = self.get_points_per_hit(state) if base_damage is None else base_damage
        damage = self._run("boss", damage, state)
        return damage * self.ascension.get_boss_damage_multiplier(state)

    # ── Crits ────────────────────────────────────────────

    def get_crit_chance(self, state: GameState) -> float:
        """Crit chance in percent, clamped to [0, max_chance]."""
        crit = self.balance.crit
        chance = crit.base_chance + state.crit_chance_level * crit.chance_per_level
        chance = self._run("crit_chance", chance, state)
        chance += self.ascension.get_crit_bonus(state)
        chance += self.artifacts.get_crit_bonus() * 100.0
        chance += self.power_ups.get_crit_chance_bonus() * 100.0
        return min(crit.max_chance, max(0.0, chance))

    def get_crit_multiplier(self, state: GameState) -> float:
        crit = self.balance.crit
        multiplier = crit.base_multiplier
        artifact = max(0.0, self.artifacts.get_crit_bonus())
        multiplier *= 1.0 + artifact ** (1.0 / 3.0) * crit.artifact_coefficient
        multiplier = self._run("crit_multiplier", multiplier, state)
        return min(crit.max_multiplier, max(crit.base_multiplier, multiplier))

    # ── XP ───────────────────────────────────────────────

    def get_xp_multiplier(self, state: GameState) -> float:
        xp = 1.0 + state.xp_boost_level * self.balance.xp.per_level
        xp = self._run("xp", xp, state)
        xp *= self.ascension.get_xp_multiplier(state)
        xp *= 1.0 + self.artifacts.get_xp_bonus()
        return xp

    def get_kill_xp_multiplier(self, state: GameState) -> float:
        return self._run("kill_xp", 1.0, state)

    def get_bonus_xp(self, state: GameState, base_xp: float) -> float:
        """XP awarded for a kill worth ``base_xp``."""
        return base_xp * self.get_xp_multiplier(state) * self.get_kill_xp_multiplier(state)

    # ── Speed / passive ──────────────────────────────────

    def get_fire_cooldown(self, state: GameState) -> int:
        """Fleet fire cooldown in milliseconds."""
        spd = self.balance.speed
        cooldown = max(
            math.floor(spd.base_cooldown_ms * spd.reduction_per_level ** state.attack_speed_level),
            spd.min_base_cooldown_ms,
        )
        cooldown = self._run("speed", cooldown, state)
        cooldown /= self.ascension.get_speed_multiplier(state)
        cooldown /= 1.0 + max(0.0, self.artifacts.get_speed_bonus())
        power_up = self.power_ups.get_speed_multiplier()
        if power_up > 0:
            cooldown /= power_up
        return max(int(spd.min_cooldown_ms), math.floor(cooldown))

    def get_passive_generation(self, state: GameState) -> float:
        """Points per second earned without input."""
        passive = state.resource_gen_level * self.balance.passive.per_level
        passive = self._run("passive", passive, state)
        passive *= self.ascension.get_passive_multiplier(state)
        passive *= self.ascension.get_unspent_pp_multiplier(state)
        return max(0.0, passive)

    def get_income_multiplier(self, state: GameState) -> float:
        """Factor on every awarded point (artifact points and points power-up)."""
        return (1.0 + self.artifacts.get_points_bonus()) * self.power_ups.get_points_multiplier()
