"""Ascension engine — prestige points, eligibility and the permanent upgrade tree.

All reads are pure functions of the state passed in.  The only mutation here
is ``buy_prestige_upgrade``; the reset itself lives on GameStateStore.ascend.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from alien_clicker.data.ascension_upgrades import (
    ASCENSION_UPGRADES,
    AscensionEffect,
    AscensionUpgrade,
)
from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.engine.game_state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrestigeBreakdown:
    """Components of the prestige point reward, each already floored."""

    base: int = 0
    achievement_bonus: int = 0
    bonus: int = 0
    previous_best: int = 0
    # × late-game multiplier when its sub-upgrade is owned
    multiplier: float = 1.0

    @property
    def total(self) -> int:
        return math.floor((self.base + self.achievement_bonus + self.bonus) * self.multiplier)


class AscensionEngine:
    def __init__(
        self,
        balance: GameBalance = BALANCE,
        catalog: dict[str, AscensionUpgrade] = ASCENSION_UPGRADES,
    ) -> None:
        self.balance = balance
        self.catalog = catalog

    # ── Prestige points ──────────────────────────────────

    def _curve(self, scaled: float) -> float:
        if scaled <= 0:
            return 0.0
        if self.balance.ascension.prestige_points.use_cube_root:
            return scaled ** (1.0 / 3.0)
        return math.sqrt(scaled)

    def calculate_prestige_points_breakdown(self, state: GameState) -> PrestigeBreakdown:
        pp = self.balance.ascension.prestige_points
        previous_best = state.highest_level_reached
        if state.level < pp.base_level:
            return PrestigeBreakdown(previous_best=previous_best)

        scaled = (state.level - pp.base_level) / pp.scaling_divisor
        base = math.floor(pp.base_multiplier * self._curve(scaled))
        achievement_bonus = state.unlocked_achievement_count() // pp.achievements_per_pp

        bonus = 0
        if (
            state.prestige_level >= 1
            and pp.new_level_bonus_enabled
            and state.level > previous_best
        ):
            floor_level = max(pp.base_level, previous_best)
            delta = pp.base_multiplier * self._curve((state.level - floor_level) / pp.scaling_divisor)
            bonus = max(0, math.floor(delta * (pp.new_level_bonus_multiplier - 1.0)))

        multiplier = pp.late_game_multiplier if state.owns(pp.late_game_upgrade_id) else 1.0
        return PrestigeBreakdown(
            base=base,
            achievement_bonus=achievement_bonus,
            bonus=bonus,
            previous_best=previous_best,
            multiplier=multiplier,
        )

    def calculate_prestige_points(self, state: GameState) -> int:
        return self.calculate_prestige_points_breakdown(state).total

    def is_unlocked(self, state: GameState) -> bool:
        """The prestige system opens with the gate sub-upgrade or any past ascension."""
        return state.prestige_level > 0 or state.owns(self.balance.ascension.unlock_upgrade_id)

    def can_ascend(self, state: GameState) -> bool:
        asc = self.balance.ascension
        if state.level < asc.prestige_points.base_level:
            return False
        if not self.is_unlocked(state):
            return False
        if state.level == asc.boss_gate_level and state.blocked_on_boss_level:
            return False
        return True

    # ── Upgrade tree ─────────────────────────────────────

    def get_upgrade_level(self, upgrade_id: str, state: GameState) -> int:
        upgrade = self.catalog.get(upgrade_id)
        return upgrade.get_current_level(state) if upgrade else 0

    def get_upgrade_cost(self, upgrade_id: str, state: GameState) -> float:
        """PP price of the next level.  ``math.inf`` when unknown or maxed."""
        upgrade = self.catalog.get(upgrade_id)
        if upgrade is None:
            return math.inf
        level = upgrade.get_current_level(state)
        if level >= upgrade.max_level:
            return math.inf

        asc = self.balance.ascension
        if upgrade_id == asc.hull_upgrade_id:
            if level >= len(asc.hull_cost_table):
                return math.inf
            return asc.hull_cost_table[level]
        return math.floor(upgrade.cost_per_level * asc.exponential_base ** level)

    def buy_prestige_upgrade(self, state: GameState, upgrade_id: str) -> bool:
        """Spend PP on one level.  False (no mutation) when not possible."""
        upgrade = self.catalog.get(upgrade_id)
        if upgrade is None:
            return False
        cost = self.get_upgrade_cost(upgrade_id, state)
        if math.isinf(cost) or state.prestige_points < cost:
            return False

        state.prestige_points -= int(cost)
        state.prestige_upgrades[upgrade_id] = upgrade.get_current_level(state) + 1
        if upgrade_id == self.balance.ascension.auto_buy_upgrade_id:
            state.auto_buy_enabled = True
        logger.debug("Bought prestige upgrade %s for %d PP", upgrade_id, cost)
        return True

    # ── Effect getters ───────────────────────────────────

    def _total(self, state: GameState, effect: AscensionEffect) -> float:
        return sum(
            u.total_value(state) for u in self.catalog.values() if u.effect == effect
        )

    def get_damage_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.DAMAGE)

    def get_points_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.POINTS)

    def get_xp_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.XP)

    def get_passive_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.PASSIVE)

    def get_speed_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.SPEED)

    def get_boss_damage_multiplier(self, state: GameState) -> float:
        return 1.0 + self._total(state, AscensionEffect.BOSS_DAMAGE)

    def get_crit_bonus(self, state: GameState) -> float:
        """Additive crit chance, in percentage points."""
        return self._total(state, AscensionEffect.CRIT_CHANCE)

    def get_starting_level(self, state: GameState) -> int:
        extra = self._total(state, AscensionEffect.STARTING_LEVEL)
        return self.balance.ascension.base_starting_level + int(extra)

    def get_retain_fraction(self, state: GameState) -> float:
        return min(1.0, self._total(state, AscensionEffect.RETAIN))

    def get_combo_rate(self, state: GameState) -> float:
        return self.balance.ascension.base_combo_rate + self._total(state, AscensionEffect.COMBO_RATE)

    def get_hull_level(self, state: GameState) -> int:
        return int(self._total(state, AscensionEffect.HULL))

    def get_unspent_pp_multiplier(self, state: GameState) -> float:
        """Live income boost from prestige points not yet spent."""
        pct = self.balance.ascension.unspent_pp_percent_per_pp
        return 1.0 + max(0, state.prestige_points) * pct / 100.0

    def is_auto_buy_unlocked(self, state: GameState) -> bool:
        return state.auto_buy_enabled or self._total(state, AscensionEffect.AUTO_BUY) > 0
