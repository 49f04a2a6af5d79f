"""GameStateStore — the one writer of GameState.

Every command mutates the live state synchronously and then notifies the
subscribers with it.  Purchases return ``bool`` and leave the state untouched
when they fail.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import math
from typing import Callable

from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.data.stats import ALL_STATS
from alien_clicker.data.sub_upgrades import SUB_UPGRADES, SubUpgradeDef
from alien_clicker.engine.ascension import AscensionEngine
from alien_clicker.engine.cost import CostEngine
from alien_clicker.engine.game_state import GameState, GameStats

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class GameStateStore:
    def __init__(
        self,
        state: GameState | None = None,
        *,
        balance: GameBalance = BALANCE,
        catalog: dict[str, SubUpgradeDef] = SUB_UPGRADES,
        cost_engine: CostEngine | None = None,
        ascension_engine: AscensionEngine | None = None,
    ) -> None:
        self.state = state if state is not None else GameState()
        self.balance = balance
        self.catalog = catalog
        self.cost_engine = cost_engine or CostEngine(balance, catalog)
        self.ascension_engine = ascension_engine or AscensionEngine(balance)
        self._listeners: list[Listener] = []

    # ── Subscribers ──────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns the function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def snapshot(self) -> GameState:
        """Deep copy of the current state, safe to hold on to."""
        return copy.deepcopy(self.state)

    # ── Currency & combat feed ───────────────────────────

    def add_points(self, amount: float) -> None:
        if amount <= 0:
            return
        self.state.points += amount
        self._notify()

    def record_hit(self, damage: float, *, is_click: bool, is_crit: bool) -> None:
        stats = self.state.stats
        stats.total_damage += damage
        if is_click:
            stats.total_clicks += 1
        if is_crit:
            stats.critical_hits += 1
        self._notify()

    def record_kill(self, *, boss: bool = False, experience: float = 0.0) -> None:
        if boss:
            self.state.stats.bosses_killed += 1
        else:
            self.state.stats.aliens_killed += 1
        self.state.experience += max(0.0, experience)
        self._notify()

    def advance_level(self) -> None:
        self.state.level += 1
        self.state.record_level()
        logger.debug("Advanced to level %d", self.state.level)
        self._notify()

    def set_boss_block(self, blocked: bool) -> None:
        self.state.blocked_on_boss_level = bool(blocked)
        self._notify()

    def add_play_time(self, seconds: float) -> None:
        self.state.stats.play_time += max(0.0, seconds)
        self._notify()

    def unlock_achievement(self, achievement_id: str) -> bool:
        if self.state.achievements.get(achievement_id, False):
            return False
        self.state.achievements[achievement_id] = True
        self._notify()
        return True

    # ── Purchases ────────────────────────────────────────

    def _buy_stat(self, stat_id: str, costs: CostEngine | None = None) -> bool:
        stat = ALL_STATS.get(stat_id)
        if stat is None:
            return False
        cost = (costs or self.cost_engine).get_next_cost(stat_id, self.state)
        if self.state.points < cost:
            return False
        self.state.points -= cost
        setattr(self.state, stat.field, getattr(self.state, stat.field) + 1)
        self.state.stats.total_upgrades += 1
        logger.debug("Bought %s for %d", stat_id, cost)
        return True

    def buy_stat(self, stat_id: str) -> bool:
        """Buy one level of a stat.  Returns True if successful."""
        bought = self._buy_stat(stat_id)
        if bought:
            self._notify()
        return bought

    def buy_sub_upgrade(self, upgrade_id: str) -> bool:
        upgrade = self.catalog.get(upgrade_id)
        if upgrade is None or upgrade.owned(self.state):
            return False
        if not upgrade.requires(self.state):
            return False
        cost = self.cost_engine.get_sub_upgrade_cost(upgrade_id, self.state)
        if self.state.points < cost:
            return False

        self.state.points -= cost
        upgrade.buy(self.state)
        self.state.stats.total_sub_upgrades += 1
        logger.debug("Bought sub-upgrade %s for %d", upgrade_id, cost)
        self._notify()
        return True

    def buy_prestige_upgrade(self, upgrade_id: str) -> bool:
        bought = self.ascension_engine.buy_prestige_upgrade(self.state, upgrade_id)
        if bought:
            self._notify()
        return bought

    def run_auto_buy(self, cost_engine: CostEngine | None = None) -> int:
        """Buy each affordable stat once, in shop order.  Returns levels bought.

        Does nothing until the auto-buyer has been unlocked.  ``cost_engine``
        prices this pass only.
        """
        if not self.state.auto_buy_enabled:
            return 0
        bought = sum(1 for stat_id in ALL_STATS if self._buy_stat(stat_id, cost_engine))
        if bought:
            self._notify()
        return bought

    # ── Ascension ────────────────────────────────────────

    def ascend(self) -> int:
        """Reset the run for prestige points.  Returns the PP gained.

        Returns 0 and changes nothing when the state is not eligible.
        """
        engine = self.ascension_engine
        old = self.state
        if not engine.can_ascend(old):
            return 0

        gained = engine.calculate_prestige_points(old)
        retain = engine.get_retain_fraction(old)

        fresh = GameState(
            level=engine.get_starting_level(old),
            achievements=old.achievements,
            prestige_level=old.prestige_level + 1,
            prestige_points=old.prestige_points + gained,
            prestige_upgrades=old.prestige_upgrades,
            highest_level_reached=max(old.highest_level_reached, old.level),
            auto_buy_enabled=old.auto_buy_enabled,
            stats=old.stats,
        )
        if retain > 0:
            for stat in ALL_STATS.values():
                setattr(fresh, stat.field, math.floor(getattr(old, stat.field) * retain))
        fresh.stats.total_prestige += 1
        fresh.record_level()

        # In place, so references held by callers stay live
        for f in dataclasses.fields(GameState):
            setattr(old, f.name, getattr(fresh, f.name))

        logger.info(
            "Ascended to prestige level %d: +%d PP (total %d)",
            old.prestige_level, gained, old.prestige_points,
        )
        self._notify()
        return gained

    def reset(self) -> None:
        """Wipe everything, including prestige progress."""
        blank = GameState(stats=GameStats())
        for f in dataclasses.fields(GameState):
            setattr(self.state, f.name, getattr(blank, f.name))
        logger.info("Save state wiped")
        self._notify()
