"""Cost engine — stat price curves and the shared discount pipeline."""

from __future__ import annotations

import math

from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.data.stats import ALL_STATS
from alien_clicker.data.sub_upgrades import SUB_UPGRADES, Channel, SubUpgradeDef
from alien_clicker.engine.game_state import GameState


class CostEngine:
    """Prices for stats and sub-upgrades.  Recomputed on every call."""

    def __init__(
        self,
        balance: GameBalance = BALANCE,
        catalog: dict[str, SubUpgradeDef] = SUB_UPGRADES,
    ) -> None:
        self.balance = balance
        self.catalog = catalog
        # Discount sources, in catalog order
        self._discounts = [
            (u.id, value)
            for u in catalog.values()
            for value in u.values(Channel.DISCOUNT)
        ]

    # ── Stats ────────────────────────────────────────────

    def get_raw_cost(self, stat_id: str, level: int) -> int:
        """base_cost × base_multiplier × (factor + offset) ^ level, floored.

        Raises KeyError for an unknown stat id.
        """
        if stat_id not in ALL_STATS:
            raise KeyError(stat_id)
        bal = self.balance.upgrades
        curve = getattr(bal.stat_costs, stat_id)
        exponent = bal.cost_exponential_factor + curve.offset
        return math.floor(curve.base_cost * bal.cost_base_multiplier * exponent ** max(0, level))

    def get_discount(self, state: GameState) -> float:
        """Product of every owned discount factor.  1.0 when none owned."""
        discount = 1.0
        for upgrade_id, factor in self._discounts:
            if state.owns(upgrade_id):
                discount *= factor
        return discount

    def apply_discount(self, raw_cost: float, state: GameState) -> int:
        return math.floor(raw_cost * self.get_discount(state))

    def get_cost(self, stat_id: str, level: int, state: GameState) -> int:
        """Discounted price of ``level``.

        Floored discounts can collapse adjacent cheap levels onto one price,
        so each level costs at least one more than the level before it.
        """
        discount = self.get_discount(state)
        cost = -1
        for lvl in range(max(0, level) + 1):
            cost = max(math.floor(self.get_raw_cost(stat_id, lvl) * discount), cost + 1)
        return cost

    def get_next_cost(self, stat_id: str, state: GameState) -> int:
        """Price of the next level of a stat at its current level."""
        level = getattr(state, ALL_STATS[stat_id].field)
        return self.get_cost(stat_id, level, state)

    # ── Sub-upgrades ─────────────────────────────────────

    def get_sub_upgrade_cost(self, upgrade_id: str, state: GameState) -> float:
        """Catalog price through the discount, except for the exempt upgrade.

        Unknown ids cost ``math.inf``.
        """
        upgrade = self.catalog.get(upgrade_id)
        if upgrade is None:
            return math.inf
        if upgrade_id == self.balance.upgrades.discount_exempt_id:
            return upgrade.cost
        return self.apply_discount(upgrade.cost, state)
