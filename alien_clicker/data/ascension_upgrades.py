"""Ascension upgrades — the permanent tree bought with Prestige Points.

Levels live in ``state.prestige_upgrades`` and are never cleared by an
ascension.  Price follows cost_per_level × exponential_base ^ level except
for the hull, which reads a hand-authored table from the balance config.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from alien_clicker.errors import CatalogError

if TYPE_CHECKING:
    from alien_clicker.engine.game_state import GameState


class AscensionEffect(Enum):
    DAMAGE         = auto()  # damage × (1 + value × level), dampened
    POINTS         = auto()  # points × (1 + value × level), dampened
    XP             = auto()  # XP × (1 + value × level)
    CRIT_CHANCE    = auto()  # + value × level percentage points
    PASSIVE        = auto()  # passive income × (1 + value × level)
    SPEED          = auto()  # fire rate × (1 + value × level)
    STARTING_LEVEL = auto()  # runs start value × level levels higher
    RETAIN         = auto()  # keep value × level of stat levels on reset
    BOSS_DAMAGE    = auto()  # boss damage × (1 + value × level)
    COMBO_RATE     = auto()  # combo build rate + value × level
    HULL           = auto()  # click damage × 2 ^ level
    AUTO_BUY       = auto()  # unlocks the stat auto-buyer


@dataclass(frozen=True)
class AscensionUpgrade:
    id: str
    name: str
    description: str
    effect: AscensionEffect
    value_per_level: float
    cost_per_level: int
    max_level: int

    def get_current_level(self, state: GameState) -> int:
        level = int(state.prestige_upgrades.get(self.id, 0))
        return max(0, min(level, self.max_level))

    def is_maxed(self, state: GameState) -> bool:
        return self.get_current_level(state) >= self.max_level

    def total_value(self, state: GameState) -> float:
        return self.value_per_level * self.get_current_level(state)


_CATALOG: list[AscensionUpgrade] = [
    # ── Core multipliers ──────────────────────────────────────────────
    AscensionUpgrade(
        id="prestige_damage",
        name="Cosmic Power",
        description="+10% damage per level",
        effect=AscensionEffect.DAMAGE,
        value_per_level=0.10,
        cost_per_level=1,
        max_level=100,
    ),
    AscensionUpgrade(
        id="prestige_points",
        name="Stellar Fortune",
        description="+15% points per level",
        effect=AscensionEffect.POINTS,
        value_per_level=0.15,
        cost_per_level=1,
        max_level=100,
    ),
    AscensionUpgrade(
        id="prestige_xp",
        name="Ancient Wisdom",
        description="+20% XP per level",
        effect=AscensionEffect.XP,
        value_per_level=0.20,
        cost_per_level=1,
        max_level=100,
    ),
    AscensionUpgrade(
        id="prestige_crit",
        name="Destiny's Edge",
        description="+2% critical hit chance per level",
        effect=AscensionEffect.CRIT_CHANCE,
        value_per_level=2.0,
        cost_per_level=2,
        max_level=50,
    ),
    AscensionUpgrade(
        id="prestige_passive",
        name="Eternal Engine",
        description="+25% passive income per level",
        effect=AscensionEffect.PASSIVE,
        value_per_level=0.25,
        cost_per_level=2,
        max_level=75,
    ),
    AscensionUpgrade(
        id="prestige_speed",
        name="Temporal Flux",
        description="+5% fleet fire rate per level",
        effect=AscensionEffect.SPEED,
        value_per_level=0.05,
        cost_per_level=3,
        max_level=50,
    ),
    # ── Run shaping ───────────────────────────────────────────────────
    AscensionUpgrade(
        id="prestige_starting_level",
        name="Head Start",
        description="Start each run 5 levels higher per level",
        effect=AscensionEffect.STARTING_LEVEL,
        value_per_level=5.0,
        cost_per_level=5,
        max_level=20,
    ),
    AscensionUpgrade(
        id="prestige_retain_upgrades",
        name="Quantum Memory",
        description="Keep 1% of stat levels per level on ascension",
        effect=AscensionEffect.RETAIN,
        value_per_level=0.01,
        cost_per_level=10,
        max_level=10,
    ),
    AscensionUpgrade(
        id="prestige_boss_power",
        name="Titan Slayer",
        description="+20% boss damage per level",
        effect=AscensionEffect.BOSS_DAMAGE,
        value_per_level=0.20,
        cost_per_level=3,
        max_level=50,
    ),
    AscensionUpgrade(
        id="prestige_combo_boost",
        name="Combo Master",
        description="Combos build faster per level",
        effect=AscensionEffect.COMBO_RATE,
        value_per_level=0.00035,
        cost_per_level=5,
        max_level=20,
    ),
    # ── Special ───────────────────────────────────────────────────────
    AscensionUpgrade(
        id="prestige_hull",
        name="Reinforced Hull",
        description="Double click damage per level; amplifier levels count double",
        effect=AscensionEffect.HULL,
        value_per_level=1.0,
        # Priced from the balance hull cost table
        cost_per_level=10,
        max_level=5,
    ),
    AscensionUpgrade(
        id="auto_buy_unlock",
        name="Autonomous Procurement",
        description="Unlock automatic stat purchasing",
        effect=AscensionEffect.AUTO_BUY,
        value_per_level=1.0,
        cost_per_level=50,
        max_level=1,
    ),
]


def _build(catalog: list[AscensionUpgrade]) -> dict[str, AscensionUpgrade]:
    registry: dict[str, AscensionUpgrade] = {}
    for u in catalog:
        if u.id in registry:
            raise CatalogError(f"Duplicate ascension upgrade id: {u.id}")
        if u.cost_per_level <= 0 or u.max_level <= 0:
            raise CatalogError(f"{u.id}: cost and max level must be positive")
        registry[u.id] = u
    return registry


ASCENSION_UPGRADES: dict[str, AscensionUpgrade] = _build(_CATALOG)
