"""Balance constants — all tuning knobs in one place.

Tweak these to adjust cost curves, multiplier caps and the prestige formula.
Stat costs follow: base_cost * (exponential_factor + offset) ^ level

The tree is frozen.  Use ``override_balance`` to derive a tuned copy from a
partial nested dict (JSON shaped), or ``load_balance`` to read one from disk.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from alien_clicker.errors import ConfigError


@dataclass(frozen=True)
class StatCost:
    """Cost curve of one leveled stat family."""

    base_cost: float
    # Added to the shared exponential factor, one distinct curve per stat
    offset: float = 0.0


@dataclass(frozen=True)
class StatCostTable:
    ship: StatCost = field(default_factory=lambda: StatCost(base_cost=10, offset=0.0))
    attack_speed: StatCost = field(default_factory=lambda: StatCost(base_cost=50, offset=0.10))
    point_multiplier: StatCost = field(default_factory=lambda: StatCost(base_cost=100, offset=0.15))
    crit_chance: StatCost = field(default_factory=lambda: StatCost(base_cost=150, offset=0.20))
    xp_boost: StatCost = field(default_factory=lambda: StatCost(base_cost=250, offset=0.23))
    resource_gen: StatCost = field(default_factory=lambda: StatCost(base_cost=200, offset=0.25))


@dataclass(frozen=True)
class UpgradeBalance:
    """Tuning for click damage and the stat shop."""

    base_points: float = 1.0
    # Damage added per Damage Amplifier level
    damage_per_level: float = 1.0
    # Replaces damage_per_level once the prestige hull has any level
    hull_damage_per_level: float = 2.0
    # Click damage × hull_damage_base ^ hull_level
    hull_damage_base: float = 2.0

    # Stat cost scaling: cost = base_cost * base_multiplier * (factor + offset) ^ level
    cost_base_multiplier: float = 1.0
    cost_exponential_factor: float = 1.15
    stat_costs: StatCostTable = field(default_factory=StatCostTable)

    # Never discounted (gate to the prestige system)
    discount_exempt_id: str = "meaning_of_life"


@dataclass(frozen=True)
class CritBalance:
    base_chance: float = 2.0
    chance_per_level: float = 0.5
    max_chance: float = 95.0

    base_multiplier: float = 2.0
    max_multiplier: float = 10.0
    # Artifact crit: × (1 + bonus ^ (1/3) * artifact_coefficient)
    artifact_coefficient: float = 0.015


@dataclass(frozen=True)
class XPBalance:
    per_level: float = 0.1


@dataclass(frozen=True)
class SpeedBalance:
    """Fleet fire cooldown, in milliseconds."""

    base_cooldown_ms: float = 1000.0
    reduction_per_level: float = 0.95
    min_base_cooldown_ms: float = 120.0
    min_cooldown_ms: float = 50.0


@dataclass(frozen=True)
class PassiveBalance:
    per_level: float = 2.0


@dataclass(frozen=True)
class PrestigePointBalance:
    """PP = base_multiplier * f((level - base_level) / scaling_divisor)."""

    base_level: int = 100
    base_multiplier: float = 10.0
    scaling_divisor: float = 10.0
    # Cube root (True) or square root (False)
    use_cube_root: bool = False

    achievements_per_pp: int = 10

    # Only the levels beyond the previous best get this multiplier
    new_level_bonus_enabled: bool = True
    new_level_bonus_multiplier: float = 2.0

    late_game_upgrade_id: str = "transcendence"
    late_game_multiplier: float = 2.0


@dataclass(frozen=True)
class AscensionBalance:
    """Tuning for ascension eligibility and permanent upgrades."""

    prestige_points: PrestigePointBalance = field(default_factory=PrestigePointBalance)

    # One-time sub-upgrade that opens the first ascension
    unlock_upgrade_id: str = "meaning_of_life"
    # Milestone level where a lost boss fight blocks ascending
    boss_gate_level: int = 100

    # Ascension damage/points bonuses act at this fraction of their value
    bonus_dampening: float = 0.5
    # Income boost per unspent PP, in percent
    unspent_pp_percent_per_pp: float = 0.25

    # Prestige upgrade cost: cost_per_level * exponential_base ^ level
    exponential_base: float = 1.15
    hull_upgrade_id: str = "prestige_hull"
    hull_cost_table: tuple[int, ...] = (10, 100, 250, 500, 1000)
    auto_buy_upgrade_id: str = "auto_buy_unlock"

    # Combo build rate before Combo Master levels
    base_combo_rate: float = 0.0005

    # Level a fresh run starts at, before Head Start
    base_starting_level: int = 1


@dataclass(frozen=True)
class DisplayBalance:
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
    )


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    upgrades: UpgradeBalance = field(default_factory=UpgradeBalance)
    crit: CritBalance = field(default_factory=CritBalance)
    xp: XPBalance = field(default_factory=XPBalance)
    speed: SpeedBalance = field(default_factory=SpeedBalance)
    passive: PassiveBalance = field(default_factory=PassiveBalance)
    ascension: AscensionBalance = field(default_factory=AscensionBalance)
    display: DisplayBalance = field(default_factory=DisplayBalance)


# Default tree. Pass a different one to the engines to tune a session
BALANCE = GameBalance()


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _merge(node: Any, overrides: dict[str, Any], path: str) -> Any:
    if not isinstance(overrides, dict):
        raise ConfigError(f"{path or 'balance'}: expected a mapping, got {type(overrides).__name__}")

    known = {f.name for f in dataclasses.fields(node)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        where = f"{path}.{key}" if path else key
        if key not in known:
            raise ConfigError(f"Unknown balance key: {where}")
        current = getattr(node, key)
        if dataclasses.is_dataclass(current):
            changes[key] = _merge(current, value, where)
        elif isinstance(current, tuple):
            changes[key] = _freeze(value)
        else:
            changes[key] = value
    return dataclasses.replace(node, **changes)


def override_balance(base: GameBalance, overrides: dict[str, Any]) -> GameBalance:
    """Deep-merge a partial nested dict over ``base`` and return the new tree.

    Only the keys present in ``overrides`` change; everything else keeps the
    value from ``base``.  Arrays replace rather than merge.
    """
    return _merge(base, overrides, "")


def load_balance(path: Path, base: GameBalance = BALANCE) -> GameBalance:
    """Read a JSON overrides file and merge it over ``base``."""
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read balance overrides from {path}: {exc}") from exc
    return override_balance(base, data)


def balance_to_dict(balance: GameBalance) -> dict[str, Any]:
    return dataclasses.asdict(balance)
