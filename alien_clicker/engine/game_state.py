"""Game state — single source of truth for a save slot."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GameStats:
    """Lifetime counters.  Survive ascension untouched."""

    total_clicks: int = 0
    total_damage: float = 0.0
    aliens_killed: int = 0
    bosses_killed: int = 0
    total_upgrades: int = 0
    total_sub_upgrades: int = 0
    max_level: int = 1
    critical_hits: int = 0
    total_prestige: int = 0
    play_time: float = 0.0  # seconds


@dataclass
class GameState:
    """Complete mutable state.  Written only through GameStateStore commands."""

    # ── Currency ─────────────────────────────────────────
    points: float = 0.0

    # ── Leveled stats ────────────────────────────────────
    ships_count: int = 0
    attack_speed_level: int = 0
    point_multiplier_level: int = 0
    crit_chance_level: int = 0
    xp_boost_level: int = 0
    resource_gen_level: int = 0

    # ── Combat progress ──────────────────────────────────
    level: int = 1
    experience: float = 0.0
    # Written by the combat layer when a milestone boss fight is lost
    blocked_on_boss_level: bool = False

    # ── One-time flags: id → owned ───────────────────────
    sub_upgrades: dict[str, bool] = field(default_factory=dict)
    achievements: dict[str, bool] = field(default_factory=dict)

    # ── Prestige (never cleared by ascension) ────────────
    prestige_level: int = 0
    prestige_points: int = 0
    prestige_upgrades: dict[str, int] = field(default_factory=dict)
    highest_level_reached: int = 0
    auto_buy_enabled: bool = False

    stats: GameStats = field(default_factory=GameStats)

    def owns(self, upgrade_id: str) -> bool:
        return bool(self.sub_upgrades.get(upgrade_id, False))

    def prestige_upgrade_level(self, upgrade_id: str) -> int:
        return int(self.prestige_upgrades.get(upgrade_id, 0))

    def unlocked_achievement_count(self) -> int:
        return sum(1 for unlocked in self.achievements.values() if unlocked)

    def record_level(self) -> None:
        """Update the max level counter."""
        if self.level > self.stats.max_level:
            self.stats.max_level = self.level
