"""Bonus providers polled by the multiplier engine at calculation time.

Artifacts report their bonuses as decimals (0.25 = +25%).  Power-ups are
transient multiplicative buffs; a neutral provider reports 1.0 factors and a
zero crit bonus.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ArtifactBonuses:
    """Sum of equipped artifact bonuses, as decimals."""

    damage: float = 0.0
    speed: float = 0.0
    crit: float = 0.0
    points: float = 0.0
    xp: float = 0.0

    def get_damage_bonus(self) -> float:
        return self.damage

    def get_speed_bonus(self) -> float:
        return self.speed

    def get_crit_bonus(self) -> float:
        return self.crit

    def get_points_bonus(self) -> float:
        return self.points

    def get_xp_bonus(self) -> float:
        return self.xp


@dataclass
class PowerUpBuffs:
    """Currently active power-ups."""

    damage_active: bool = False
    speed_active: bool = False
    crit_active: bool = False
    points_active: bool = False

    damage_factor: float = 3.0
    speed_factor: float = 2.0
    # Crit chance bonus as a decimal, added as percentage points
    crit_bonus: float = 0.5
    points_factor: float = 2.0

    def get_damage_multiplier(self) -> float:
        return self.damage_factor if self.damage_active else 1.0

    def get_speed_multiplier(self) -> float:
        return self.speed_factor if self.speed_active else 1.0

    def get_crit_chance_bonus(self) -> float:
        return self.crit_bonus if self.crit_active else 0.0

    def get_points_multiplier(self) -> float:
        return self.points_factor if self.points_active else 1.0

    def clear(self) -> None:
        self.damage_active = False
        self.speed_active = False
        self.crit_active = False
        self.points_active = False
