"""Leveled stat families — the repeatable purchases in the stat shop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatDef:
    """One leveled stat.  ``field`` is the GameState attribute holding its level."""

    id: str
    name: str
    description: str
    field: str


SHIP = StatDef(
    id="ship",
    name="Starship Fleet",
    description="Recruit another starship. More ships, more firepower.",
    field="ships_count",
)

ATTACK_SPEED = StatDef(
    id="attack_speed",
    name="Attack Speed",
    description="Faster targeting computers. The fleet fires more often.",
    field="attack_speed_level",
)

POINT_MULTIPLIER = StatDef(
    id="point_multiplier",
    name="Damage Amplifier",
    description="More laser power per hit.",
    field="point_multiplier_level",
)

CRIT_CHANCE = StatDef(
    id="crit_chance",
    name="Critical Strike",
    description="+0.5% critical hit chance per level.",
    field="crit_chance_level",
)

XP_BOOST = StatDef(
    id="xp_boost",
    name="Knowledge Core",
    description="+10% XP per level.",
    field="xp_boost_level",
)

RESOURCE_GEN = StatDef(
    id="resource_gen",
    name="Passive Income",
    description="Generate points while you sleep.",
    field="resource_gen_level",
)

# Shop order; auto-buy walks the stats in this order
ALL_STATS: dict[str, StatDef] = {
    s.id: s
    for s in [
        SHIP,
        ATTACK_SPEED,
        POINT_MULTIPLIER,
        CRIT_CHANCE,
        XP_BOOST,
        RESOURCE_GEN,
    ]
}
