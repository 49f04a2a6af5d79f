"""Sub-upgrade definitions — one-time purchases that flip a flag in state.

Each definition carries its unlock predicates and a tuple of numeric effects.
The engines never look at ids for ordinary effects; they read the effect
channels.  The catalog is validated on import: a malformed entry is a build
error and raises CatalogError immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

from alien_clicker.errors import CatalogError

if TYPE_CHECKING:
    from alien_clicker.engine.game_state import GameState

Predicate = Callable[["GameState"], bool]


class Channel(Enum):
    """Which calculation an effect feeds."""

    DAMAGE = auto()           # × points per hit (clicks and fleet)
    CLICK_DAMAGE = auto()     # × click damage only
    FLEET_DAMAGE = auto()     # × fleet damage only
    BOSS_DAMAGE = auto()      # × damage against bosses
    CRIT_CHANCE = auto()      # + percentage points
    CRIT_MULTIPLIER = auto()  # × crit damage multiplier (>= 1)
    XP = auto()               # × XP gain
    XP_PER_SHIP = auto()      # × (1 + ships_count * value)
    KILL_XP = auto()          # × XP granted per kill
    SPEED = auto()            # × fire cooldown (< 1 is faster)
    PASSIVE_ADD = auto()      # + points per second
    PASSIVE_MULT = auto()     # × points per second
    DISCOUNT = auto()         # × every shop price, 0 < value < 1


@dataclass(frozen=True)
class Effect:
    channel: Channel
    value: float


def stat_at_least(attr: str, threshold: int) -> Predicate:
    """Predicate: ``state.<attr> >= threshold``."""
    return lambda state: getattr(state, attr, 0) >= threshold


def counter_at_least(name: str, threshold: int) -> Predicate:
    """Predicate over the lifetime counters in ``state.stats``."""
    return lambda state: getattr(state.stats, name, 0) >= threshold


def owns(upgrade_id: str) -> Predicate:
    return lambda state: bool(state.sub_upgrades.get(upgrade_id, False))


def all_of(*predicates: Predicate) -> Predicate:
    return lambda state: all(p(state) for p in predicates)


@dataclass(frozen=True)
class SubUpgradeDef:
    """Definition of a single sub-upgrade."""

    id: str
    name: str
    description: str
    cost: float
    requires: Predicate
    effects: tuple[Effect, ...] = ()
    # Defaults to ``requires`` when not given
    is_visible: Predicate | None = field(default=None)

    def __post_init__(self) -> None:
        if self.is_visible is None:
            object.__setattr__(self, "is_visible", self.requires)

    def buy(self, state: GameState) -> None:
        """Mark as owned.  Does not check price, predicates or ownership."""
        state.sub_upgrades[self.id] = True

    def owned(self, state: GameState) -> bool:
        return bool(state.sub_upgrades.get(self.id, False))

    def values(self, channel: Channel) -> list[float]:
        return [e.value for e in self.effects if e.channel == channel]


def _fx(*pairs: tuple[Channel, float]) -> tuple[Effect, ...]:
    return tuple(Effect(channel, value) for channel, value in pairs)


# Short channel names for the table below
D, C, F, B = Channel.DAMAGE, Channel.CLICK_DAMAGE, Channel.FLEET_DAMAGE, Channel.BOSS_DAMAGE
CC, CM = Channel.CRIT_CHANCE, Channel.CRIT_MULTIPLIER
XP, XPS, KXP = Channel.XP, Channel.XP_PER_SHIP, Channel.KILL_XP
SPD, PA, PM, DSC = Channel.SPEED, Channel.PASSIVE_ADD, Channel.PASSIVE_MULT, Channel.DISCOUNT


_CATALOG: list[SubUpgradeDef] = [
    # ── Early game ────────────────────────────────────────────────
    SubUpgradeDef("death_pact", "Death Pact Agreement", "Ships gain +10% attack speed",
                  500, stat_at_least("ships_count", 3), _fx((SPD, 0.9))),
    SubUpgradeDef("laser_focusing", "Laser Focusing Crystals", "Increase point gain by 15%",
                  1_000, stat_at_least("point_multiplier_level", 5), _fx((D, 1.15))),
    SubUpgradeDef("coffee_machine", "Crew Coffee Machine", "Passive point generation +50/sec",
                  2_000, stat_at_least("level", 5), _fx((PA, 50))),
    SubUpgradeDef("quantum_targeting", "Quantum Targeting Array", "Ships fire 20% faster",
                  2_500, stat_at_least("attack_speed_level", 10), _fx((SPD, 0.8))),
    SubUpgradeDef("lucky_dice", "Lucky Space Dice", "+2% critical hit chance",
                  3_500, stat_at_least("crit_chance_level", 5), _fx((CC, 2))),

    # ── Mid game ──────────────────────────────────────────────────
    SubUpgradeDef("energy_recycling", "Energy Recycling System", "All upgrades are 5% cheaper",
                  5_000, stat_at_least("ships_count", 10), _fx((DSC, 0.95))),
    SubUpgradeDef("overclocked_reactors", "Overclocked Reactors", "Gain 25% more points per hit",
                  10_000, stat_at_least("level", 10), _fx((D, 1.25))),
    SubUpgradeDef("ship_swarm", "Swarm Intelligence Protocol", "Ships coordinate attacks for +20% damage",
                  15_000, stat_at_least("ships_count", 15), _fx((F, 1.2))),
    SubUpgradeDef("fleet_academy", "Fleet Academy", "+3% XP gain per ship in the fleet",
                  20_000, stat_at_least("ships_count", 12), _fx((XPS, 0.03))),
    SubUpgradeDef("neural_link", "Neural Link Interface", "Clicking grants 10% bonus points",
                  25_000, stat_at_least("level", 20), _fx((D, 1.1))),
    SubUpgradeDef("space_pizza", "Intergalactic Pizza Delivery", "Passive generation +200/sec",
                  30_000, stat_at_least("resource_gen_level", 10), _fx((PA, 200))),
    SubUpgradeDef("rubber_duck", "Debugging Rubber Duck", "+3% critical damage multiplier",
                  35_000, counter_at_least("critical_hits", 100), _fx((CM, 1.03)),
                  is_visible=counter_at_least("critical_hits", 50)),
    SubUpgradeDef("falafel_rollo_special", "Falafel Rollo Special", "+10% damage",
                  40_000, owns("space_pizza"), _fx((D, 1.1))),
    SubUpgradeDef("antimatter_rounds", "Antimatter Ammunition", "Double all point gains",
                  50_000, stat_at_least("point_multiplier_level", 20), _fx((D, 2.0))),
    SubUpgradeDef("master_clicker", "Master Clicker", "Clicking gives +100% more points",
                  50_000, counter_at_least("total_clicks", 1_000), _fx((C, 2.0)),
                  is_visible=counter_at_least("total_clicks", 500)),
    SubUpgradeDef("motivational_posters", "Motivational Posters", "XP gain +25%",
                  60_000, stat_at_least("xp_boost_level", 10), _fx((XP, 1.25))),

    # ── Advanced ──────────────────────────────────────────────────
    SubUpgradeDef("warp_core", "Experimental Warp Core", "Ships fire 50% faster",
                  75_000, stat_at_least("attack_speed_level", 25), _fx((SPD, 0.67))),
    SubUpgradeDef("disco_ball", "Hypnotic Disco Ball", "Aliens confused, +15% damage and speed",
                  85_000, stat_at_least("level", 30), _fx((D, 1.15), (SPD, 0.85))),
    SubUpgradeDef("ai_optimizer", "AI Optimization Subroutines", "Ship fire cooldown reduced by 30%",
                  100_000, stat_at_least("attack_speed_level", 30), _fx((SPD, 0.7))),
    SubUpgradeDef("lucky_horseshoe", "Lucky Horseshoe", "Critical hits deal 20% more damage",
                  120_000, stat_at_least("crit_chance_level", 15), _fx((CM, 1.2))),
    SubUpgradeDef("ancient_texts", "Ancient Texts", "-2.5% all costs, +10% XP",
                  150_000, stat_at_least("level", 15), _fx((DSC, 0.975), (XP, 1.1))),
    SubUpgradeDef("perfect_precision", "Perfect Precision Arrays", "+3% critical hit chance",
                  150_000, stat_at_least("ships_count", 25), _fx((CC, 3))),
    SubUpgradeDef("arcade_machine", "Retro Arcade Machine", "Passive generation +1000/sec",
                  175_000, stat_at_least("resource_gen_level", 20), _fx((PA, 1_000))),
    SubUpgradeDef("void_channeling", "Void Energy Channeling", "Destroying aliens grants double XP",
                  200_000, stat_at_least("level", 40), _fx((KXP, 2.0))),
    SubUpgradeDef("chaos_emeralds", "Seven Chaos Emeralds", "All damage +35%",
                  250_000, stat_at_least("level", 45), _fx((D, 1.35))),
    SubUpgradeDef("time_machine", "Malfunctioning Time Machine", "XP gain +50%",
                  300_000, stat_at_least("xp_boost_level", 20), _fx((XP, 1.5))),
    SubUpgradeDef("click_multiplier", "Click Multiplier", "Clicking multiplies damage by 3x",
                  500_000, counter_at_least("total_clicks", 5_000), _fx((C, 3.0)),
                  is_visible=counter_at_least("total_clicks", 2_500)),
    SubUpgradeDef("philosophers_stone", "Philosopher's Stone", "Passive generation x5",
                  600_000, stat_at_least("resource_gen_level", 30), _fx((PM, 5.0))),
    SubUpgradeDef("prophetic_vision", "Prophetic Vision", "-7% all costs, +20% XP",
                  750_000, stat_at_least("level", 35), _fx((DSC, 0.93), (XP, 1.2))),
    SubUpgradeDef("infinity_gauntlet", "Infinity Gauntlet (Replica)", "All damage and speed +40%",
                  800_000, stat_at_least("level", 70), _fx((D, 1.4), (SPD, 0.6))),
    SubUpgradeDef("alien_cookbook", "Alien Recipe Book", "Boss damage +100%",
                  900_000, counter_at_least("bosses_killed", 25), _fx((B, 2.0)),
                  is_visible=counter_at_least("bosses_killed", 15)),
    SubUpgradeDef("universal_translator", "Universal Translator", "-10% all costs, +25% XP",
                  1_500_000, stat_at_least("level", 60), _fx((DSC, 0.9), (XP, 1.25))),

    # ── Late game ─────────────────────────────────────────────────
    SubUpgradeDef("singularity_core", "Singularity Power Core", "Gain 5x points from all sources",
                  2_000_000, stat_at_least("level", 80), _fx((D, 5.0))),
    SubUpgradeDef("super_clicker", "Super Clicker", "Clicks deal 5x damage",
                  2_000_000, counter_at_least("total_clicks", 10_000), _fx((C, 5.0)),
                  is_visible=counter_at_least("total_clicks", 5_000)),
    SubUpgradeDef("cheat_codes", "Cheat Code Manual", "All upgrades 20% cheaper",
                  2_500_000, counter_at_least("total_upgrades", 200), _fx((DSC, 0.8)),
                  is_visible=counter_at_least("total_upgrades", 150)),
    SubUpgradeDef("dragon_egg", "Dragon Egg", "Critical hit chance +2%, critical damage +20%",
                  3_000_000, stat_at_least("crit_chance_level", 30), _fx((CC, 2), (CM, 1.2))),
    SubUpgradeDef("universe_map", "Map of the Universe", "XP gain x3",
                  4_000_000, stat_at_least("xp_boost_level", 35), _fx((XP, 3.0))),
    SubUpgradeDef("nanobots", "Self-Replicating Nanobots", "Passive generation +2500/sec",
                  5_000_000, stat_at_least("level", 50), _fx((PA, 2_500))),
    SubUpgradeDef("answer_to_everything", "Answer to Everything", "All passive generation x10",
                  5_000_000, stat_at_least("resource_gen_level", 50), _fx((PM, 10.0))),
    SubUpgradeDef("plasma_matrix", "Plasma Matrix", "All damage +25%, attack speed +15%",
                  7_500_000, stat_at_least("level", 52), _fx((D, 1.25), (SPD, 0.87))),
    SubUpgradeDef("heart_of_galaxy", "Heart of the Galaxy", "All damage x3",
                  7_500_000, stat_at_least("level", 90), _fx((D, 3.0))),
    SubUpgradeDef("holographic_decoys", "Holographic Decoys", "Ships can attack twice as often",
                  10_000_000, stat_at_least("ships_count", 18), _fx((SPD, 0.5))),
    SubUpgradeDef("cosmic_ascension", "Cosmic Ascension Protocol", "Unlock ultimate power: 10x all damage",
                  10_000_000, stat_at_least("level", 95), _fx((D, 10.0))),
    SubUpgradeDef("temporal_acceleration", "Temporal Acceleration Field", "All ships gain +100% attack speed",
                  15_000_000, stat_at_least("level", 55), _fx((SPD, 0.5))),
    SubUpgradeDef("quantum_entanglement", "Quantum Entanglement", "Critical hits +3%, damage x1.5",
                  20_000_000, stat_at_least("crit_chance_level", 20), _fx((CC, 3), (D, 1.5))),
    SubUpgradeDef("meaning_of_life", "Meaning of Life", "Unlock the prestige system & all damage x2",
                  25_000_000, stat_at_least("level", 100), _fx((D, 2.0))),
    SubUpgradeDef("stellar_forge", "Stellar Forge", "XP gain +75%, all damage +20%",
                  30_000_000, stat_at_least("level", 62), _fx((XP, 1.75), (D, 1.2))),
    SubUpgradeDef("golden_goose", "Quantum Golden Goose", "Points per hit +50%",
                  40_000_000, counter_at_least("total_clicks", 5_000), _fx((D, 1.5)),
                  is_visible=counter_at_least("total_clicks", 2_500)),
    SubUpgradeDef("dark_matter_engine", "Dark Matter Engine", "Passive generation x3, ships +25% speed",
                  50_000_000, stat_at_least("level", 65), _fx((PM, 3.0), (SPD, 0.8))),
    SubUpgradeDef("antimatter_cascade", "Antimatter Cascade", "All click damage x4",
                  60_000_000, counter_at_least("total_clicks", 7_500), _fx((C, 4.0))),
    SubUpgradeDef("nebula_harvester", "Nebula Harvester", "Passive generation +5000/sec, XP +50%",
                  75_000_000, stat_at_least("resource_gen_level", 35), _fx((PA, 5_000), (XP, 1.5))),
    SubUpgradeDef("hyper_reactor", "Hyper Reactor", "All damage x2, critical chance +2%",
                  100_000_000, stat_at_least("level", 75), _fx((D, 2.0), (CC, 2))),
    SubUpgradeDef("nuclear_reactor", "Pocket Nuclear Reactor", "Passive generation +10000/sec",
                  125_000_000, stat_at_least("resource_gen_level", 40), _fx((PA, 10_000))),
    SubUpgradeDef("photon_amplifier", "Photon Amplifier", "Ships fire 75% faster, damage +30%",
                  150_000_000, stat_at_least("attack_speed_level", 40), _fx((SPD, 0.57), (D, 1.3))),
    SubUpgradeDef("reality_anchor", "Reality Anchor", "Critical damage +50%, all damage +25%",
                  200_000_000, stat_at_least("crit_chance_level", 35), _fx((CM, 1.5), (D, 1.25))),
    SubUpgradeDef("cosmic_battery", "Cosmic Battery", "Passive generation x7",
                  250_000_000, stat_at_least("resource_gen_level", 45), _fx((PM, 7.0))),
    SubUpgradeDef("fleet_command_center", "Fleet Command Center", "Fleet damage x1.4",
                  500_000_000, all_of(stat_at_least("level", 75), stat_at_least("ships_count", 70)),
                  _fx((F, 1.4))),

    # ── End game ──────────────────────────────────────────────────
    SubUpgradeDef("multiversal_matrix", "Multiversal Matrix", "Damage x5, critical chance +5%",
                  500_000_000, stat_at_least("level", 200), _fx((D, 5.0), (CC, 5))),
    SubUpgradeDef("entropy_reversal", "Entropy Reversal", "Passive generation x15, XP gain +100%",
                  750_000_000, stat_at_least("resource_gen_level", 70), _fx((PM, 15.0), (XP, 2.0))),
    SubUpgradeDef("omniscient_ai", "Omniscient AI", "All damage +75%, upgrades 30% cheaper",
                  1_000_000_000, stat_at_least("level", 250), _fx((D, 1.75), (DSC, 0.7))),
    SubUpgradeDef("big_bang_generator", "Big Bang Generator", "All damage x10",
                  2_500_000_000, stat_at_least("level", 300), _fx((D, 10.0))),
    SubUpgradeDef("dimensional_collapse", "Dimensional Collapse", "Critical damage +80%, attack speed +100%",
                  5_000_000_000, stat_at_least("crit_chance_level", 60), _fx((CM, 1.8), (SPD, 0.5))),
    SubUpgradeDef("reality_compiler", "Reality Compiler", "Recompile reality: all damage x20",
                  10_000_000_000, stat_at_least("level", 500), _fx((D, 20.0))),
    SubUpgradeDef("akashic_records", "Akashic Records", "XP x10",
                  25_000_000_000, stat_at_least("xp_boost_level", 75), _fx((XP, 10.0))),
    SubUpgradeDef("void_heart", "Void Heart", "Boss damage +500%",
                  50_000_000_000, counter_at_least("bosses_killed", 100), _fx((B, 6.0))),
    SubUpgradeDef("eternal_engine", "Eternal Engine", "Passive generation x50",
                  100_000_000_000, stat_at_least("resource_gen_level", 100), _fx((PM, 50.0))),
    SubUpgradeDef("omega_protocol", "Omega Protocol", "ALL DAMAGE x25",
                  500_000_000_000, stat_at_least("level", 750), _fx((D, 25.0))),
    SubUpgradeDef("infinity_engine", "Infinity Engine", "Clicks deal x100 damage",
                  1_000_000_000_000, counter_at_least("total_clicks", 100_000), _fx((C, 100.0))),
    SubUpgradeDef("universe_seed", "Universe Seed", "Plant new universes: all damage x100",
                  5_000_000_000_000, stat_at_least("level", 1_000), _fx((D, 100.0))),
    SubUpgradeDef("transcendence", "Transcendence", "Ascend beyond ascension: prestige points x2",
                  10_000_000_000_000, stat_at_least("prestige_level", 5)),
]


def _check_effect(upgrade_id: str, effect: Effect) -> None:
    ch, v = effect.channel, effect.value
    if not isinstance(ch, Channel):
        raise CatalogError(f"{upgrade_id}: unknown effect channel {ch!r}")
    if ch == Channel.DISCOUNT and not 0.0 < v < 1.0:
        raise CatalogError(f"{upgrade_id}: discount factor {v} outside (0, 1)")
    if ch == Channel.SPEED and not 0.0 < v <= 1.0:
        raise CatalogError(f"{upgrade_id}: cooldown factor {v} outside (0, 1]")
    if ch == Channel.CRIT_MULTIPLIER and v < 1.0:
        raise CatalogError(f"{upgrade_id}: crit multiplier factor {v} below 1")
    if ch in (Channel.CRIT_CHANCE, Channel.PASSIVE_ADD, Channel.XP_PER_SHIP) and v < 0:
        raise CatalogError(f"{upgrade_id}: negative {ch.name} value {v}")
    if v <= 0 and ch not in (Channel.CRIT_CHANCE, Channel.PASSIVE_ADD, Channel.XP_PER_SHIP):
        raise CatalogError(f"{upgrade_id}: non-positive {ch.name} factor {v}")


def validate_catalog(catalog: list[SubUpgradeDef]) -> dict[str, SubUpgradeDef]:
    """Check every entry and return the id → definition registry."""
    registry: dict[str, SubUpgradeDef] = {}
    for u in catalog:
        if not u.id:
            raise CatalogError(f"Sub-upgrade with empty id: {u.name!r}")
        if u.id in registry:
            raise CatalogError(f"Duplicate sub-upgrade id: {u.id}")
        if u.cost <= 0:
            raise CatalogError(f"{u.id}: cost must be positive, got {u.cost}")
        if not callable(u.requires) or not callable(u.is_visible):
            raise CatalogError(f"{u.id}: requires/is_visible must be callables")
        for effect in u.effects:
            _check_effect(u.id, effect)
        registry[u.id] = u
    return registry


# ── All sub-upgrades registry (ordered) ──────────────────────────

SUB_UPGRADES: dict[str, SubUpgradeDef] = validate_catalog(_CATALOG)
