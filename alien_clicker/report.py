"""Console report — prestige breakdown, stat cost curves and live multipliers."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.data.stats import ALL_STATS
from alien_clicker.engine.ascension import AscensionEngine
from alien_clicker.engine.cost import CostEngine
from alien_clicker.engine.economy import format_number
from alien_clicker.engine.game_state import GameState
from alien_clicker.engine.multipliers import MultiplierEngine


def prestige_table(state: GameState, engine: AscensionEngine) -> Table:
    b = engine.calculate_prestige_points_breakdown(state)
    table = Table(title="Prestige points", title_style="bold bright_yellow")
    table.add_column("Component")
    table.add_column("PP", justify="right")
    table.add_row("Level curve", str(b.base))
    table.add_row("Achievements", str(b.achievement_bonus))
    table.add_row(f"New levels (best {b.previous_best})", str(b.bonus))
    if b.multiplier != 1.0:
        table.add_row("Late-game multiplier", f"×{b.multiplier:g}")
    table.add_row(Text("Total", style="bold"), Text(str(b.total), style="bold"))
    return table


def cost_table(costs: CostEngine, state: GameState, levels: int = 10) -> Table:
    """Discounted price of each stat for the first ``levels`` levels."""
    table = Table(title="Stat cost curves", title_style="bold cyan")
    table.add_column("Level", justify="right")
    for stat in ALL_STATS.values():
        table.add_column(stat.name, justify="right")
    for level in range(levels):
        row = [str(level)]
        row += [format_number(costs.get_cost(stat_id, level, state)) for stat_id in ALL_STATS]
        table.add_row(*row)
    table.caption = f"discount ×{costs.get_discount(state):.4f}"
    return table


def multiplier_table(engine: MultiplierEngine, state: GameState) -> Table:
    table = Table(title="Multipliers", title_style="bold green")
    table.add_column("Value")
    table.add_column("Current", justify="right")
    rows = [
        ("Points per hit", format_number(engine.get_points_per_hit(state))),
        ("Click damage", format_number(engine.get_click_damage(state))),
        ("Fleet volley", format_number(engine.get_auto_fire_damage(state))),
        ("Crit chance", f"{engine.get_crit_chance(state):.1f}%"),
        ("Crit multiplier", f"×{engine.get_crit_multiplier(state):.2f}"),
        ("XP multiplier", f"×{engine.get_xp_multiplier(state):.2f}"),
        ("Fire cooldown", f"{engine.get_fire_cooldown(state)} ms"),
        ("Passive income", f"{format_number(engine.get_passive_generation(state))}/s"),
        ("Unspent PP boost", f"×{engine.ascension.get_unspent_pp_multiplier(state):.4f}"),
    ]
    for name, value in rows:
        table.add_row(name, value)
    return table


def render_report(
    console: Console,
    state: GameState,
    balance: GameBalance = BALANCE,
    levels: int = 10,
) -> None:
    ascension = AscensionEngine(balance)
    costs = CostEngine(balance)
    engine = MultiplierEngine(balance, ascension=ascension)

    header = Text()
    header.append(f"Level {state.level}", style="bold")
    header.append(f"  ·  {format_number(state.points)} points", style="yellow")
    header.append(f"  ·  prestige {state.prestige_level}", style="bright_yellow")
    if ascension.can_ascend(state):
        header.append("  ·  ready to ascend", style="bold bright_yellow")
    console.print(header)

    console.print(prestige_table(state, ascension))
    console.print(multiplier_table(engine, state))
    console.print(cost_table(costs, state, levels))
