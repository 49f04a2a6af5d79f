"""Economy — resolving hits and passive ticks into points, and number formatting."""

from __future__ import annotations

import math
import random

from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.engine.multipliers import MultiplierEngine
from alien_clicker.engine.store import GameStateStore


def handle_hit(
    store: GameStateStore,
    engine: MultiplierEngine,
    rng: random.Random | None = None,
    *,
    is_click: bool = True,
) -> float:
    """Resolve one hit (a click or a fleet volley).  Returns points earned."""
    rng = rng or random.Random()
    state = store.state

    damage = engine.get_click_damage(state) if is_click else engine.get_auto_fire_damage(state)
    is_crit = rng.random() * 100.0 < engine.get_crit_chance(state)
    if is_crit:
        damage *= engine.get_crit_multiplier(state)

    earned = damage * engine.get_income_multiplier(state)
    store.record_hit(damage, is_click=is_click, is_crit=is_crit)
    store.add_points(earned)
    return earned


def tick_passive(store: GameStateStore, engine: MultiplierEngine, dt: float) -> float:
    """Apply passive income for dt seconds.  Returns points earned."""
    if dt <= 0:
        return 0.0
    state = store.state
    earned = engine.get_passive_generation(state) * engine.get_income_multiplier(state) * dt
    store.add_play_time(dt)
    store.add_points(earned)
    return earned


def format_number(n: float, balance: GameBalance = BALANCE) -> str:
    """Format a number with suffixes for readability."""
    if n < 0:
        return f"-{format_number(-n, balance)}"
    if math.isinf(n):
        return "∞"

    value, suffix = n, ""
    for threshold, symbol in balance.display.suffixes:
        if n >= threshold:
            value, suffix = n / threshold, symbol

    # Three significant digits; bare whole numbers under 10 print without decimals
    if value >= 100:
        decimals = 0
    elif value >= 10:
        decimals = 1
    elif suffix:
        decimals = 2
    else:
        decimals = 0 if value == int(value) else 1
    return f"{value:.{decimals}f}{suffix}"
