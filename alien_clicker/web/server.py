"""Alien Clicker Web — Flask JSON API over one in-memory game.

Passive income is driven lazily: each API request catches up on elapsed
time before it acts.  One lock serialises every request, so the store has a
single logical writer.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from pathlib import Path

from flask import Flask, jsonify

from alien_clicker.data.ascension_upgrades import ASCENSION_UPGRADES
from alien_clicker.data.balance import BALANCE, GameBalance
from alien_clicker.data.stats import ALL_STATS
from alien_clicker.data.sub_upgrades import SUB_UPGRADES
from alien_clicker.engine.ascension import AscensionEngine
from alien_clicker.engine.cost import CostEngine
from alien_clicker.engine.economy import format_number, handle_hit, tick_passive
from alien_clicker.engine.game_state import GameState
from alien_clicker.engine.multipliers import MultiplierEngine
from alien_clicker.engine.save import SAVE_FILE, load_game, save_game
from alien_clicker.engine.store import GameStateStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_balance: GameBalance = BALANCE
_save_path: Path = SAVE_FILE
_store: GameStateStore | None = None
_engine: MultiplierEngine | None = None
_rng = random.Random()
_last_tick: float = 0.0
_last_autosave: float = 0.0


def configure(balance: GameBalance = BALANCE, save_path: Path = SAVE_FILE,
              state: GameState | None = None) -> None:
    """(Re)build the session.  With ``state`` given, the save file is not read."""
    global _balance, _save_path, _store, _engine, _last_tick, _last_autosave
    _balance = balance
    _save_path = save_path
    if state is None:
        state = load_game(save_path)
        if state is not None:
            logger.info("Loaded save from %s", save_path)
    ascension = AscensionEngine(balance)
    _store = GameStateStore(
        state,
        balance=balance,
        cost_engine=CostEngine(balance),
        ascension_engine=ascension,
    )
    _engine = MultiplierEngine(balance, ascension=ascension)
    _last_tick = time.time()
    _last_autosave = time.time()


def _ensure_game() -> None:
    """Initialise the game if not yet started."""
    if _store is None:
        configure(_balance, _save_path)


def _do_ticks() -> None:
    """Catch up passive income since the last call."""
    assert _store is not None and _engine is not None
    global _last_tick, _last_autosave
    now = time.time()
    dt = now - _last_tick
    if dt <= 0:
        return
    # Cap catch-up to 60 s to avoid mega-ticks after long AFK
    dt = min(dt, 60.0)
    _last_tick = now

    tick_passive(_store, _engine, dt)
    _store.run_auto_buy()

    if now - _last_autosave >= 30.0:
        save_game(_store.state, _save_path)
        _last_autosave = now


def _state_json() -> dict:
    """Build the JSON blob sent to the client."""
    assert _store is not None and _engine is not None
    s = _store.state
    costs = _store.cost_engine
    ascension = _store.ascension_engine

    stats = []
    for stat in ALL_STATS.values():
        cost = costs.get_next_cost(stat.id, s)
        stats.append({
            "id": stat.id,
            "name": stat.name,
            "level": getattr(s, stat.field),
            "cost": format_number(cost, _balance),
            "cost_raw": cost,
            "can_afford": s.points >= cost,
        })

    sub_upgrades = []
    for u in SUB_UPGRADES.values():
        owned = u.owned(s)
        if not owned and not u.is_visible(s):
            continue
        cost = costs.get_sub_upgrade_cost(u.id, s)
        sub_upgrades.append({
            "id": u.id,
            "name": u.name,
            "description": u.description,
            "cost": format_number(cost, _balance),
            "cost_raw": cost,
            "owned": owned,
            "unlocked": u.requires(s),
            "can_afford": not owned and u.requires(s) and s.points >= cost,
        })

    return {
        "points": s.points,
        "points_fmt": format_number(s.points, _balance),
        "level": s.level,
        "experience": s.experience,
        "points_per_hit": _engine.get_points_per_hit(s),
        "click_damage": _engine.get_click_damage(s),
        "fleet_damage": _engine.get_auto_fire_damage(s),
        "crit_chance": _engine.get_crit_chance(s),
        "crit_multiplier": _engine.get_crit_multiplier(s),
        "xp_multiplier": _engine.get_xp_multiplier(s),
        "fire_cooldown_ms": _engine.get_fire_cooldown(s),
        "passive_per_s": _engine.get_passive_generation(s),
        "discount": costs.get_discount(s),
        "stats": stats,
        "sub_upgrades": sub_upgrades,
        "prestige_level": s.prestige_level,
        "prestige_points": s.prestige_points,
        "can_ascend": ascension.can_ascend(s),
        "auto_buy_enabled": s.auto_buy_enabled,
    }


def _ascension_json() -> dict:
    assert _store is not None
    s = _store.state
    engine = _store.ascension_engine
    breakdown = engine.calculate_prestige_points_breakdown(s)

    upgrades = []
    for u in ASCENSION_UPGRADES.values():
        cost = engine.get_upgrade_cost(u.id, s)
        maxed = u.is_maxed(s)
        upgrades.append({
            "id": u.id,
            "name": u.name,
            "description": u.description,
            "level": u.get_current_level(s),
            "max_level": u.max_level,
            "cost": None if maxed else cost,
            "maxed": maxed,
            "can_afford": not maxed and s.prestige_points >= cost,
        })

    return {
        "can_ascend": engine.can_ascend(s),
        "unlocked": engine.is_unlocked(s),
        "prestige_level": s.prestige_level,
        "prestige_points": s.prestige_points,
        "unspent_multiplier": engine.get_unspent_pp_multiplier(s),
        "breakdown": {
            "base": breakdown.base,
            "achievement_bonus": breakdown.achievement_bonus,
            "bonus": breakdown.bonus,
            "previous_best": breakdown.previous_best,
            "multiplier": breakdown.multiplier,
            "total": breakdown.total,
        },
        "upgrades": upgrades,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/state")
def api_state():
    with _lock:
        _ensure_game()
        _do_ticks()
        return jsonify(_state_json())


@app.route("/api/action/hit", methods=["POST"])
def action_hit():
    with _lock:
        _ensure_game()
        _do_ticks()
        assert _store is not None and _engine is not None
        earned = handle_hit(_store, _engine, _rng, is_click=True)
        data = _state_json()
        data["earned"] = earned
        return jsonify(data)


@app.route("/api/action/buy/stat/<stat_id>", methods=["POST"])
def action_buy_stat(stat_id: str):
    with _lock:
        _ensure_game()
        _do_ticks()
        assert _store is not None
        if stat_id not in ALL_STATS:
            return jsonify({"error": f"Unknown stat: {stat_id}"}), 404
        bought = _store.buy_stat(stat_id)
        data = _state_json()
        data["bought"] = bought
        return jsonify(data)


@app.route("/api/action/buy/sub/<upgrade_id>", methods=["POST"])
def action_buy_sub(upgrade_id: str):
    with _lock:
        _ensure_game()
        _do_ticks()
        assert _store is not None
        if upgrade_id not in SUB_UPGRADES:
            return jsonify({"error": f"Unknown upgrade: {upgrade_id}"}), 404
        bought = _store.buy_sub_upgrade(upgrade_id)
        data = _state_json()
        data["bought"] = bought
        return jsonify(data)


@app.route("/api/action/buy/prestige/<upgrade_id>", methods=["POST"])
def action_buy_prestige(upgrade_id: str):
    with _lock:
        _ensure_game()
        assert _store is not None
        if upgrade_id not in ASCENSION_UPGRADES:
            return jsonify({"error": f"Unknown prestige upgrade: {upgrade_id}"}), 404
        bought = _store.buy_prestige_upgrade(upgrade_id)
        data = _ascension_json()
        data["bought"] = bought
        return jsonify(data)


@app.route("/api/ascension")
def api_ascension():
    with _lock:
        _ensure_game()
        return jsonify(_ascension_json())


@app.route("/api/action/ascend", methods=["POST"])
def action_ascend():
    with _lock:
        _ensure_game()
        _do_ticks()
        assert _store is not None
        if not _store.ascension_engine.can_ascend(_store.state):
            return jsonify({"error": "Cannot ascend yet"}), 400
        gained = _store.ascend()
        save_game(_store.state, _save_path)
        data = _ascension_json()
        data["gained"] = gained
        data["ascension_complete"] = True
        return jsonify(data)


@app.route("/api/action/save", methods=["POST"])
def action_save():
    with _lock:
        _ensure_game()
        assert _store is not None
        saved = save_game(_store.state, _save_path)
        return jsonify({"saved": saved})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    app.run(host=host, port=port, debug=debug, use_reloader=False)
