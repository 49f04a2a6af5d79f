"""Save/load — persists the game state to disk between sessions."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from alien_clicker.engine.game_state import GameState, GameStats

logger = logging.getLogger(__name__)

SAVE_DIR = Path.home() / ".alien_clicker"
SAVE_FILE = SAVE_DIR / "save.json"

_STAT_FIELDS = (
    "ships_count",
    "attack_speed_level",
    "point_multiplier_level",
    "crit_chance_level",
    "xp_boost_level",
    "resource_gen_level",
)


# ── Serialisation helpers ────────────────────────────────────────


def state_to_dict(state: GameState) -> dict:
    s = state
    d = {
        "points": s.points,
        "level": s.level,
        "experience": s.experience,
        "blocked_on_boss_level": s.blocked_on_boss_level,
        "sub_upgrades": dict(s.sub_upgrades),
        "achievements": dict(s.achievements),
        "prestige_level": s.prestige_level,
        "prestige_points": s.prestige_points,
        "prestige_upgrades": dict(s.prestige_upgrades),
        "highest_level_reached": s.highest_level_reached,
        "auto_buy_enabled": s.auto_buy_enabled,
        "stats": {
            "total_clicks": s.stats.total_clicks,
            "total_damage": s.stats.total_damage,
            "aliens_killed": s.stats.aliens_killed,
            "bosses_killed": s.stats.bosses_killed,
            "total_upgrades": s.stats.total_upgrades,
            "total_sub_upgrades": s.stats.total_sub_upgrades,
            "max_level": s.stats.max_level,
            "critical_hits": s.stats.critical_hits,
            "total_prestige": s.stats.total_prestige,
            "play_time": s.stats.play_time,
        },
    }
    for name in _STAT_FIELDS:
        d[name] = getattr(s, name)
    return d


def dict_to_state(d: dict) -> GameState:
    """Rebuild a state.  Missing keys fall back to zero values."""
    stats_d = d.get("stats") or {}
    stats = GameStats(
        total_clicks=int(stats_d.get("total_clicks", 0)),
        total_damage=float(stats_d.get("total_damage", 0.0)),
        aliens_killed=int(stats_d.get("aliens_killed", 0)),
        bosses_killed=int(stats_d.get("bosses_killed", 0)),
        total_upgrades=int(stats_d.get("total_upgrades", 0)),
        total_sub_upgrades=int(stats_d.get("total_sub_upgrades", 0)),
        max_level=int(stats_d.get("max_level", 1)),
        critical_hits=int(stats_d.get("critical_hits", 0)),
        total_prestige=int(stats_d.get("total_prestige", 0)),
        play_time=float(stats_d.get("play_time", 0.0)),
    )

    state = GameState(
        points=float(d.get("points", 0.0)),
        level=max(1, int(d.get("level", 1))),
        experience=float(d.get("experience", 0.0)),
        blocked_on_boss_level=bool(d.get("blocked_on_boss_level", False)),
        sub_upgrades={k: bool(v) for k, v in (d.get("sub_upgrades") or {}).items()},
        achievements={k: bool(v) for k, v in (d.get("achievements") or {}).items()},
        prestige_level=int(d.get("prestige_level", 0)),
        prestige_points=int(d.get("prestige_points", 0)),
        prestige_upgrades={k: int(v) for k, v in (d.get("prestige_upgrades") or {}).items()},
        highest_level_reached=int(d.get("highest_level_reached", 0)),
        auto_buy_enabled=bool(d.get("auto_buy_enabled", False)),
        stats=stats,
    )
    for name in _STAT_FIELDS:
        setattr(state, name, int(d.get(name, 0)))
    return state


# ── Public API ───────────────────────────────────────────────────


def save_game(state: GameState, path: Path = SAVE_FILE) -> bool:
    """Persist the state to disk.  Returns False if the write failed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state_to_dict(state), indent=2))
    except OSError as exc:
        logger.warning("Could not write save file %s: %s", path, exc)
        return False
    return True


def load_game(path: Path = SAVE_FILE) -> GameState | None:
    """Load a saved game from disk.  Returns None if no usable save exists."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
        return dict_to_state(data)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable save file %s: %s", path, exc)
        return None


def delete_game(path: Path = SAVE_FILE) -> None:
    """Remove the save file."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not delete save file %s: %s", path, exc)
