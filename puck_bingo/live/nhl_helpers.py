"""Helper functions for NHL API payloads.

Utility functions for parsing API responses and building domain objects.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from ..models import ScheduledGame
from .nhl_constants import NHL_FINAL_STATES, NHL_LIVE_STATES, NHL_SCHEDULED_STATES


def parse_toi_to_minutes(toi: str | None) -> int:
    """Parse a time-on-ice string to whole minutes, dropping leftover seconds.

    Skaters report "MM:SS" and long goalie shifts may report "H:MM:SS"
    ("21:45" -> 21, "1:02:30" -> 62). Blank or malformed input is 0.
    """
    if not toi or not toi.strip():
        return 0
    try:
        parts = [int(part) for part in toi.strip().split(":")]
    except ValueError:
        return 0

    if len(parts) == 2:
        minutes, seconds = parts
        return minutes + seconds // 60
    if len(parts) == 3:
        hours, minutes, seconds = parts
        return hours * 60 + minutes + seconds // 60
    return 0


def full_name_from_api(player_data: dict) -> str:
    """Build "First Last" from the roster endpoint's localized name blocks."""
    first = (player_data.get("firstName") or {}).get("default", "")
    last = (player_data.get("lastName") or {}).get("default", "")
    return f"{first} {last}".strip()


def map_nhl_game_state(state: str) -> str:
    """Map NHL gameState to normalized status."""
    if state in NHL_FINAL_STATES:
        return "final"
    if state in NHL_LIVE_STATES:
        return "live"
    return "scheduled"


def upcoming_games(games: Iterable[ScheduledGame], limit: int) -> list[ScheduledGame]:
    """Games that have not started yet, in schedule order, capped at ``limit``."""
    pending = [game for game in games if game.game_state in NHL_SCHEDULED_STATES]
    return pending[:limit]


def time_until_start(start_time_utc: datetime, now: datetime | None = None) -> timedelta:
    """Time left before puck drop; negative once the game has started.

    Naive datetimes are taken to be UTC.
    """
    if start_time_utc.tzinfo is None:
        start_time_utc = start_time_utc.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return start_time_utc - now
