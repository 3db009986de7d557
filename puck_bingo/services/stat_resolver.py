"""Resolve an event condition to the single stat value it is judged on.

A return value of None means the stat is unavailable (unknown subject,
unknown player, team stats not yet reported). That is different from 0,
which is a real value a player can have earned.
"""

from __future__ import annotations

from collections.abc import Callable

from ..models import (
    TEAM_CATEGORIES,
    Boxscore,
    EventCondition,
    GoalieStats,
    PlayerByGameStats,
    SkaterStats,
    TeamPlayerStats,
)
from ..live.nhl_helpers import parse_toi_to_minutes

SUBJECT_PREFIXES = ("player.", "team.", "goalie.")
TEAM_PENALTY_SUBJECTS = frozenset({"penaltyMinutes", "pim", "penalties"})

SKATER_STATS: dict[str, Callable[[SkaterStats], int | None]] = {
    "goals": lambda p: p.goals,
    "assists": lambda p: p.assists,
    "points": lambda p: p.points,
    "hits": lambda p: p.hits,
    "sog": lambda p: p.sog,
    "blockedShots": lambda p: p.blocked_shots,
    "pim": lambda p: p.pim or 0,
    "toi": lambda p: parse_toi_to_minutes(p.toi),
}

GOALIE_STATS: dict[str, Callable[[GoalieStats], int | None]] = {
    "saves": lambda g: g.saves,
    "goalsAgainst": lambda g: g.goals_against,
    "ga": lambda g: g.goals_against,
    "toi": lambda g: parse_toi_to_minutes(g.toi),
}


def strip_subject_prefix(subject: str) -> str:
    """Drop leading "player." / "team." / "goalie." namespaces, checked in that order."""
    for prefix in SUBJECT_PREFIXES:
        if subject.startswith(prefix):
            subject = subject[len(prefix):]
    return subject


def resolve_value(boxscore: Boxscore, condition: EventCondition) -> int | None:
    """Return the integer the condition's threshold is compared against."""
    subject = strip_subject_prefix(condition.subject)

    if condition.category in TEAM_CATEGORIES:
        return _resolve_team_value(boxscore, condition.team_abbrev, subject)

    if condition.player_id is not None:
        skater = _find_skater(boxscore, lambda p: p.player_id == condition.player_id)
        if skater is not None:
            return _skater_stat(skater, subject)
        goalie = _find_goalie(boxscore, lambda g: g.player_id == condition.player_id)
        if goalie is not None:
            return _goalie_stat(goalie, subject)
        return None

    # Name matches are ambiguous across teams; the away side is searched first
    if condition.player_name and condition.player_name.strip():
        wanted = condition.player_name.casefold()
        skater = _find_skater(boxscore, lambda p: p.name.casefold() == wanted, away_first=True)
        if skater is not None:
            return _skater_stat(skater, subject)
        goalie = _find_goalie(boxscore, lambda g: g.name.casefold() == wanted, away_first=True)
        if goalie is not None:
            return _goalie_stat(goalie, subject)

    return None


def _resolve_team_value(boxscore: Boxscore, team_abbrev: str | None, subject: str) -> int | None:
    if not team_abbrev:
        return None

    is_home = boxscore.home_team.abbrev == team_abbrev
    team_info = boxscore.home_team if is_home else boxscore.away_team

    if subject == "goals":
        return team_info.score
    if subject == "sog":
        return team_info.sog
    if subject in TEAM_PENALTY_SUBJECTS:
        team_players = _team_players(boxscore, is_home)
        if team_players is None:
            return None
        # Goalie PIM is not counted toward the team total
        return sum(player.pim or 0 for player in team_players.skaters)
    return None


def _team_players(boxscore: Boxscore, is_home: bool) -> TeamPlayerStats | None:
    stats = boxscore.player_by_game_stats
    if stats is None:
        return None
    return stats.home_team if is_home else stats.away_team


def _team_order(stats: PlayerByGameStats, away_first: bool) -> tuple[TeamPlayerStats, TeamPlayerStats]:
    if away_first:
        return stats.away_team, stats.home_team
    return stats.home_team, stats.away_team


def _find_skater(
    boxscore: Boxscore,
    match: Callable[[SkaterStats], bool],
    away_first: bool = False,
) -> SkaterStats | None:
    stats = boxscore.player_by_game_stats
    if stats is None:
        return None
    first, second = _team_order(stats, away_first)
    for player in first.skaters + second.skaters:
        if match(player):
            return player
    return None


def _find_goalie(
    boxscore: Boxscore,
    match: Callable[[GoalieStats], bool],
    away_first: bool = False,
) -> GoalieStats | None:
    stats = boxscore.player_by_game_stats
    if stats is None:
        return None
    first, second = _team_order(stats, away_first)
    for goalie in first.goalies + second.goalies:
        if match(goalie):
            return goalie
    return None


def _skater_stat(player: SkaterStats, subject: str) -> int | None:
    getter = SKATER_STATS.get(subject)
    return getter(player) if getter else None


def _goalie_stat(goalie: GoalieStats, subject: str) -> int | None:
    getter = GOALIE_STATS.get(subject)
    return getter(goalie) if getter else None
