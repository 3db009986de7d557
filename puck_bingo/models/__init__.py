"""Typed models shared by the live client and the bingo services."""

from .schemas import (
    PLAYER_CATEGORIES,
    TEAM_CATEGORIES,
    TICKET_SIZE,
    BingoScore,
    Boxscore,
    ComparisonType,
    EventCategory,
    EventCondition,
    GameRef,
    GameStatus,
    GameTeam,
    GoalieStats,
    PlayerByGameStats,
    RosterPlayer,
    ScheduledGame,
    SkaterStats,
    TeamInfo,
    TeamPlayerStats,
    TeamRoster,
    Ticket,
)

__all__ = [
    "PLAYER_CATEGORIES",
    "TEAM_CATEGORIES",
    "TICKET_SIZE",
    "BingoScore",
    "Boxscore",
    "ComparisonType",
    "EventCategory",
    "EventCondition",
    "GameRef",
    "GameStatus",
    "GameTeam",
    "GoalieStats",
    "PlayerByGameStats",
    "RosterPlayer",
    "ScheduledGame",
    "SkaterStats",
    "TeamInfo",
    "TeamPlayerStats",
    "TeamRoster",
    "Ticket",
]
