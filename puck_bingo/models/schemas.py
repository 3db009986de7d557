"""Pydantic models for games, rosters, boxscores and bingo tickets.

Field names are snake_case; every model also accepts (and dumps, with
``by_alias=True``) the camelCase keys used by the NHL API and the ticket
store.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..utils.parsing import parse_save_shots

# 3x3 grid, row-major
TICKET_SIZE = 9


class EventCategory(str, Enum):
    FORWARD = "FORWARD"
    DEFENSE = "DEFENSE"
    GOALIE = "GOALIE"
    TEAM = "TEAM"
    PENALTY = "PENALTY"


class ComparisonType(str, Enum):
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"


PLAYER_CATEGORIES = frozenset({EventCategory.FORWARD, EventCategory.DEFENSE, EventCategory.GOALIE})
TEAM_CATEGORIES = frozenset({EventCategory.TEAM, EventCategory.PENALTY})


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _unwrap_localized(value: Any) -> Any:
    # NHL API wraps display strings as {"default": "...", "fr": "..."}
    if isinstance(value, dict):
        return value.get("default", "")
    return value


# ---------------------------------------------------------------------------
# Games and rosters
# ---------------------------------------------------------------------------


class GameTeam(CamelModel):
    abbrev: str
    id: int | None = None


class GameRef(CamelModel):
    """The slice of a scheduled game a ticket needs."""

    id: int
    home_team: GameTeam
    away_team: GameTeam

    @property
    def team_abbrevs(self) -> tuple[str, str]:
        return self.home_team.abbrev, self.away_team.abbrev


class _GameLifecycle:
    """State checks shared by models carrying an NHL ``gameState``; case-insensitive."""

    @property
    def is_live(self) -> bool:
        return self.game_state.upper() in ("LIVE", "CRIT")

    @property
    def is_finished(self) -> bool:
        return self.game_state.upper() in ("OFF", "FINAL")

    @property
    def is_scheduled(self) -> bool:
        return self.game_state.upper() in ("FUT", "SCHEDULED", "PRE")


class ScheduledGame(_GameLifecycle, GameRef):
    """A game from the schedule endpoint, with its lifecycle state."""

    game_state: str = "FUT"
    game_schedule_state: str = "OK"
    start_time_utc: datetime | None = Field(default=None, alias="startTimeUTC")

    def as_ref(self) -> GameRef:
        return GameRef(id=self.id, home_team=self.home_team, away_team=self.away_team)

    def to_status(self) -> GameStatus:
        return GameStatus(
            game_id=self.id,
            game_state=self.game_state,
            game_schedule_state=self.game_schedule_state,
            start_time_utc=self.start_time_utc,
        )


class GameStatus(_GameLifecycle, CamelModel):
    """Where a single game is in its lifecycle.

    ``detailed_state`` mirrors ``game_schedule_state`` (e.g. "OK", "PPD",
    "CNCL").
    """

    game_id: int
    game_state: str = "FUT"
    game_schedule_state: str = "OK"
    start_time_utc: datetime | None = Field(default=None, alias="startTimeUTC")

    @property
    def detailed_state(self) -> str:
        return self.game_schedule_state


class RosterPlayer(CamelModel):
    id: int
    full_name: str


class TeamRoster(CamelModel):
    team_abbrev: str
    forwards: list[RosterPlayer] = Field(default_factory=list)
    defensemen: list[RosterPlayer] = Field(default_factory=list)
    goalies: list[RosterPlayer] = Field(default_factory=list)

    @classmethod
    def empty(cls, team_abbrev: str) -> TeamRoster:
        return cls(team_abbrev=team_abbrev)

    def players_for(self, category: EventCategory) -> list[RosterPlayer]:
        """Roster slice feeding a player category; empty for team categories."""
        if category is EventCategory.FORWARD:
            return self.forwards
        if category is EventCategory.DEFENSE:
            return self.defensemen
        if category is EventCategory.GOALIE:
            return self.goalies
        return []

    @property
    def is_empty(self) -> bool:
        return not (self.forwards or self.defensemen or self.goalies)


# ---------------------------------------------------------------------------
# Boxscores
# ---------------------------------------------------------------------------


class TeamInfo(CamelModel):
    abbrev: str
    score: int | None = None
    sog: int | None = None


class SkaterStats(CamelModel):
    player_id: int
    name: str = ""
    goals: int | None = None
    assists: int | None = None
    points: int | None = None
    hits: int | None = None
    sog: int | None = None
    blocked_shots: int | None = None
    pim: int | None = None
    toi: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def unwrap_name(cls, value: Any) -> Any:
        return _unwrap_localized(value)


class GoalieStats(CamelModel):
    player_id: int
    name: str = ""
    saves: int | None = None
    goals_against: int | None = None
    toi: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def unwrap_name(cls, value: Any) -> Any:
        return _unwrap_localized(value)

    @model_validator(mode="before")
    @classmethod
    def derive_saves(cls, data: Any) -> Any:
        # Older payloads only carry "saveShotsAgainst": "25/27"
        if isinstance(data, dict) and data.get("saves") is None and data.get("saveShotsAgainst"):
            saves, _ = parse_save_shots(data["saveShotsAgainst"])
            if saves is not None:
                data = {**data, "saves": saves}
        return data


class TeamPlayerStats(CamelModel):
    forwards: list[SkaterStats] = Field(default_factory=list)
    defense: list[SkaterStats] = Field(default_factory=list)
    goalies: list[GoalieStats] = Field(default_factory=list)

    @property
    def skaters(self) -> list[SkaterStats]:
        return self.forwards + self.defense


class PlayerByGameStats(CamelModel):
    home_team: TeamPlayerStats = Field(default_factory=TeamPlayerStats)
    away_team: TeamPlayerStats = Field(default_factory=TeamPlayerStats)


class Boxscore(CamelModel):
    """Per-game statistical snapshot from the gamecenter boxscore endpoint."""

    id: int
    game_state: str = ""
    home_team: TeamInfo
    away_team: TeamInfo
    # Absent until the game has started
    player_by_game_stats: PlayerByGameStats | None = None


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------


class EventCondition(CamelModel):
    """One of the nine statistical predictions on a ticket.

    Player categories carry a player reference (id or name); team categories
    carry only a team abbreviation. Instances are re-checked whenever they are
    placed on a ticket.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, revalidate_instances="always")

    id: str
    category: EventCategory
    subject: str
    comparison: ComparisonType
    threshold: int
    player_id: int | None = None
    player_name: str | None = None
    team_abbrev: str | None = None

    @model_validator(mode="after")
    def require_matching_reference(self) -> EventCondition:
        has_player = self.player_id is not None or bool(self.player_name and self.player_name.strip())
        if self.category in PLAYER_CATEGORIES:
            if not has_player:
                msg = f"{self.category.value} condition {self.id!r} needs a playerId or playerName"
                raise ValueError(msg)
        else:
            if self.player_id is not None or self.player_name:
                msg = f"{self.category.value} condition {self.id!r} must not reference a player"
                raise ValueError(msg)
            if not self.team_abbrev:
                msg = f"{self.category.value} condition {self.id!r} needs a teamAbbrev"
                raise ValueError(msg)
        return self


class BingoScore(CamelModel):
    no_crossed_off: NonNegativeInt = 0
    no_rows: NonNegativeInt = 0
    no_columns: NonNegativeInt = 0
    no_crosses: NonNegativeInt = 0
    total: NonNegativeInt = 0


def _empty_grid() -> list[bool]:
    return [False] * TICKET_SIZE


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(CamelModel):
    """A user's bingo ticket.

    ``events`` and ``crossed_off`` are parallel, row-major over the 3x3 grid,
    and must both hold exactly nine entries; this is checked on construction
    and on every attribute assignment.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    game: GameRef
    events: list[EventCondition]
    crossed_off: list[StrictBool] = Field(default_factory=_empty_grid)
    score: BingoScore = Field(default_factory=BingoScore)
    created_at: datetime = Field(default_factory=_now_utc)

    @field_validator("events")
    @classmethod
    def require_nine_events(cls, value: list[EventCondition]) -> list[EventCondition]:
        if len(value) != TICKET_SIZE:
            msg = f"Exactly {TICKET_SIZE} events required, got {len(value)}"
            raise ValueError(msg)
        return value

    @field_validator("crossed_off")
    @classmethod
    def require_nine_cells(cls, value: list[bool]) -> list[bool]:
        if len(value) != TICKET_SIZE:
            msg = f"crossedOff must have exactly {TICKET_SIZE} entries, got {len(value)}"
            raise ValueError(msg)
        return value
