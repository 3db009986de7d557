"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import copy
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure the package is importable when running from the repo root without installing it
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Settings are loaded at import time
os.environ.setdefault("ENVIRONMENT", "development")

from puck_bingo.models import (  # noqa: E402
    Boxscore,
    ComparisonType,
    EventCategory,
    EventCondition,
    GameRef,
    GameTeam,
    RosterPlayer,
    TeamRoster,
)

HOME = "EDM"
AWAY = "VAN"
GAME_ID = 2024020500


def make_roster(team: str, base_id: int, forwards: int = 12, defensemen: int = 9, goalies: int = 3) -> TeamRoster:
    """Roster with sequential player ids starting at ``base_id``."""
    next_id = iter(range(base_id, base_id + forwards + defensemen + goalies))
    return TeamRoster(
        team_abbrev=team,
        forwards=[RosterPlayer(id=next(next_id), full_name=f"{team} Forward {i}") for i in range(forwards)],
        defensemen=[RosterPlayer(id=next(next_id), full_name=f"{team} Defense {i}") for i in range(defensemen)],
        goalies=[RosterPlayer(id=next(next_id), full_name=f"{team} Goalie {i}") for i in range(goalies)],
    )


def make_condition(
    subject: str,
    threshold: int,
    category: EventCategory = EventCategory.FORWARD,
    comparison: ComparisonType = ComparisonType.GREATER_THAN,
    **refs,
) -> EventCondition:
    return EventCondition(
        id=f"{category.value}_{subject}_{threshold}",
        category=category,
        subject=subject,
        comparison=comparison,
        threshold=threshold,
        **refs,
    )


def make_unchecked_condition(subject: str, threshold: int, category: EventCategory, **refs) -> EventCondition:
    """Condition built without validation, e.g. a stored record missing its references."""
    return EventCondition.model_construct(
        id=f"{category.value}_{subject}_{threshold}",
        category=category,
        subject=subject,
        comparison=ComparisonType.GREATER_THAN,
        threshold=threshold,
        **refs,
    )


SAMPLE_BOXSCORE_PAYLOAD = {
    "id": GAME_ID,
    "gameState": "LIVE",
    "homeTeam": {"id": 22, "abbrev": HOME, "score": 3, "sog": 31},
    "awayTeam": {"id": 23, "abbrev": AWAY, "score": 2, "sog": 27},
    "playerByGameStats": {
        "homeTeam": {
            "forwards": [
                {
                    "playerId": 8478402,
                    "sweaterNumber": 97,
                    "name": {"default": "C. McDavid"},
                    "position": "C",
                    "goals": 1,
                    "assists": 2,
                    "points": 3,
                    "hits": 1,
                    "sog": 5,
                    "blockedShots": 0,
                    "pim": 2,
                    "toi": "21:45",
                },
                {
                    "playerId": 8477934,
                    "name": {"default": "L. Draisaitl"},
                    "goals": 2,
                    "assists": 0,
                    "points": 2,
                    "hits": 0,
                    "sog": 4,
                    "blockedShots": 1,
                    "pim": 4,
                    "toi": "20:10",
                },
            ],
            "defense": [
                {
                    "playerId": 8480803,
                    "name": {"default": "E. Bouchard"},
                    "goals": 0,
                    "assists": 1,
                    "points": 1,
                    "hits": 3,
                    "sog": 2,
                    "blockedShots": 4,
                    "pim": 0,
                    "toi": "24:59",
                },
            ],
            "goalies": [
                {
                    "playerId": 8479973,
                    "name": {"default": "S. Skinner"},
                    "saves": 25,
                    "goalsAgainst": 2,
                    "pim": 2,
                    "toi": "59:30",
                },
            ],
        },
        "awayTeam": {
            "forwards": [
                {
                    "playerId": 8477500,
                    "name": {"default": "E. Pettersson"},
                    "goals": 0,
                    "assists": 1,
                    "points": 1,
                    "hits": 2,
                    "sog": 3,
                    "blockedShots": 1,
                    "pim": 2,
                    "toi": "19:02",
                },
            ],
            "defense": [
                {
                    "playerId": 8480800,
                    "name": {"default": "Q. Hughes"},
                    "goals": 1,
                    "assists": 1,
                    "points": 2,
                    "hits": 0,
                    "sog": 3,
                    "blockedShots": 2,
                    "pim": 6,
                    "toi": "1:02:30",
                },
            ],
            "goalies": [
                {
                    "playerId": 8478024,
                    "name": {"default": "T. Demko"},
                    "saveShotsAgainst": "28/31",
                    "goalsAgainst": 3,
                    "toi": "58:12",
                },
            ],
        },
    },
}


@pytest.fixture
def boxscore_payload() -> dict:
    return copy.deepcopy(SAMPLE_BOXSCORE_PAYLOAD)


@pytest.fixture
def boxscore(boxscore_payload) -> Boxscore:
    return Boxscore.model_validate(boxscore_payload)


@pytest.fixture
def game() -> GameRef:
    return GameRef(id=GAME_ID, home_team=GameTeam(abbrev=HOME), away_team=GameTeam(abbrev=AWAY))


@pytest.fixture
def full_rosters() -> dict[str, TeamRoster]:
    return {HOME: make_roster(HOME, 1000), AWAY: make_roster(AWAY, 2000)}


@pytest.fixture
def nine_events() -> list[EventCondition]:
    return [make_condition("goals", 1, player_id=8478402, team_abbrev=HOME) for _ in range(9)]


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client."""
    client = MagicMock()
    client.get.return_value = MagicMock(status_code=200, json=lambda: {}, text="")
    return client


def mock_response(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response
