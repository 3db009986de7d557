"""Generate the initial event conditions for a new bingo ticket.

Conditions are drawn at random under two simultaneous quotas, one per
category and one per team, with a signature check so the same stat is
never asked twice of the same player or team. The random source is seeded
from the game id on every call, so a given game and rosters always yield
the same conditions.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config import settings
from ..logging import logger
from ..models import (
    PLAYER_CATEGORIES,
    TEAM_CATEGORIES,
    TICKET_SIZE,
    ComparisonType,
    EventCategory,
    EventCondition,
    GameRef,
    TeamRoster,
)
from .stat_resolver import strip_subject_prefix

if TYPE_CHECKING:
    from ..live import NHLClient

SKATER_SUBJECTS = ("goals", "assists", "hits", "sog", "blockedShots", "toi")

SUBJECT_POOLS: dict[EventCategory, tuple[str, ...]] = {
    EventCategory.FORWARD: SKATER_SUBJECTS,
    EventCategory.DEFENSE: SKATER_SUBJECTS,
    EventCategory.GOALIE: ("saves",),
    EventCategory.TEAM: ("goals", "sog", "penaltyMinutes"),
}

# Inclusive ranges tuned to typical single-game NHL numbers
THRESHOLD_RANGES: dict[EventCategory, dict[str, tuple[int, int]]] = {
    EventCategory.FORWARD: {
        "goals": (1, 2),
        "assists": (1, 2),
        "hits": (2, 4),
        "sog": (3, 6),
        "blockedShots": (1, 2),
        "toi": (18, 23),
    },
    EventCategory.DEFENSE: {
        "goals": (1, 1),
        "assists": (1, 2),
        "hits": (2, 4),
        "sog": (1, 3),
        "blockedShots": (2, 6),
        "toi": (18, 23),
    },
    EventCategory.GOALIE: {
        "saves": (26, 33),
    },
    EventCategory.TEAM: {
        "goals": (2, 5),
        "sog": (27, 36),
        "penaltyMinutes": (4, 12),
        "penalties": (4, 12),
    },
}
DEFAULT_THRESHOLD_RANGE = (1, 3)

Signature = tuple[EventCategory, str, int | None, str]


@dataclass(frozen=True)
class _Quotas:
    """Remaining conditions to hand out per category and per team."""

    categories: dict[EventCategory, int] = field(default_factory=dict)
    teams: dict[str, int] = field(default_factory=dict)

    @classmethod
    def for_game(cls, game: GameRef, count: int) -> _Quotas:
        forward = int(count * 0.45)
        defense = int(count * 0.45)
        goalie_team = count - forward - defense
        categories = {
            EventCategory.FORWARD: forward,
            EventCategory.DEFENSE: defense,
            EventCategory.TEAM: goalie_team // 2,
            EventCategory.GOALIE: goalie_team - goalie_team // 2,
        }
        teams = {
            game.home_team.abbrev: count // 2,
            game.away_team.abbrev: count - count // 2,
        }
        return cls(categories=categories, teams=teams)

    def open_categories(self) -> list[EventCategory]:
        return [category for category, left in self.categories.items() if left > 0]

    def open_teams(self) -> list[str]:
        return [team for team, left in self.teams.items() if left > 0]

    def consume(self, category: EventCategory, team: str) -> _Quotas:
        categories = dict(self.categories)
        teams = dict(self.teams)
        categories[category] -= 1
        teams[team] -= 1
        return _Quotas(categories=categories, teams=teams)


def random_threshold_for(subject: str, category: EventCategory, rng: random.Random) -> int:
    """Pick a plausible threshold for the subject within its category's range."""
    table_key = EventCategory.TEAM if category in TEAM_CATEGORIES else category
    low, high = THRESHOLD_RANGES[table_key].get(strip_subject_prefix(subject), DEFAULT_THRESHOLD_RANGE)
    return rng.randint(low, high)


def condition_signature(condition: EventCondition) -> Signature:
    """Dedup key: the same stat may not be asked twice of one player or team."""
    return (condition.category, condition.team_abbrev or "", condition.player_id, condition.subject)


def _build_candidate(
    rng: random.Random,
    category: EventCategory,
    team: str,
    rosters: Mapping[str, TeamRoster],
    index: int,
) -> EventCondition | None:
    comparison = ComparisonType.GREATER_THAN

    if category in PLAYER_CATEGORIES:
        roster = rosters.get(team)
        pool = roster.players_for(category) if roster is not None else []
        if not pool:
            return None

        player = rng.choice(pool)
        subject = rng.choice(SUBJECT_POOLS[category])
        return EventCondition(
            id=f"{category.value}_{team}_{player.id}_{index}",
            category=category,
            subject=subject,
            comparison=comparison,
            threshold=random_threshold_for(subject, category, rng),
            player_id=player.id,
            player_name=player.full_name,
            team_abbrev=team,
        )

    subject = rng.choice(SUBJECT_POOLS[EventCategory.TEAM])
    return EventCondition(
        id=f"{category.value}_{team}_{index}",
        category=category,
        subject=subject,
        comparison=comparison,
        threshold=random_threshold_for(subject, EventCategory.TEAM, rng),
        team_abbrev=team,
    )


def generate_events(
    game: GameRef,
    target_count: int,
    rosters: Mapping[str, TeamRoster],
) -> list[EventCondition]:
    """Generate up to ``target_count`` distinct conditions for a game.

    Args:
        game: The game the ticket is for
        target_count: Number of conditions wanted (9 for a full ticket)
        rosters: Rosters keyed by team abbreviation; missing teams count as empty

    Returns:
        The generated conditions. The attempt budget is ``target_count`` times
        the configured multiplier; when it runs out, or a quota can no longer
        be filled, the shorter list is returned as-is and callers must check
        its length.
    """
    rng = random.Random(game.id)
    quotas = _Quotas.for_game(game, target_count)
    max_attempts = target_count * settings.bingo_config.generation_attempt_multiplier

    events: list[EventCondition] = []
    signatures: set[Signature] = set()
    attempts = 0

    while len(events) < target_count and attempts < max_attempts:
        categories = quotas.open_categories()
        teams = quotas.open_teams()
        if not categories or not teams:
            break

        category = rng.choice(categories)
        team = rng.choice(teams)
        candidate = _build_candidate(rng, category, team, rosters, len(events))

        if candidate is not None:
            signature = condition_signature(candidate)
            if signature not in signatures:
                signatures.add(signature)
                events.append(candidate)
                quotas = quotas.consume(category, team)
        attempts += 1

    if len(events) < target_count:
        logger.warning(
            "bingo_generation_short",
            game_id=game.id,
            requested=target_count,
            generated=len(events),
            attempts=attempts,
        )
    else:
        logger.info("bingo_events_generated", game_id=game.id, count=len(events), attempts=attempts)

    return events


def generate_events_for_game(
    client: NHLClient,
    game: GameRef,
    target_count: int = TICKET_SIZE,
) -> list[EventCondition]:
    """Fetch both rosters concurrently, then generate the game's conditions."""
    rosters = client.fetch_rosters(game)
    return generate_events(game, target_count, rosters)
