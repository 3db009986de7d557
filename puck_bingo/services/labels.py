"""Human-readable labels for ticket cells, e.g. "Connor McDavid shots on goal (4+)"."""

from __future__ import annotations

import random

from ..models import TEAM_CATEGORIES, ComparisonType, EventCondition

STAT_PHRASES: dict[str, tuple[str, ...]] = {
    "goals": ("scores", "goals", "scores goals"),
    "assists": ("assists", "assists on a goal", "gets assists"),
    "hits": ("hits", "delivers hits", "body checks"),
    "sog": ("shots on goal", "shots"),
    "blockedShots": ("blocks shots", "shots blocked"),
    "saves": ("saves", "makes saves", "shots saved"),
    "penaltyMinutes": ("penalty minutes", "takes penalty minutes", "total penalty minutes"),
    "toi": ("minutes on ice", "time on ice"),
}

TEAM_STAT_PHRASES: dict[str, tuple[str, ...]] = {
    "goals": ("scores goals", "total goals"),
    "sog": ("total shots",),
}


def _pick(options: tuple[str, ...], rng: random.Random | None) -> str:
    return rng.choice(options) if rng is not None else options[0]


def format_event_label(condition: EventCondition, rng: random.Random | None = None) -> str:
    """Render a condition for display.

    The first phrasing of each stat is used unless ``rng`` is given, in which
    case one is picked at random for variety.
    """
    is_team = condition.category in TEAM_CATEGORIES

    if condition.player_name:
        who = condition.player_name
    elif condition.team_abbrev and is_team:
        who = condition.team_abbrev
    else:
        who = "Player"

    phrases = (TEAM_STAT_PHRASES if is_team else {}).get(condition.subject) or STAT_PHRASES.get(condition.subject)
    stat = _pick(phrases, rng) if phrases else condition.subject

    if condition.comparison is ComparisonType.GREATER_THAN:
        comparison = f"{condition.threshold}+"
    else:
        comparison = f"< {condition.threshold}"

    return f"{who} {stat} ({comparison})"
