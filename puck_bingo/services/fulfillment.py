"""Decide whether an event condition is met by a boxscore."""

from __future__ import annotations

from collections.abc import Sequence

from ..logging import logger
from ..models import Boxscore, ComparisonType, EventCondition
from .stat_resolver import resolve_value


def compare_stat(value: int, threshold: int, comparison: ComparisonType) -> bool:
    """Compare a stat against its threshold.

    GREATER_THAN reads as "at least" (inclusive); LESS_THAN is strict.
    """
    if comparison is ComparisonType.GREATER_THAN:
        return value >= threshold
    if comparison is ComparisonType.LESS_THAN:
        return value < threshold
    return False


def is_fulfilled(condition: EventCondition, boxscore: Boxscore) -> bool:
    """True if the boxscore satisfies the condition; missing data is never a match."""
    value = resolve_value(boxscore, condition)
    if value is None:
        logger.debug(
            "bingo_condition_unavailable",
            condition_id=condition.id,
            subject=condition.subject,
            player=condition.player_name,
            team=condition.team_abbrev,
        )
        return False

    result = compare_stat(value, condition.threshold, condition.comparison)
    logger.debug(
        "bingo_condition_checked",
        condition_id=condition.id,
        subject=condition.subject,
        value=value,
        threshold=condition.threshold,
        comparison=condition.comparison.value,
        fulfilled=result,
    )
    return result


def evaluate_events(events: Sequence[EventCondition], boxscore: Boxscore) -> list[bool]:
    """Crossed-off flags for a ticket's events, in grid order."""
    return [is_fulfilled(event, boxscore) for event in events]
