"""Bingo pipeline: event generation, stat resolution, fulfillment and scoring."""

from .event_generator import generate_events, generate_events_for_game
from .fulfillment import evaluate_events, is_fulfilled
from .labels import format_event_label
from .scoring import compute_score
from .stat_resolver import resolve_value
from .tickets import InMemoryTicketRepository, TicketRefreshResult, TicketRepository, TicketService

__all__ = [
    "InMemoryTicketRepository",
    "TicketRefreshResult",
    "TicketRepository",
    "TicketService",
    "compute_score",
    "evaluate_events",
    "format_event_label",
    "generate_events",
    "generate_events_for_game",
    "is_fulfilled",
    "resolve_value",
]
