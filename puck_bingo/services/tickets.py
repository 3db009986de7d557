"""Ticket lifecycle: creation, crossed-off updates and box-score refreshes.

Storage is owned by the caller through ``TicketRepository``. A ticket's
events never change after creation; ``crossed_off`` and ``score`` are
recomputed wholesale and overwritten together.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from pydantic import ValidationError

from ..config import settings
from ..errors import TicketNotFoundError, TicketValidationError
from ..live import NHLClient
from ..logging import logger
from ..models import TICKET_SIZE, BingoScore, EventCondition, GameRef, Ticket
from .event_generator import generate_events_for_game
from .fulfillment import evaluate_events
from .scoring import compute_score

RefreshStatus = Literal["updated", "skipped", "failed"]


class TicketRepository(Protocol):
    def get(self, ticket_id: str) -> Ticket | None: ...

    def list_for_user(self, user_id: str) -> list[Ticket]: ...

    def save(self, ticket: Ticket) -> Ticket: ...

    def delete(self, ticket_id: str) -> bool: ...


class InMemoryTicketRepository:
    """Dict-backed repository; lists a user's tickets newest first."""

    def __init__(self) -> None:
        self._tickets: dict[str, Ticket] = {}
        self._lock = threading.Lock()

    def get(self, ticket_id: str) -> Ticket | None:
        with self._lock:
            return self._tickets.get(ticket_id)

    def list_for_user(self, user_id: str) -> list[Ticket]:
        with self._lock:
            tickets = [t for t in self._tickets.values() if t.user_id == user_id]
        return sorted(tickets, key=lambda t: t.created_at, reverse=True)

    def save(self, ticket: Ticket) -> Ticket:
        with self._lock:
            self._tickets[ticket.id] = ticket
        return ticket

    def delete(self, ticket_id: str) -> bool:
        with self._lock:
            return self._tickets.pop(ticket_id, None) is not None


@dataclass(frozen=True)
class TicketRefreshResult:
    ticket_id: str
    status: RefreshStatus
    crossed_off: list[bool] | None = None
    score: BingoScore | None = None
    reason: str | None = None


def _validated_grid(crossed_off: Any) -> list[bool]:
    if not isinstance(crossed_off, (list, tuple)):
        raise TicketValidationError("Invalid crossedOff format")
    if len(crossed_off) != TICKET_SIZE:
        raise TicketValidationError(f"crossedOff must have exactly {TICKET_SIZE} entries, got {len(crossed_off)}")
    if not all(isinstance(cell, bool) for cell in crossed_off):
        raise TicketValidationError("crossedOff entries must be booleans")
    return list(crossed_off)


class TicketService:
    """Creates, updates and refreshes bingo tickets."""

    def __init__(self, repository: TicketRepository, client: NHLClient | None = None) -> None:
        self.repository = repository
        self.client = client if client is not None else NHLClient()

    def create_ticket(
        self,
        user_id: str,
        name: str,
        game: GameRef,
        events: Sequence[EventCondition],
        crossed_off: Sequence[bool] | None = None,
    ) -> Ticket:
        """Persist a new ticket.

        Raises:
            TicketValidationError: if there are not exactly nine events, the
                crossed-off grid is malformed, or the owner/name are blank
        """
        if len(events) != TICKET_SIZE:
            raise TicketValidationError(f"Exactly {TICKET_SIZE} events required, got {len(events)}")

        grid = _validated_grid(crossed_off) if crossed_off is not None else [False] * TICKET_SIZE

        try:
            ticket = Ticket(
                user_id=user_id,
                name=name,
                game=game,
                events=list(events),
                crossed_off=grid,
                score=compute_score(grid),
            )
        except ValidationError as exc:
            raise TicketValidationError(str(exc)) from exc

        saved = self.repository.save(ticket)
        logger.info("bingo_ticket_created", ticket_id=saved.id, user_id=user_id, game_id=game.id)
        return saved

    def generate_ticket(self, user_id: str, name: str, game: GameRef) -> Ticket:
        """Generate nine conditions from live rosters and persist the ticket.

        A short generation (thin rosters, exhausted attempts) is rejected here
        rather than stored as a partial grid.
        """
        events = generate_events_for_game(self.client, game, TICKET_SIZE)
        return self.create_ticket(user_id, name, game, events)

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.repository.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def list_tickets(self, user_id: str) -> list[Ticket]:
        return self.repository.list_for_user(user_id)

    def delete_ticket(self, ticket_id: str) -> None:
        if not self.repository.delete(ticket_id):
            raise TicketNotFoundError(ticket_id)
        logger.info("bingo_ticket_deleted", ticket_id=ticket_id)

    def update_crossed_off(self, ticket_id: str, crossed_off: Sequence[bool]) -> Ticket:
        """Overwrite the grid and its score in one step."""
        ticket = self.get_ticket(ticket_id)
        grid = _validated_grid(crossed_off)

        updated = ticket.model_copy()
        try:
            updated.crossed_off = grid
            updated.score = compute_score(grid)
        except ValidationError as exc:
            raise TicketValidationError(str(exc)) from exc

        saved = self.repository.save(updated)
        logger.info(
            "bingo_ticket_crossed_off_updated",
            ticket_id=ticket_id,
            crossed=saved.score.no_crossed_off,
            total=saved.score.total,
        )
        return saved

    def refresh_ticket(self, ticket_id: str) -> TicketRefreshResult:
        """Re-evaluate a ticket against the current box-score.

        An unavailable box-score leaves the ticket untouched and is reported
        as ``skipped``; it is not an error.
        """
        ticket = self.repository.get(ticket_id)
        if ticket is None:
            logger.warning("bingo_refresh_ticket_missing", ticket_id=ticket_id)
            return TicketRefreshResult(ticket_id=ticket_id, status="failed", reason="ticket not found")

        boxscore = self.client.fetch_boxscore(ticket.game.id)
        if boxscore is None:
            logger.info("bingo_refresh_skipped", ticket_id=ticket_id, game_id=ticket.game.id)
            return TicketRefreshResult(ticket_id=ticket_id, status="skipped", reason="boxscore unavailable")

        crossed_off = evaluate_events(ticket.events, boxscore)
        try:
            updated = self.update_crossed_off(ticket_id, crossed_off)
        except TicketNotFoundError:
            # Deleted while the box-score was being fetched
            logger.warning("bingo_refresh_ticket_vanished", ticket_id=ticket_id)
            return TicketRefreshResult(ticket_id=ticket_id, status="failed", reason="ticket not found")
        return TicketRefreshResult(
            ticket_id=ticket_id,
            status="updated",
            crossed_off=list(updated.crossed_off),
            score=updated.score,
        )

    def refresh_tickets(self, user_id: str) -> list[TicketRefreshResult]:
        """Refresh every ticket a user owns; each ticket succeeds or fails on its own."""
        tickets = self.list_tickets(user_id)
        if not tickets:
            return []

        workers = max(1, min(len(tickets), settings.bingo_config.refresh_max_workers))
        results: list[TicketRefreshResult] = []

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {ticket.id: executor.submit(self.refresh_ticket, ticket.id) for ticket in tickets}
            for ticket_id, future in futures.items():
                try:
                    results.append(future.result())
                except Exception as exc:
                    logger.error("bingo_refresh_failed", ticket_id=ticket_id, error=str(exc))
                    results.append(TicketRefreshResult(ticket_id=ticket_id, status="failed", reason=str(exc)))

        logger.info(
            "bingo_refresh_complete",
            user_id=user_id,
            updated=sum(1 for r in results if r.status == "updated"),
            skipped=sum(1 for r in results if r.status == "skipped"),
            failed=sum(1 for r in results if r.status == "failed"),
        )
        return results
