"""Exceptions raised by the ticket service."""

from __future__ import annotations


class BingoError(Exception):
    """Base class for errors surfaced to callers of the bingo engine."""


class TicketValidationError(BingoError):
    """A ticket would violate the nine-event / nine-cell grid invariant."""


class TicketNotFoundError(BingoError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket not found: {ticket_id}")
        self.ticket_id = ticket_id
