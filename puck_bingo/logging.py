"""
structlog setup for the puck bingo engine.

Every event is one JSON line on stdout, named in snake_case
(``nhl_boxscore_fetch``, ``bingo_refresh_complete``) and tagged with the
service and environment.
"""

from __future__ import annotations

import logging

import structlog

from .config import settings

SERVICE_NAME = "puck-bingo"


def resolve_log_level(level: str | None, environment: str) -> int:
    """LOG_LEVEL wins; otherwise DEBUG everywhere except production.

    Unknown level names fall back to INFO.
    """
    if not level:
        return logging.INFO if environment.lower() == "production" else logging.DEBUG
    return logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)


def configure_logging(level: int | None = None) -> None:
    if level is None:
        level = resolve_log_level(settings.log_level, settings.environment)

    logging.basicConfig(level=level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


configure_logging()

logger = structlog.get_logger(SERVICE_NAME).bind(
    service=SERVICE_NAME,
    environment=settings.environment,
)
