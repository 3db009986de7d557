"""Game lifecycle status, looked up in the schedule week with a landing-page fallback.

Statuses are cached per game for a short TTL; callers polling a game's
status between refreshes should not hit the API every time.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone

import httpx

from ..logging import logger
from ..models import GameStatus
from .nhl_constants import NHL_LANDING_PATH
from .nhl_schedule import NHLScheduleFetcher


class NHLGameStatusFetcher:
    """Resolves a game's status from the schedule week or its landing page."""

    def __init__(
        self,
        client: httpx.Client,
        base_url: str,
        schedule_fetcher: NHLScheduleFetcher,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the status fetcher.

        Args:
            client: HTTP client for API requests
            base_url: API root, e.g. https://api-web.nhle.com/v1
            schedule_fetcher: Source of the current schedule week
            ttl_seconds: How long a resolved status is served from cache
            clock: Monotonic time source, in seconds
        """
        self.client = client
        self.base_url = base_url
        self.schedule_fetcher = schedule_fetcher
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: dict[int, tuple[float, GameStatus]] = {}
        self._cache_lock = threading.Lock()

    def fetch_game_status(self, game_id: int) -> GameStatus | None:
        """Return the game's current status.

        The schedule week is searched first; a game outside it is looked up
        on its landing page. Returns None if the schedule request fails or
        the landing page is unavailable.
        """
        cached = self._cached(game_id)
        if cached is not None:
            logger.debug("nhl_game_status_cache_hit", game_id=game_id)
            return cached

        games = self.schedule_fetcher.fetch_current_schedule()
        if games is None:
            logger.warning("nhl_game_status_schedule_unavailable", game_id=game_id)
            return None

        status = next((game.to_status() for game in games if game.id == game_id), None)
        if status is None:
            logger.info("nhl_game_status_not_in_schedule", game_id=game_id)
            status = self._fetch_from_landing(game_id)
            if status is None:
                return None

        self._store(status)
        logger.info(
            "nhl_game_status_resolved",
            game_id=game_id,
            game_state=status.game_state,
            schedule_state=status.game_schedule_state,
        )
        return status

    def clear_cache(self, game_id: int | None = None) -> None:
        """Drop one game's cached status, or every entry when no id is given."""
        with self._cache_lock:
            if game_id is None:
                self._cache.clear()
            else:
                self._cache.pop(game_id, None)

    def _cached(self, game_id: int) -> GameStatus | None:
        with self._cache_lock:
            entry = self._cache.get(game_id)
            if entry is None:
                return None
            stored_at, status = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._cache[game_id]
                return None
            return status

    def _store(self, status: GameStatus) -> None:
        with self._cache_lock:
            self._cache[status.game_id] = (self._clock(), status)

    def _fetch_from_landing(self, game_id: int) -> GameStatus | None:
        url = self.base_url + NHL_LANDING_PATH.format(game_id=game_id)
        logger.info("nhl_landing_fetch", url=url, game_id=game_id)

        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error("nhl_landing_fetch_error", game_id=game_id, error=str(exc))
            return None

        if response.status_code != 200:
            logger.warning(
                "nhl_landing_fetch_failed",
                game_id=game_id,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            return None

        try:
            payload = response.json()
            if not payload or not isinstance(payload, dict):
                logger.warning("nhl_landing_empty", game_id=game_id)
                return None
            # The landing page omits fields for games far in the future
            return GameStatus.model_validate(
                {
                    "gameId": game_id,
                    "gameState": payload.get("gameState") or "FUT",
                    "gameScheduleState": payload.get("gameScheduleState") or "OK",
                    "startTimeUTC": payload.get("startTimeUTC") or datetime.now(timezone.utc),
                }
            )
        except ValueError as exc:
            logger.warning("nhl_landing_parse_failed", game_id=game_id, error=str(exc))
            return None
