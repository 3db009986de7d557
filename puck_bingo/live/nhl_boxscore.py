"""NHL boxscore fetching and parsing.

Box-scores are fetched fresh for every evaluation pass and never cached;
live numbers change between refreshes.
"""

from __future__ import annotations

import httpx

from ..logging import logger
from ..models import Boxscore
from .nhl_constants import NHL_BOXSCORE_PATH
from .nhl_helpers import map_nhl_game_state


class NHLBoxscoreFetcher:
    """Fetches and parses boxscore data from the NHL API."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        """Initialize the boxscore fetcher.

        Args:
            client: HTTP client for API requests
            base_url: API root, e.g. https://api-web.nhle.com/v1
        """
        self.client = client
        self.base_url = base_url

    def fetch_boxscore(self, game_id: int) -> Boxscore | None:
        """Fetch boxscore from NHL API.

        Args:
            game_id: NHL game ID (e.g., 2025020767)

        Returns:
            Boxscore snapshot, or None if the fetch failed or the payload
            could not be parsed
        """
        url = self.base_url + NHL_BOXSCORE_PATH.format(game_id=game_id)
        logger.info("nhl_boxscore_fetch", url=url, game_id=game_id)

        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error("nhl_boxscore_fetch_error", game_id=game_id, error=str(exc))
            return None

        if response.status_code == 404:
            logger.warning("nhl_boxscore_not_found", game_id=game_id, status=404)
            return None

        if response.status_code != 200:
            logger.warning(
                "nhl_boxscore_fetch_failed",
                game_id=game_id,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            return None

        try:
            payload = response.json()
            if not payload:
                logger.warning("nhl_boxscore_empty", game_id=game_id)
                return None
            boxscore = Boxscore.model_validate(payload)
        except ValueError as exc:
            # Covers JSON decode errors and pydantic.ValidationError
            logger.warning("nhl_boxscore_parse_failed", game_id=game_id, error=str(exc))
            return None

        self._log_parsed(boxscore)
        return boxscore

    def _log_parsed(self, boxscore: Boxscore) -> None:
        stats = boxscore.player_by_game_stats
        logger.info(
            "nhl_boxscore_parsed",
            game_id=boxscore.id,
            status=map_nhl_game_state(boxscore.game_state),
            home_score=boxscore.home_team.score,
            away_score=boxscore.away_team.score,
            home_players=len(stats.home_team.skaters) + len(stats.home_team.goalies) if stats else 0,
            away_players=len(stats.away_team.skaters) + len(stats.away_team.goalies) if stats else 0,
        )
