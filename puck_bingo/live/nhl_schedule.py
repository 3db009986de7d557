"""NHL schedule fetching and parsing."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from ..logging import logger
from ..models import ScheduledGame
from .nhl_constants import NHL_SCHEDULE_NOW_PATH


class NHLScheduleFetcher:
    """Fetches the current schedule week."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def fetch_current_schedule(self) -> list[ScheduledGame] | None:
        """Fetch every game in the current schedule week, in API order.

        Returns None if the request fails.
        """
        url = self.base_url + NHL_SCHEDULE_NOW_PATH
        logger.info("nhl_schedule_fetch", url=url)

        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error("nhl_schedule_fetch_error", error=str(exc))
            return None

        if response.status_code != 200:
            logger.warning(
                "nhl_schedule_fetch_failed",
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("nhl_schedule_parse_failed", error=str(exc))
            return None

        games = self._parse_schedule_response(payload or {})
        logger.info("nhl_schedule_parsed", count=len(games))
        return games

    def _parse_schedule_response(self, payload: dict) -> list[ScheduledGame]:
        games: list[ScheduledGame] = []

        for week in payload.get("gameWeek", []):
            for game in week.get("games", []):
                try:
                    games.append(ScheduledGame.model_validate(game))
                except ValidationError as exc:
                    logger.warning(
                        "nhl_schedule_game_invalid",
                        game_id=game.get("id"),
                        date=week.get("date"),
                        error=str(exc),
                    )

        return games
