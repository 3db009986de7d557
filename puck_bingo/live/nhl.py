"""NHL API client (schedule, rosters, boxscores, game status).

Uses the official NHL API (api-web.nhle.com) for all data.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import httpx

from ..config import settings
from ..logging import logger
from ..models import Boxscore, GameRef, GameStatus, ScheduledGame, TeamRoster
from .nhl_boxscore import NHLBoxscoreFetcher
from .nhl_game_status import NHLGameStatusFetcher
from .nhl_helpers import time_until_start, upcoming_games
from .nhl_roster import NHLRosterFetcher
from .nhl_schedule import NHLScheduleFetcher


class NHLClient:
    """Client for the NHL schedule, roster, boxscore and landing endpoints.

    One ``httpx.Client`` is shared by all fetchers; it is safe to use from
    the worker threads spawned by ``fetch_rosters`` and ticket refreshes.
    """

    def __init__(self, client: httpx.Client | None = None, base_url: str | None = None) -> None:
        config = settings.nhl_config
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.client = client or httpx.Client(
            timeout=config.request_timeout_seconds,
            headers={"User-Agent": config.user_agent},
        )
        self._schedule_fetcher = NHLScheduleFetcher(self.client, self.base_url)
        self._roster_fetcher = NHLRosterFetcher(self.client, self.base_url)
        self._boxscore_fetcher = NHLBoxscoreFetcher(self.client, self.base_url)
        self._status_fetcher = NHLGameStatusFetcher(
            self.client,
            self.base_url,
            self._schedule_fetcher,
            ttl_seconds=settings.bingo_config.game_status_cache_ttl_seconds,
        )

    def __enter__(self) -> NHLClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def fetch_current_schedule(self) -> list[ScheduledGame] | None:
        return self._schedule_fetcher.fetch_current_schedule()

    def fetch_upcoming_games(self, limit: int | None = None) -> list[ScheduledGame]:
        """Games a ticket can still be created for, in schedule order."""
        games = self.fetch_current_schedule()
        if games is None:
            return []
        return upcoming_games(games, limit if limit is not None else settings.bingo_config.upcoming_games_limit)

    def fetch_roster(self, team_abbrev: str) -> TeamRoster | None:
        return self._roster_fetcher.fetch_roster(team_abbrev)

    def fetch_boxscore(self, game_id: int) -> Boxscore | None:
        return self._boxscore_fetcher.fetch_boxscore(game_id)

    def fetch_game_status(self, game_id: int) -> GameStatus | None:
        return self._status_fetcher.fetch_game_status(game_id)

    def clear_game_status_cache(self, game_id: int | None = None) -> None:
        self._status_fetcher.clear_cache(game_id)

    @staticmethod
    def time_until_start(start_time_utc: datetime, now: datetime | None = None) -> timedelta:
        return time_until_start(start_time_utc, now)

    def fetch_rosters(self, game: GameRef) -> dict[str, TeamRoster]:
        """Fetch both teams' rosters concurrently and join them.

        A side whose fetch fails degrades to an empty roster so generation
        can still run on whatever the other side returned.
        """
        rosters: dict[str, TeamRoster] = {}

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = {
                abbrev: executor.submit(self.fetch_roster, abbrev)
                for abbrev in game.team_abbrevs
            }
            for abbrev, future in futures.items():
                try:
                    roster = future.result()
                except Exception as exc:
                    logger.warning("nhl_roster_fetch_crashed", game_id=game.id, team=abbrev, error=str(exc))
                    roster = None

                if roster is None:
                    logger.warning("nhl_roster_degraded_to_empty", game_id=game.id, team=abbrev)
                    roster = TeamRoster.empty(abbrev)
                rosters[abbrev] = roster

        return rosters
