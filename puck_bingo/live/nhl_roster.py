"""NHL roster fetching and parsing."""

from __future__ import annotations

import httpx

from ..logging import logger
from ..models import RosterPlayer, TeamRoster
from ..utils.parsing import parse_int
from .nhl_constants import NHL_ROSTER_PATH
from .nhl_helpers import full_name_from_api


class NHLRosterFetcher:
    """Fetches the current roster of one team."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def fetch_roster(self, team_abbrev: str) -> TeamRoster | None:
        """Fetch a team's current roster split into forwards, defensemen and goalies.

        Returns None if the request fails; callers decide how to degrade.
        """
        url = self.base_url + NHL_ROSTER_PATH.format(team=team_abbrev)
        logger.info("nhl_roster_fetch", url=url, team=team_abbrev)

        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error("nhl_roster_fetch_error", team=team_abbrev, error=str(exc))
            return None

        if response.status_code != 200:
            logger.warning(
                "nhl_roster_fetch_failed",
                team=team_abbrev,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("nhl_roster_parse_failed", team=team_abbrev, error=str(exc))
            return None

        roster = self._parse_roster_response(payload or {}, team_abbrev)
        logger.info(
            "nhl_roster_parsed",
            team=team_abbrev,
            forwards=len(roster.forwards),
            defensemen=len(roster.defensemen),
            goalies=len(roster.goalies),
        )
        return roster

    def _parse_roster_response(self, payload: dict, team_abbrev: str) -> TeamRoster:
        return TeamRoster(
            team_abbrev=team_abbrev,
            forwards=self._parse_players(payload.get("forwards", []), team_abbrev),
            defensemen=self._parse_players(payload.get("defensemen", []), team_abbrev),
            goalies=self._parse_players(payload.get("goalies", []), team_abbrev),
        )

    def _parse_players(self, entries: list[dict], team_abbrev: str) -> list[RosterPlayer]:
        players: list[RosterPlayer] = []
        for player_data in entries:
            player_id = parse_int(player_data.get("id"))
            if player_id is None:
                continue

            full_name = full_name_from_api(player_data)
            if not full_name:
                logger.warning("nhl_roster_player_no_name", team=team_abbrev, player_id=player_id)
                continue

            players.append(RosterPlayer(id=player_id, full_name=full_name))
        return players
