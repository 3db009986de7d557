"""Constants for the NHL web API (api-web.nhle.com).

Paths are relative to ``settings.nhl_config.base_url``.
"""

from __future__ import annotations

NHL_SCHEDULE_NOW_PATH = "/schedule/now"
NHL_ROSTER_PATH = "/roster/{team}/current"
NHL_BOXSCORE_PATH = "/gamecenter/{game_id}/boxscore"
NHL_LANDING_PATH = "/gamecenter/{game_id}/landing"

# gameState values grouped by lifecycle
NHL_SCHEDULED_STATES = ("FUT", "PRE")
NHL_LIVE_STATES = ("LIVE", "CRIT")
NHL_FINAL_STATES = ("OFF", "FINAL")
