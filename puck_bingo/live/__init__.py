"""Live NHL data feeds: schedule, rosters, boxscores and game status."""

from .nhl import NHLClient

__all__ = ["NHLClient"]
