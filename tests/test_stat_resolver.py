"""Tests for resolving event conditions against boxscores."""

from __future__ import annotations

import pytest

from conftest import AWAY, HOME, make_condition, make_unchecked_condition
from puck_bingo.models import Boxscore, EventCategory
from puck_bingo.services.stat_resolver import resolve_value, strip_subject_prefix

MCDAVID = 8478402
DRAISAITL = 8477934
BOUCHARD = 8480803
HUGHES = 8480800
SKINNER = 8479973
DEMKO = 8478024


class TestStripSubjectPrefix:
    @pytest.mark.parametrize(
        "subject,expected",
        [
            ("goals", "goals"),
            ("player.goals", "goals"),
            ("team.sog", "sog"),
            ("goalie.saves", "saves"),
            ("player.team.goals", "goals"),
        ],
    )
    def test_strip(self, subject, expected):
        assert strip_subject_prefix(subject) == expected


class TestTeamValues:
    def test_home_goals_is_team_score(self, boxscore):
        condition = make_condition("goals", 3, EventCategory.TEAM, team_abbrev=HOME)
        assert resolve_value(boxscore, condition) == 3

    def test_away_sog(self, boxscore):
        condition = make_condition("sog", 30, EventCategory.TEAM, team_abbrev=AWAY)
        assert resolve_value(boxscore, condition) == 27

    def test_penalty_minutes_sum_skaters_only(self, boxscore):
        # 2 + 4 from forwards, 0 from defense; goalie PIM excluded
        condition = make_condition("penaltyMinutes", 4, EventCategory.PENALTY, team_abbrev=HOME)
        assert resolve_value(boxscore, condition) == 6

    @pytest.mark.parametrize("subject", ["pim", "penalties", "team.penaltyMinutes"])
    def test_penalty_aliases(self, boxscore, subject):
        condition = make_condition(subject, 4, EventCategory.TEAM, team_abbrev=AWAY)
        assert resolve_value(boxscore, condition) == 8

    def test_unknown_team_subject_is_unavailable(self, boxscore):
        condition = make_condition("hits", 10, EventCategory.TEAM, team_abbrev=HOME)
        assert resolve_value(boxscore, condition) is None

    def test_missing_team_abbrev_is_unavailable(self, boxscore):
        condition = make_unchecked_condition("goals", 1, EventCategory.TEAM)
        assert resolve_value(boxscore, condition) is None

    def test_unmatched_abbrev_falls_back_to_away_team(self, boxscore):
        condition = make_condition("goals", 1, EventCategory.TEAM, team_abbrev="TOR")
        assert resolve_value(boxscore, condition) == 2

    def test_pregame_boxscore_without_player_stats(self):
        pregame = Boxscore.model_validate(
            {"id": 1, "gameState": "FUT", "homeTeam": {"abbrev": HOME}, "awayTeam": {"abbrev": AWAY}}
        )
        goals = make_condition("goals", 1, EventCategory.TEAM, team_abbrev=HOME)
        pim = make_condition("penaltyMinutes", 1, EventCategory.TEAM, team_abbrev=HOME)
        assert resolve_value(pregame, goals) is None
        assert resolve_value(pregame, pim) is None


class TestSkaterValues:
    @pytest.mark.parametrize(
        "subject,expected",
        [
            ("goals", 1),
            ("assists", 2),
            ("points", 3),
            ("hits", 1),
            ("sog", 5),
            ("blockedShots", 0),
            ("pim", 2),
            ("toi", 21),
            ("player.sog", 5),
        ],
    )
    def test_skater_stat_table(self, boxscore, subject, expected):
        condition = make_condition(subject, 1, player_id=MCDAVID, team_abbrev=HOME)
        assert resolve_value(boxscore, condition) == expected

    def test_defenseman_lookup(self, boxscore):
        condition = make_condition("blockedShots", 2, EventCategory.DEFENSE, player_id=BOUCHARD)
        assert resolve_value(boxscore, condition) == 4

    def test_away_skater_hour_long_toi(self, boxscore):
        condition = make_condition("toi", 20, EventCategory.DEFENSE, player_id=HUGHES)
        assert resolve_value(boxscore, condition) == 62

    def test_zero_value_is_not_unavailable(self, boxscore):
        condition = make_condition("goals", 1, player_id=BOUCHARD)
        assert resolve_value(boxscore, condition) == 0

    def test_unknown_subject_is_unavailable(self, boxscore):
        condition = make_condition("plusMinus", 1, player_id=MCDAVID)
        assert resolve_value(boxscore, condition) is None

    def test_goalie_only_subject_on_skater_is_unavailable(self, boxscore):
        condition = make_condition("saves", 1, player_id=MCDAVID)
        assert resolve_value(boxscore, condition) is None

    def test_unreported_stat_is_unavailable(self, boxscore_payload):
        del boxscore_payload["playerByGameStats"]["homeTeam"]["forwards"][0]["hits"]
        boxscore = Boxscore.model_validate(boxscore_payload)
        condition = make_condition("hits", 1, player_id=MCDAVID)
        assert resolve_value(boxscore, condition) is None

    def test_unreported_pim_counts_as_zero(self, boxscore_payload):
        del boxscore_payload["playerByGameStats"]["homeTeam"]["forwards"][0]["pim"]
        boxscore = Boxscore.model_validate(boxscore_payload)
        condition = make_condition("pim", 1, player_id=MCDAVID)
        assert resolve_value(boxscore, condition) == 0

    @pytest.mark.parametrize("toi", ["", "  ", "abc", "12:xx", "1:2:3:4", None])
    def test_malformed_toi_is_zero(self, boxscore_payload, toi):
        boxscore_payload["playerByGameStats"]["homeTeam"]["forwards"][0]["toi"] = toi
        boxscore = Boxscore.model_validate(boxscore_payload)
        condition = make_condition("toi", 18, player_id=MCDAVID)
        assert resolve_value(boxscore, condition) == 0


class TestGoalieValues:
    def test_saves(self, boxscore):
        condition = make_condition("saves", 20, EventCategory.GOALIE, player_id=SKINNER)
        assert resolve_value(boxscore, condition) == 25

    def test_saves_derived_from_save_shots_against(self, boxscore):
        condition = make_condition("goalie.saves", 20, EventCategory.GOALIE, player_id=DEMKO)
        assert resolve_value(boxscore, condition) == 28

    @pytest.mark.parametrize("subject", ["goalsAgainst", "ga"])
    def test_goals_against(self, boxscore, subject):
        condition = make_condition(subject, 2, EventCategory.GOALIE, player_id=DEMKO)
        assert resolve_value(boxscore, condition) == 3

    def test_goalie_toi(self, boxscore):
        condition = make_condition("toi", 50, EventCategory.GOALIE, player_id=SKINNER)
        assert resolve_value(boxscore, condition) == 59

    def test_skater_subject_on_goalie_is_unavailable(self, boxscore):
        condition = make_condition("goals", 1, EventCategory.GOALIE, player_id=SKINNER)
        assert resolve_value(boxscore, condition) is None


class TestPlayerLookup:
    def test_unknown_player_id_is_unavailable(self, boxscore):
        condition = make_condition("goals", 1, player_id=1)
        assert resolve_value(boxscore, condition) is None

    def test_player_id_wins_over_name(self, boxscore):
        condition = make_condition("goals", 1, player_id=DRAISAITL, player_name="C. McDavid")
        assert resolve_value(boxscore, condition) == 2

    def test_unknown_id_does_not_fall_back_to_name(self, boxscore):
        condition = make_condition("goals", 1, player_id=1, player_name="C. McDavid")
        assert resolve_value(boxscore, condition) is None

    def test_name_lookup_is_case_insensitive(self, boxscore):
        condition = make_condition("assists", 1, player_name="c. mcdavid")
        assert resolve_value(boxscore, condition) == 2

    def test_name_lookup_finds_goalie(self, boxscore):
        condition = make_condition("saves", 20, EventCategory.GOALIE, player_name="T. DEMKO")
        assert resolve_value(boxscore, condition) == 28

    def test_name_must_match_exactly(self, boxscore):
        condition = make_condition("goals", 1, player_name="McDavid")
        assert resolve_value(boxscore, condition) is None

    def test_no_player_reference_is_unavailable(self, boxscore):
        assert resolve_value(boxscore, make_unchecked_condition("goals", 1, EventCategory.FORWARD)) is None
        blank = make_unchecked_condition("goals", 1, EventCategory.FORWARD, player_name="   ")
        assert resolve_value(boxscore, blank) is None

    def test_plain_string_name_is_accepted(self, boxscore_payload):
        boxscore_payload["playerByGameStats"]["awayTeam"]["forwards"][0]["name"] = "Elias Pettersson"
        boxscore = Boxscore.model_validate(boxscore_payload)
        condition = make_condition("hits", 1, player_name="elias pettersson")
        assert resolve_value(boxscore, condition) == 2

    def test_shared_name_resolves_to_away_player(self, boxscore_payload):
        stats = boxscore_payload["playerByGameStats"]
        stats["homeTeam"]["forwards"][0].update(playerId=8478427, name={"default": "Sebastian Aho"}, goals=3)
        stats["awayTeam"]["forwards"][0].update(playerId=8480222, name={"default": "Sebastian Aho"}, goals=0)
        boxscore = Boxscore.model_validate(boxscore_payload)

        assert resolve_value(boxscore, make_condition("goals", 1, player_name="Sebastian Aho")) == 0
        assert resolve_value(boxscore, make_condition("goals", 1, player_id=8478427, player_name="Sebastian Aho")) == 3
