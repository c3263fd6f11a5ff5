"""Tests for namespaced team ids and favorites migration tables."""

import pytest

from scoreboard.schemas.scoreboard import League
from scoreboard.schemas.teams import InternalTeamRef, Team
from scoreboard.services.team_ids import (
    build_translation_table,
    from_internal_team,
    get_internal_team_id,
    internal_team_id,
    migrate_favorite_team_ids,
    parse_internal_team_id,
    to_internal_team,
)


def _league(league_id: str, *team_ids: str) -> League:
    return League(
        id=league_id,
        name=league_id.upper(),
        sport="Test",
        teams=tuple(Team(id=team_id, name=f"Team {team_id}") for team_id in team_ids),
    )


class TestInternalIds:
    def test_internal_id_format(self):
        assert internal_team_id("nfl", "134") == "nfl-134"

    def test_parse(self):
        assert parse_internal_team_id("nfl-134") == InternalTeamRef(league_id="nfl", espn_id="134")

    @pytest.mark.parametrize("value", ["malformed", "nfl-1-2", ""])
    def test_parse_rejects_non_internal_ids(self, value):
        assert parse_internal_team_id(value) is None

    @pytest.mark.parametrize("league_id,espn_id", [("nfl", "17"), ("mlb", "17"), ("epl", "359")])
    def test_round_trip(self, league_id, espn_id):
        ref = parse_internal_team_id(internal_team_id(league_id, espn_id))
        assert (ref.league_id, ref.espn_id) == (league_id, espn_id)

    def test_wrap_and_unwrap_team(self):
        team = Team(id="17", name="Reds")
        internal = to_internal_team("mlb", team)
        assert internal.internal_id == "mlb-17"
        assert internal.espn_id == "17"
        assert from_internal_team(internal) is team


class TestTranslationTable:
    def test_covers_every_team_in_every_league(self):
        table = build_translation_table([_league("nfl", "1", "17"), _league("mlb", "17", "30")])
        assert table == {
            "1": {"nfl": "nfl-1"},
            "17": {"nfl": "nfl-17", "mlb": "mlb-17"},
            "30": {"mlb": "mlb-30"},
        }

    def test_lookup(self):
        table = build_translation_table([_league("mls", "9")])
        assert get_internal_team_id(table, "9", "mls") == "mls-9"
        assert get_internal_team_id(table, "9", "epl") is None
        assert get_internal_team_id(table, "404", "mls") is None

    def test_migration_picks_first_league_on_collision(self):
        table = build_translation_table([_league("nfl", "17"), _league("mlb", "17")])
        assert migrate_favorite_team_ids(["17"], table) == ["nfl-17"]

    def test_migration_drops_unknown_ids(self):
        table = build_translation_table([_league("epl", "359")])
        assert migrate_favorite_team_ids(["359", "999"], table) == ["epl-359"]
