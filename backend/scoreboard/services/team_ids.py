"""Namespaced team ids.

ESPN reuses numeric team ids across leagues (MLB 17 and NFL 17 are
different teams), so teams are identified internally as
``{league_id}-{espn_id}``.
"""

from collections.abc import Iterable

from scoreboard.schemas.scoreboard import League
from scoreboard.schemas.teams import InternalTeam, InternalTeamRef, Team

SEPARATOR = "-"

# espn_id -> league_id -> internal_id
TranslationTable = dict[str, dict[str, str]]


def internal_team_id(league_id: str, espn_id: str) -> str:
    return f"{league_id}{SEPARATOR}{espn_id}"


def parse_internal_team_id(internal_id: str) -> InternalTeamRef | None:
    """Split an internal id back into league and ESPN id; None if it is not one."""
    parts = internal_id.split(SEPARATOR)
    if len(parts) != 2:
        return None
    league_id, espn_id = parts
    return InternalTeamRef(league_id=league_id, espn_id=espn_id)


def to_internal_team(league_id: str, team: Team) -> InternalTeam:
    return InternalTeam(
        internal_id=internal_team_id(league_id, team.id),
        espn_id=team.id,
        league_id=league_id,
        team=team,
    )


def from_internal_team(internal: InternalTeam) -> Team:
    return internal.team


def build_translation_table(leagues: Iterable[League]) -> TranslationTable:
    """Map every rostered ESPN id to its internal id in each league it appears in."""
    table: TranslationTable = {}
    for league in leagues:
        for team in league.teams:
            table.setdefault(team.id, {})[league.id] = internal_team_id(league.id, team.id)
    return table


def get_internal_team_id(table: TranslationTable, espn_id: str, league_id: str) -> str | None:
    return table.get(espn_id, {}).get(league_id)


def migrate_favorite_team_ids(old_ids: Iterable[str], table: TranslationTable) -> list[str]:
    """Translate pre-namespacing favorite ids (bare ESPN ids) to internal ids.

    An id found in several leagues resolves to the first league it was seen
    in while building the table. Ids missing from every roster are dropped.
    """
    migrated = []
    for espn_id in old_ids:
        leagues = table.get(espn_id)
        if leagues:
            migrated.append(next(iter(leagues.values())))
    return migrated
