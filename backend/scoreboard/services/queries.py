from datetime import datetime
from functools import cmp_to_key

from scoreboard.schemas.games import Game
from scoreboard.schemas.scoreboard import League, ScoreboardData
from scoreboard.schemas.teams import Team


def find_league(data: ScoreboardData, league_id: str) -> League | None:
    return next((league for league in data.leagues if league.id == league_id), None)


def find_game(data: ScoreboardData, game_id: str) -> Game | None:
    """First game with this id across all leagues (game ids are only unique per league)."""
    for league in data.leagues:
        for game in league.games:
            if game.id == game_id:
                return game
    return None


def find_team(league: League, team_id: str) -> Team | None:
    return next((team for team in league.teams if team.id == team_id), None)


def filter_games_by_team(games: tuple[Game, ...] | list[Game], team: Team) -> list[Game]:
    """Games involving `team`, matched by id or, failing that, by name."""
    return [
        game
        for game in games
        if team.id in (game.home_team.id, game.away_team.id)
        or team.name in (game.home_team.name, game.away_team.name)
    ]


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _compare_dates(a: Game, b: Game) -> int:
    a_date, b_date = _parse_date(a.date), _parse_date(b.date)
    if a_date is None or b_date is None:
        return 0
    try:
        return (a_date > b_date) - (a_date < b_date)
    except TypeError:
        # naive vs aware
        return 0


def sort_games_by_date(games: tuple[Game, ...] | list[Game]) -> list[Game]:
    """Oldest first. A game without a usable date compares equal to any other."""
    return sorted(games, key=cmp_to_key(_compare_dates))


def get_team_games(league: League, team: Team) -> list[Game]:
    return sort_games_by_date(filter_games_by_team(league.games, team))
