from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRIMARY_COLOR = "#6B7280"
DEFAULT_SECONDARY_COLOR = "#9CA3AF"


class FootballTeamStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    sport: Literal["football"] = "football"
    wins: int = 0
    losses: int = 0
    ties: int = 0
    win_percentage: float = 0.0
    points_for: int = 0
    points_against: int = 0
    point_differential: int = 0
    streak: str | None = None
    standing_summary: str | None = None
    home_record: str | None = None
    road_record: str | None = None
    division_record: str | None = None
    conference_record: str | None = None


class BaseballTeamStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    sport: Literal["baseball"] = "baseball"
    wins: int = 0
    losses: int = 0
    win_percentage: float = 0.0
    runs_for: int = 0
    runs_against: int = 0
    games_back: float = 0.0
    division_games_behind: float = 0.0
    streak: str | None = None
    standing_summary: str | None = None


class SoccerTeamStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    sport: Literal["soccer"] = "soccer"
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    rank: int | None = None
    standing_summary: str | None = None


TeamStats = Annotated[
    FootballTeamStats | BaseballTeamStats | SoccerTeamStats,
    Field(discriminator="sport"),
]


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    city: str = ""
    abbreviation: str = ""
    logo: str | None = None
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    conference: str | None = None
    division: str | None = None
    record: str | None = None
    stats: TeamStats | None = None
    is_favorite: bool = False


class InternalTeam(BaseModel):
    """A team bound to the league it was fetched for.

    ``internal_id`` is unique across leagues; ``espn_id`` is not.
    """

    model_config = ConfigDict(frozen=True)

    internal_id: str
    espn_id: str
    league_id: str
    team: Team


class InternalTeamRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    league_id: str
    espn_id: str
