from pydantic import BaseModel, ConfigDict

from scoreboard.schemas.games import Game
from scoreboard.schemas.teams import Team


class SeasonInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: int = 0
    season: int
    season_type: str = "Regular Season"

    @property
    def label(self) -> str:
        return f"{self.season} {self.season_type}"


class League(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sport: str
    teams: tuple[Team, ...] = ()
    games: tuple[Game, ...] = ()
    season: str | None = None
    current_week: int | None = None
    is_favorite: bool = False


class ScoreboardData(BaseModel):
    model_config = ConfigDict(frozen=True)

    leagues: tuple[League, ...] = ()
    last_updated: str


class TeamDetailResponse(BaseModel):
    internal_id: str
    league_id: str
    team: Team
    games: list[Game]
