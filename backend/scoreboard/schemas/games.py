from enum import Enum

from pydantic import BaseModel, ConfigDict

from scoreboard.schemas.teams import Team


class GameStatus(str, Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINAL = "final"
    POSTPONED = "postponed"
    CANCELLED = "cancelled"


class Game(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    home_team: Team
    away_team: Team
    home_score: int = 0
    away_score: int = 0
    status: GameStatus = GameStatus.SCHEDULED
    time: str | None = None
    quarter: str | None = None
    period: str | None = None
    date: str | None = None
    venue: str | None = None
    league: str | None = None
    url: str | None = None
