from scoreboard.schemas.favorites import FavoritePreferences
from scoreboard.schemas.games import Game, GameStatus
from scoreboard.schemas.scoreboard import League, ScoreboardData, SeasonInfo, TeamDetailResponse
from scoreboard.schemas.teams import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    BaseballTeamStats,
    FootballTeamStats,
    InternalTeam,
    InternalTeamRef,
    SoccerTeamStats,
    Team,
    TeamStats,
)

__all__ = [
    "DEFAULT_PRIMARY_COLOR",
    "DEFAULT_SECONDARY_COLOR",
    "BaseballTeamStats",
    "FavoritePreferences",
    "FootballTeamStats",
    "Game",
    "GameStatus",
    "InternalTeam",
    "InternalTeamRef",
    "League",
    "ScoreboardData",
    "SeasonInfo",
    "SoccerTeamStats",
    "Team",
    "TeamDetailResponse",
    "TeamStats",
]
