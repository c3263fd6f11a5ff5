from fastapi import APIRouter, Depends

from scoreboard.schemas import ScoreboardData
from scoreboard.services.aggregator import ScoreboardAggregator, get_aggregator

router = APIRouter(prefix="/api/v1/scoreboard", tags=["scoreboard"])


@router.get("", response_model=ScoreboardData)
async def get_scoreboard(aggregator: ScoreboardAggregator = Depends(get_aggregator)):
    return await aggregator.get_scoreboard_data()


@router.get("/games", response_model=ScoreboardData)
async def get_games(aggregator: ScoreboardAggregator = Depends(get_aggregator)):
    return await aggregator.get_games_data()
