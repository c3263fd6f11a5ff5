from fastapi import APIRouter, Depends, HTTPException

from scoreboard.schemas import Game
from scoreboard.services.aggregator import ScoreboardAggregator, get_aggregator
from scoreboard.services.queries import find_game

router = APIRouter(prefix="/api/v1/games", tags=["games"])


@router.get("/{game_id}", response_model=Game)
async def get_game(game_id: str, aggregator: ScoreboardAggregator = Depends(get_aggregator)):
    data = await aggregator.get_games_data()
    game = find_game(data, game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return game
