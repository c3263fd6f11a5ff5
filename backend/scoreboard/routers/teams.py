from fastapi import APIRouter, Depends, HTTPException

from scoreboard.schemas import League, TeamDetailResponse
from scoreboard.services.aggregator import ScoreboardAggregator, get_aggregator
from scoreboard.services.queries import find_league, find_team, get_team_games
from scoreboard.services.team_ids import internal_team_id

router = APIRouter(prefix="/api/v1/leagues", tags=["leagues"])


@router.get("/{league_id}", response_model=League)
async def get_league(league_id: str, aggregator: ScoreboardAggregator = Depends(get_aggregator)):
    data = await aggregator.get_games_data()
    league = find_league(data, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return league


@router.get("/{league_id}/teams/{team_id}", response_model=TeamDetailResponse)
async def get_team(
    league_id: str,
    team_id: str,
    aggregator: ScoreboardAggregator = Depends(get_aggregator),
):
    data = await aggregator.get_games_data()
    league = find_league(data, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")

    team = find_team(league, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")

    return TeamDetailResponse(
        internal_id=internal_team_id(league.id, team.id),
        league_id=league.id,
        team=team,
        games=get_team_games(league, team),
    )
