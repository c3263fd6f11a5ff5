import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from scoreboard.config import settings
from scoreboard.schemas.games import Game
from scoreboard.schemas.scoreboard import SeasonInfo
from scoreboard.schemas.teams import Team
from scoreboard.services.espn_transforms import (
    MalformedResponseError,
    transform_game,
    transform_season_info,
    transform_team,
    transform_team_detail,
)
from scoreboard.utils.espn_client import ESPNClient, get_espn_client
from scoreboard.utils.league_config import LeagueConfig, get_league_config

logger = logging.getLogger(__name__)

# Errors that mean "this resource is unavailable right now": transport and
# HTTP status failures, and bodies that are not JSON.
FETCH_ERRORS = (httpx.HTTPError, ValueError)


@dataclass(frozen=True)
class Schedule:
    games: list[Game] = field(default_factory=list)
    season_info: SeasonInfo | None = None


class LeagueFetcher:
    """Fetches and normalizes games and rosters for one league at a time.

    The ``fetch_*`` methods never raise: a failed request is logged and
    yields an empty result. The ``load_*`` methods raise on a top-level
    failure so callers that keep a fallback (the roster cache) can tell
    "no teams" from "request failed".
    """

    def __init__(self, client: ESPNClient | None = None, detail_concurrency: int | None = None) -> None:
        self.client = client or get_espn_client()
        self._detail_concurrency = detail_concurrency or settings.team_detail_concurrency

    # -- games ---------------------------------------------------------------

    async def load_schedule(
        self, league_id: str, week: int | None = None, season: int | None = None
    ) -> Schedule:
        config = get_league_config(league_id)
        params: dict[str, Any] = {}
        if config.sport == "football":
            if week:
                params["week"] = week
            if season:
                params["year"] = season

        data = await self.client.get_scoreboard(league_id, params=params or None)
        events = data.get("events") or []
        if not events:
            logger.info("No %s games found in ESPN response", league_id.upper())

        games: list[Game] = []
        for event in events:
            try:
                games.append(transform_game(event, config))
            except MalformedResponseError as exc:
                logger.warning("Skipping malformed %s event: %s", league_id.upper(), exc)

        season_info = None
        if config.sport == "football":
            season_info = transform_season_info(data, fallback_year=datetime.now().year)
        return Schedule(games=games, season_info=season_info)

    async def fetch_schedule(
        self, league_id: str, week: int | None = None, season: int | None = None
    ) -> Schedule:
        try:
            return await self.load_schedule(league_id, week=week, season=season)
        except FETCH_ERRORS as exc:
            logger.warning("Error fetching %s games from ESPN: %s", league_id.upper(), exc)
            return Schedule()

    async def fetch_games(
        self, league_id: str, week: int | None = None, season: int | None = None
    ) -> list[Game]:
        """Fetch a league's current games. Returns [] on any upstream failure.

        ``week`` and ``season`` only apply to the football schedule.
        """
        schedule = await self.fetch_schedule(league_id, week=week, season=season)
        return schedule.games

    async def get_season_info(self) -> SeasonInfo:
        """Current NFL week and season.

        ESPN reports the offseason as season type 4; in that case ask for the
        preseason explicitly so the week number is meaningful.
        """
        fallback_year = datetime.now().year
        try:
            data = await self.client.get_scoreboard("nfl")
            info = transform_season_info(data, fallback_year)
            if info is None or info.season_type == "Off Season":
                data = await self.client.get_scoreboard("nfl", params={"seasontype": 1})
                info = transform_season_info(data, fallback_year) or info
        except FETCH_ERRORS as exc:
            logger.warning("Error fetching NFL season info: %s", exc)
            info = None
        return info or SeasonInfo(week=0, season=fallback_year, season_type="Regular Season")

    # -- teams ---------------------------------------------------------------

    async def load_teams(self, league_id: str) -> list[Team]:
        config = get_league_config(league_id)
        raw_teams = await self.client.get_teams(league_id)

        teams: list[Team] = []
        for raw in raw_teams:
            try:
                teams.append(transform_team(raw))
            except MalformedResponseError as exc:
                logger.warning("Skipping malformed %s team: %s", league_id.upper(), exc)

        # One detail request per team, bounded; gather keeps roster order.
        semaphore = asyncio.Semaphore(self._detail_concurrency)
        detailed = await asyncio.gather(
            *(self._with_detail(config, team, semaphore) for team in teams)
        )
        logger.info("Fetched %d ESPN %s teams", len(detailed), league_id.upper())
        return list(detailed)

    async def fetch_teams(self, league_id: str) -> list[Team]:
        """Fetch a league's roster with per-team stats. Returns [] on failure."""
        try:
            return await self.load_teams(league_id)
        except FETCH_ERRORS as exc:
            logger.warning("Error fetching %s teams from ESPN: %s", league_id.upper(), exc)
            return []

    async def _with_detail(
        self, config: LeagueConfig, team: Team, semaphore: asyncio.Semaphore
    ) -> Team:
        async with semaphore:
            try:
                detail = await self.client.get_team_detail(config.id, team.id)
            except FETCH_ERRORS as exc:
                logger.warning(
                    "Failed to fetch %s team detail for %s: %s", config.id.upper(), team.id, exc
                )
                detail = {}
        return transform_team_detail(config, team, detail)
