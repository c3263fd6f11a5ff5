import asyncio
import logging
from datetime import datetime
from typing import Awaitable, TypeVar

from scoreboard.config import settings
from scoreboard.schemas.scoreboard import League, ScoreboardData
from scoreboard.schemas.teams import Team
from scoreboard.services.cache_manager import TeamRosterCache, get_roster_cache
from scoreboard.services.league_fetcher import LeagueFetcher, Schedule
from scoreboard.utils.league_config import get_all_leagues, get_league_config

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _timestamp() -> str:
    return datetime.now().strftime("%I:%M:%S %p")


def empty_scoreboard() -> ScoreboardData:
    """All four leagues with no teams or games, stamped now."""
    leagues = []
    for league_id in get_all_leagues():
        config = get_league_config(league_id)
        leagues.append(League(id=config.id, name=config.name, sport=config.category))
    return ScoreboardData(leagues=tuple(leagues), last_updated=_timestamp())


class ScoreboardAggregator:
    """Joins every league's games and rosters into one ScoreboardData snapshot.

    Games are always fetched live. Rosters go through the TeamRosterCache:
    ``get_games_data`` only refetches leagues whose roster is stale, while
    ``get_scoreboard_data`` refetches every roster and overwrites the cache.
    Leagues are always returned in LEAGUE_CONFIGS order. Each league's games
    and roster fetches run under their own ``league_timeout``, so one slow
    league only empties itself; ``timeout`` bounds the whole snapshot.
    """

    def __init__(
        self,
        fetcher: LeagueFetcher | None = None,
        cache: TeamRosterCache | None = None,
        timeout: float | None = None,
        league_timeout: float | None = None,
    ) -> None:
        self.fetcher = fetcher or LeagueFetcher()
        self.cache = cache or get_roster_cache()
        self.timeout = timeout if timeout is not None else settings.aggregate_timeout
        self.league_timeout = (
            league_timeout if league_timeout is not None else settings.league_timeout
        )

    async def get_games_data(self) -> ScoreboardData:
        """Fresh games for every league, paired with cached rosters."""
        try:
            return await asyncio.wait_for(self._games_data(), timeout=self.timeout)
        except Exception:
            logger.exception("Error fetching games data")
            return empty_scoreboard()

    async def get_scoreboard_data(self) -> ScoreboardData:
        """Fresh games and rosters for every league (full page loads)."""
        try:
            return await asyncio.wait_for(self._scoreboard_data(), timeout=self.timeout)
        except Exception:
            logger.exception("Error fetching scoreboard data")
            return empty_scoreboard()

    async def get_teams_data(self) -> dict[str, list[Team]]:
        """Rosters for every league, refetching only the stale ones."""
        league_ids = get_all_leagues()
        stale = self.cache.stale_leagues(league_ids)
        if stale:
            await self._refresh_rosters(stale)
        return {league_id: self.cache.teams(league_id) for league_id in league_ids}

    async def _games_data(self) -> ScoreboardData:
        league_ids = get_all_leagues()
        schedules, teams = await asyncio.gather(
            self._fetch_schedules(league_ids),
            self.get_teams_data(),
        )
        return self._build(league_ids, schedules, teams)

    async def _scoreboard_data(self) -> ScoreboardData:
        league_ids = get_all_leagues()
        schedules, _ = await asyncio.gather(
            self._fetch_schedules(league_ids),
            self._refresh_rosters(league_ids),
        )
        teams = {league_id: self.cache.teams(league_id) for league_id in league_ids}
        return self._build(league_ids, schedules, teams)

    async def _bounded(self, coro: Awaitable[T]) -> T:
        return await asyncio.wait_for(coro, timeout=self.league_timeout)

    async def _fetch_schedules(self, league_ids: list[str]) -> list[Schedule]:
        results = await asyncio.gather(
            *(self._bounded(self.fetcher.fetch_schedule(league_id)) for league_id in league_ids),
            return_exceptions=True,
        )
        schedules = []
        for league_id, result in zip(league_ids, results):
            if isinstance(result, Exception):
                logger.warning("Games fetch failed for %s: %r", league_id.upper(), result)
                result = Schedule()
            schedules.append(result)
        return schedules

    async def _refresh_rosters(self, league_ids: list[str]) -> None:
        """Refetch rosters and write each success to the cache.

        A league whose fetch fails keeps its previous (possibly stale) entry.
        """
        results = await asyncio.gather(
            *(self._bounded(self.fetcher.load_teams(league_id)) for league_id in league_ids),
            return_exceptions=True,
        )
        for league_id, result in zip(league_ids, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Roster fetch failed for %s, serving cached roster: %r",
                    league_id.upper(),
                    result,
                )
                continue
            self.cache.refresh(league_id, result)

    def _build(
        self,
        league_ids: list[str],
        schedules: list[Schedule],
        teams: dict[str, list[Team]],
    ) -> ScoreboardData:
        leagues = []
        for league_id, schedule in zip(league_ids, schedules):
            config = get_league_config(league_id)
            info = schedule.season_info
            leagues.append(
                League(
                    id=config.id,
                    name=config.name,
                    sport=config.category,
                    teams=tuple(teams.get(league_id, [])),
                    games=tuple(schedule.games),
                    season=info.label if info else None,
                    current_week=info.week if info else None,
                )
            )
        return ScoreboardData(leagues=tuple(leagues), last_updated=_timestamp())


_aggregator_instance: ScoreboardAggregator | None = None


def get_aggregator() -> ScoreboardAggregator:
    """Singleton accessor for the ScoreboardAggregator."""
    global _aggregator_instance
    if _aggregator_instance is None:
        _aggregator_instance = ScoreboardAggregator()
    return _aggregator_instance
