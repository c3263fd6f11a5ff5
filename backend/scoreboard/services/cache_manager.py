import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from scoreboard.config import settings
from scoreboard.schemas.teams import Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    teams: tuple[Team, ...]
    fetched_at: float


class TeamRosterCache:
    """In-memory roster cache keyed by league.

    Entries are replaced wholesale and never expire out of the cache: a stale
    entry stays readable so callers can fall back to it when a refresh fails.
    """

    def __init__(self, ttl_seconds: int | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.teams_cache_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, league_id: str) -> tuple[list[Team], float] | None:
        """Return (teams, age in seconds) for a league, or None if never cached."""
        entry = self._entries.get(league_id)
        if entry is None:
            return None
        return list(entry.teams), self._clock() - entry.fetched_at

    def is_fresh(self, league_id: str) -> bool:
        """Check whether the cached roster for `league_id` is still within its TTL."""
        cached = self.get(league_id)
        if cached is None:
            logger.debug("Cache miss for '%s'", league_id)
            return False
        _, age = cached
        fresh = age < self.ttl_seconds
        if fresh:
            logger.debug("Cache hit for '%s' (age=%.0fs, ttl=%ds)", league_id, age, self.ttl_seconds)
        else:
            logger.debug("Cache stale for '%s' (age=%.0fs, ttl=%ds)", league_id, age, self.ttl_seconds)
        return fresh

    def stale_leagues(self, league_ids: list[str]) -> list[str]:
        return [league_id for league_id in league_ids if not self.is_fresh(league_id)]

    def refresh(self, league_id: str, teams: list[Team]) -> None:
        """Replace the cached roster for `league_id` and stamp it as fetched now."""
        self._entries[league_id] = CacheEntry(teams=tuple(teams), fetched_at=self._clock())
        logger.debug("Refreshed roster cache for '%s' (%d teams)", league_id, len(teams))

    def teams(self, league_id: str) -> list[Team]:
        """Cached roster for `league_id` regardless of age; [] if never cached."""
        cached = self.get(league_id)
        return cached[0] if cached else []

    def clear(self) -> None:
        self._entries.clear()


_cache_instance: TeamRosterCache | None = None


def get_roster_cache() -> TeamRosterCache:
    """Singleton accessor for the process-wide TeamRosterCache."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = TeamRosterCache()
    return _cache_instance
