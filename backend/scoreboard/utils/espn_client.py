import logging
from typing import Any

import httpx

from scoreboard.config import settings
from scoreboard.utils.league_config import get_league_config

logger = logging.getLogger(__name__)


class ESPNClient:
    """Async client for the ESPN site API (scoreboards, rosters, team detail).

    Pass ``http_client`` to reuse a caller-owned transport (tests, request-scoped
    clients); otherwise the client creates and owns its own.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = (base_url or settings.espn_base_url).rstrip("/")
        self._timeout = httpx.Timeout(timeout if timeout is not None else settings.request_timeout)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self._timeout)

    async def _request(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = await self._client.get(url, params=params, timeout=self._timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object from {url}")
        return data

    def _league_url(self, league_id: str, resource: str) -> str:
        config = get_league_config(league_id)
        return f"{self._base_url}/{config.espn_path}/{resource}"

    async def get_scoreboard(
        self, league_id: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Fetch the current scoreboard document for a league."""
        return await self._request(self._league_url(league_id, "scoreboard"), params=params)

    async def get_teams(self, league_id: str) -> list[dict[str, Any]]:
        """Fetch the full team list for a league (unwrapped from sports/leagues)."""
        data = await self._request(self._league_url(league_id, "teams"), params={"limit": 500})

        teams = []
        sport = (data.get("sports") or [{}])[0]
        league = (sport.get("leagues") or [{}])[0]
        for entry in league.get("teams") or []:
            # Non-object entries pass through; transform_team rejects them per team
            teams.append(entry.get("team", entry) if isinstance(entry, dict) else entry)
        return teams

    async def get_team_detail(self, league_id: str, team_id: str) -> dict[str, Any]:
        """Fetch one team's detail document (record items, groups, standing)."""
        data = await self._request(self._league_url(league_id, f"teams/{team_id}"))
        team = data.get("team")
        return team if isinstance(team, dict) else {}

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


_client_instance: ESPNClient | None = None


def get_espn_client() -> ESPNClient:
    """Singleton accessor for the shared ESPNClient."""
    global _client_instance
    if _client_instance is None:
        _client_instance = ESPNClient()
    return _client_instance
