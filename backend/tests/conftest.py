"""Shared ESPN payload builders and a fake ESPN upstream."""

import asyncio
from collections import Counter
from typing import Any

import httpx
import pytest

from scoreboard.services.cache_manager import TeamRosterCache
from scoreboard.services.league_fetcher import LeagueFetcher
from scoreboard.utils.espn_client import ESPNClient

BASE_URL = "https://espn.test/apis/site/v2/sports"

LEAGUE_PATHS = {
    "nfl": "football/nfl",
    "mls": "soccer/usa.1",
    "epl": "soccer/eng.1",
    "mlb": "baseball/mlb",
}


def make_team(
    team_id: str = "1",
    name: str = "Chiefs",
    display_name: str = "Kansas City Chiefs",
    abbreviation: str = "KC",
    color: str | None = "E31837",
    alternate_color: str | None = "FFB612",
) -> dict[str, Any]:
    team: dict[str, Any] = {
        "id": team_id,
        "name": name,
        "displayName": display_name,
        "abbreviation": abbreviation,
        "logo": f"https://a.espncdn.com/i/teamlogos/{abbreviation.lower()}.png",
    }
    if color is not None:
        team["color"] = color
    if alternate_color is not None:
        team["alternateColor"] = alternate_color
    return team


def make_competitor(
    home_away: str,
    team: dict[str, Any],
    score: str | None = "0",
    record: str | None = None,
) -> dict[str, Any]:
    competitor: dict[str, Any] = {"id": team["id"], "homeAway": home_away, "team": team}
    if score is not None:
        competitor["score"] = score
    if record is not None:
        competitor["records"] = [{"summary": record}]
    return competitor


def make_event(
    event_id: str = "401",
    home: dict[str, Any] | None = None,
    away: dict[str, Any] | None = None,
    status_name: str = "STATUS_SCHEDULED",
    state: str = "pre",
    period: int = 0,
    clock: str | None = None,
    short_detail: str | None = None,
    outs: int | None = None,
    date: str = "2025-10-12T17:00Z",
    venue: str | None = "Arrowhead Stadium",
) -> dict[str, Any]:
    home = home or make_competitor("home", make_team("1", "Chiefs", "Kansas City Chiefs", "KC"), "0")
    away = away or make_competitor("away", make_team("2", "Bills", "Buffalo Bills", "BUF"), "0")
    status: dict[str, Any] = {
        "type": {"name": status_name, "state": state},
        "period": period,
    }
    if clock is not None:
        status["displayClock"] = clock
    if short_detail is not None:
        status["type"]["shortDetail"] = short_detail

    competition: dict[str, Any] = {"competitors": [home, away]}
    if venue is not None:
        competition["venue"] = {"fullName": venue}
    if outs is not None:
        competition["situation"] = {"outs": outs}

    return {"id": event_id, "date": date, "status": status, "competitions": [competition]}


def make_scoreboard(events: list[dict[str, Any]], season: dict[str, Any] | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"events": events}
    if season is not None:
        data["leagues"] = [season]
    return data


def make_roster(teams: list[dict[str, Any]]) -> dict[str, Any]:
    return {"sports": [{"leagues": [{"teams": [{"team": t} for t in teams]}]}]}


def make_stats(**stats: Any) -> list[dict[str, Any]]:
    return [{"name": name, "value": value} for name, value in stats.items()]


def make_detail(
    items: list[dict[str, Any]] | None = None,
    group_id: str | None = None,
    group_name: str | None = None,
    standing_summary: str | None = None,
) -> dict[str, Any]:
    team: dict[str, Any] = {"record": {"items": items or []}}
    if group_id is not None or group_name is not None:
        team["groups"] = {k: v for k, v in (("id", group_id), ("name", group_name)) if v is not None}
    if standing_summary is not None:
        team["standingSummary"] = standing_summary
    return {"team": team}


class FakeESPN:
    """Routes requests by path to canned JSON bodies and counts every call.

    ``routes`` maps a path relative to BASE_URL (e.g. "football/nfl/scoreboard")
    to either a JSON-able body or an int HTTP status to fail with.
    ``route_delays`` maps a path prefix to a delay that replaces ``delay``
    for matching requests.
    """

    def __init__(
        self,
        routes: dict[str, Any] | None = None,
        delay: float = 0.0,
        route_delays: dict[str, float] | None = None,
    ) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.route_delays: dict[str, float] = dict(route_delays or {})
        self.calls: Counter[str] = Counter()
        self.params: dict[str, list[dict[str, str]]] = {}
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.split("/apis/site/v2/sports/", 1)[-1]
        self.calls[path] += 1
        self.params.setdefault(path, []).append(dict(request.url.params))

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = next(
                (d for prefix, d in self.route_delays.items() if path.startswith(prefix)),
                self.delay,
            )
            if delay:
                await asyncio.sleep(delay)
        finally:
            self.in_flight -= 1

        body = self.routes.get(path)
        if body is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(body, int):
            return httpx.Response(body, json={"error": "upstream"})
        return httpx.Response(200, json=body)

    def roster_calls(self) -> int:
        return sum(count for path, count in self.calls.items() if path.endswith("/teams"))


def make_client(fake: FakeESPN) -> ESPNClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
    return ESPNClient(http_client=http_client, base_url=BASE_URL, timeout=5.0)


def make_fetcher(fake: FakeESPN, detail_concurrency: int = 4) -> LeagueFetcher:
    return LeagueFetcher(client=make_client(fake), detail_concurrency=detail_concurrency)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def full_league_routes() -> dict[str, Any]:
    """One game and a two-team roster (with detail) for every league."""
    routes: dict[str, Any] = {}
    for index, (league_id, path) in enumerate(LEAGUE_PATHS.items()):
        home = make_team(f"{index}1", f"{league_id} Home", f"City {league_id} Home", f"H{index}")
        away = make_team(f"{index}2", f"{league_id} Away", f"Town {league_id} Away", f"A{index}")
        routes[f"{path}/scoreboard"] = make_scoreboard(
            [
                make_event(
                    event_id=f"{league_id}-game",
                    home=make_competitor("home", home, "3"),
                    away=make_competitor("away", away, "1"),
                    status_name="STATUS_FINAL",
                    state="post",
                )
            ]
        )
        routes[f"{path}/teams"] = make_roster([home, away])
        for team in (home, away):
            routes[f"{path}/teams/{team['id']}"] = make_detail(
                items=[{"type": "total", "summary": "1-0", "stats": make_stats(wins=1, losses=0)}]
            )
    return routes


@pytest.fixture
def fake_espn() -> FakeESPN:
    return FakeESPN(full_league_routes())


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def roster_cache(clock: FakeClock) -> TeamRosterCache:
    return TeamRosterCache(ttl_seconds=300, clock=clock)
