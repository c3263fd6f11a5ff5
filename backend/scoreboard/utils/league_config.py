from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueConfig:
    id: str
    name: str
    sport: str  # "football", "soccer", "baseball"
    category: str  # display label for the sport
    espn_path: str
    web_path: str  # canonical game page prefix on espn.com
    has_conferences: bool = False  # soccer: Eastern/Western split by group id


# Ordered: aggregate results are always returned in this order.
LEAGUE_CONFIGS: dict[str, LeagueConfig] = {
    "nfl": LeagueConfig(
        id="nfl",
        name="National Football League",
        sport="football",
        category="Football",
        espn_path="football/nfl",
        web_path="nfl/game",
    ),
    "mls": LeagueConfig(
        id="mls",
        name="Major League Soccer",
        sport="soccer",
        category="Soccer",
        espn_path="soccer/usa.1",
        web_path="soccer/match",
        has_conferences=True,
    ),
    "epl": LeagueConfig(
        id="epl",
        name="English Premier League",
        sport="soccer",
        category="Soccer",
        espn_path="soccer/eng.1",
        web_path="soccer/match",
    ),
    "mlb": LeagueConfig(
        id="mlb",
        name="Major League Baseball",
        sport="baseball",
        category="Baseball",
        espn_path="baseball/mlb",
        web_path="mlb/game",
    ),
}


def get_league_config(league_id: str) -> LeagueConfig:
    """Get configuration for a league. Raises KeyError if league is not configured."""
    config = LEAGUE_CONFIGS.get(league_id.lower())
    if config is None:
        raise KeyError(f"No configuration found for league: {league_id}")
    return config


def get_all_leagues() -> list[str]:
    """Return list of all configured league ids."""
    return list(LEAGUE_CONFIGS.keys())
