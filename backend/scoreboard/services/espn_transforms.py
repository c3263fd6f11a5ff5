from typing import Any

from scoreboard.config import settings
from scoreboard.schemas.games import Game
from scoreboard.schemas.scoreboard import SeasonInfo
from scoreboard.schemas.teams import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    BaseballTeamStats,
    FootballTeamStats,
    SoccerTeamStats,
    Team,
)
from scoreboard.utils.game_status import build_display, normalize_status
from scoreboard.utils.league_config import LeagueConfig


class MalformedResponseError(ValueError):
    """Raised when an ESPN payload is missing a field the model cannot do without."""


# ESPN NFL group id -> (division, conference)
NFL_DIVISIONS: dict[str, tuple[str, str]] = {
    "1": ("NFC East", "NFC"),
    "3": ("NFC West", "NFC"),
    "4": ("AFC East", "AFC"),
    "6": ("AFC West", "AFC"),
    "10": ("NFC North", "NFC"),
    "11": ("NFC South", "NFC"),
    "12": ("AFC North", "AFC"),
    "13": ("AFC South", "AFC"),
}

# Used when ESPN's team detail omits the group name
MLB_DIVISIONS: dict[str, str] = {
    "BAL": "AL East", "BOS": "AL East", "NYY": "AL East", "TB": "AL East", "TOR": "AL East",
    "CHW": "AL Central", "CLE": "AL Central", "DET": "AL Central", "KC": "AL Central",
    "MIN": "AL Central",
    "HOU": "AL West", "LAA": "AL West", "ATH": "AL West", "OAK": "AL West", "SEA": "AL West",
    "TEX": "AL West",
    "ATL": "NL East", "MIA": "NL East", "NYM": "NL East", "PHI": "NL East", "WSH": "NL East",
    "CHC": "NL Central", "CIN": "NL Central", "MIL": "NL Central", "PIT": "NL Central",
    "STL": "NL Central",
    "ARI": "NL West", "COL": "NL West", "LAD": "NL West", "SD": "NL West", "SF": "NL West",
}

MLB_LEAGUES = {"AL": "American League", "NL": "National League"}

SEASON_TYPES = {1: "Preseason", 2: "Regular Season", 3: "Postseason"}


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

def parse_int(value: Any) -> int:
    """Parse a score or stat; missing, empty, or non-numeric values become 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(float(str(value).strip()))
    except (ValueError, TypeError):
        return 0


def parse_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(str(value).strip())
    except (ValueError, TypeError):
        return 0.0


def _obj(value: Any) -> dict[str, Any]:
    """Optional nested object; anything that is not a dict reads as empty."""
    return value if isinstance(value, dict) else {}


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

def _team_logo(raw: dict[str, Any]) -> str | None:
    if raw.get("logo"):
        return raw["logo"]
    logos = raw.get("logos") or []
    if logos and isinstance(logos[0], dict):
        return logos[0].get("href")
    return None


def transform_team(raw: dict[str, Any], team_id: str | None = None, record: str | None = None) -> Team:
    """Map an ESPN team object (scoreboard or roster shape) to a Team.

    The city is whatever is left of ``displayName`` once the short name is
    removed ("Kansas City Chiefs" - "Chiefs" -> "Kansas City").
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Team payload is not an object: {raw!r}")
    name = raw.get("name") or raw.get("shortDisplayName") or ""
    display_name = raw.get("displayName") or name
    resolved_id = team_id or raw.get("id")
    if resolved_id is None:
        raise MalformedResponseError("Team payload has no id")

    return Team(
        id=str(resolved_id),
        name=name,
        city=display_name.replace(name, "").strip() if name else display_name,
        abbreviation=raw.get("abbreviation", ""),
        logo=_team_logo(raw),
        primary_color=_color(raw.get("color"), DEFAULT_PRIMARY_COLOR),
        secondary_color=_color(raw.get("alternateColor"), DEFAULT_SECONDARY_COLOR),
        record=record,
    )


def _color(value: str | None, default: str) -> str:
    if not value:
        return default
    # ESPN returns bare hex ("0B162A")
    return value if value.startswith("#") else f"#{value}"


def _record_items(detail: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Index a team detail's record items by lower-cased type ("total", "home", ...)."""
    items = _obj(detail.get("record")).get("items") or []
    indexed: dict[str, dict[str, Any]] = {}
    for item in items:
        if not isinstance(item, dict):
            continue
        item_type = (item.get("type") or "").lower()
        if item_type and item_type not in indexed:
            indexed[item_type] = item
    return indexed


def _stat_map(item: dict[str, Any] | None) -> dict[str, Any]:
    if not item:
        return {}
    stats = [s for s in item.get("stats") or [] if isinstance(s, dict)]
    return {s.get("name"): s.get("value") for s in stats if s.get("name")}


def _summary(item: dict[str, Any] | None) -> str | None:
    return item.get("summary") if item else None


def _group_id(detail: dict[str, Any]) -> str | None:
    groups = _obj(detail.get("groups"))
    group_id = groups.get("id")
    return str(group_id) if group_id is not None else None


def _win_percentage(stats: dict[str, Any], wins: int, losses: int, ties: int = 0) -> float:
    if stats.get("winPercent") is not None:
        return round(parse_float(stats["winPercent"]), 3)
    played = wins + losses + ties
    if played == 0:
        return 0.0
    return round((wins + 0.5 * ties) / played, 3)


def transform_football_detail(team: Team, detail: dict[str, Any]) -> Team:
    """Merge an NFL team detail payload into a roster Team."""
    items = _record_items(detail)
    total = items.get("total")
    stats = _stat_map(total)

    wins = parse_int(stats.get("wins"))
    losses = parse_int(stats.get("losses"))
    ties = parse_int(stats.get("ties"))
    points_for = parse_int(stats.get("pointsFor"))
    points_against = parse_int(stats.get("pointsAgainst"))

    division, conference = NFL_DIVISIONS.get(_group_id(detail) or "", (None, None))

    return team.model_copy(
        update={
            "division": division,
            "conference": conference,
            "record": _summary(total) or team.record,
            "stats": FootballTeamStats(
                wins=wins,
                losses=losses,
                ties=ties,
                win_percentage=_win_percentage(stats, wins, losses, ties),
                points_for=points_for,
                points_against=points_against,
                point_differential=points_for - points_against,
                streak=_streak(stats.get("streak")),
                standing_summary=detail.get("standingSummary"),
                home_record=_summary(items.get("home")),
                road_record=_summary(items.get("road") or items.get("away")),
                division_record=_summary(items.get("vsdiv")),
                conference_record=_summary(items.get("vsconf")),
            ),
        }
    )


def _streak(value: Any) -> str | None:
    """ESPN encodes streaks as signed counts (+3 = three wins)."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and value[:1] in ("W", "L", "T"):
        return value
    count = parse_int(value)
    if count > 0:
        return f"W{count}"
    if count < 0:
        return f"L{-count}"
    return None


def mlb_division(abbreviation: str, group_name: str | None = None) -> tuple[str | None, str | None]:
    """Return (division, league) for an MLB team."""
    division = group_name or MLB_DIVISIONS.get(abbreviation.upper())
    if not division:
        return None, None
    return division, MLB_LEAGUES.get(division.split(" ")[0])


def transform_baseball_detail(team: Team, detail: dict[str, Any]) -> Team:
    """Merge an MLB team detail payload into a roster Team."""
    total = _record_items(detail).get("total")
    stats = _stat_map(total)

    wins = parse_int(stats.get("wins"))
    losses = parse_int(stats.get("losses"))
    group_name = _obj(detail.get("groups")).get("name")
    division, conference = mlb_division(team.abbreviation, group_name)

    return team.model_copy(
        update={
            "division": division,
            "conference": conference,
            "record": _summary(total) or team.record,
            "stats": BaseballTeamStats(
                wins=wins,
                losses=losses,
                win_percentage=_win_percentage(stats, wins, losses),
                runs_for=parse_int(stats.get("pointsFor")),
                runs_against=parse_int(stats.get("pointsAgainst")),
                games_back=parse_float(stats.get("gamesBehind")),
                division_games_behind=parse_float(
                    stats.get("divisionGamesBehind", stats.get("gamesBehind"))
                ),
                streak=_streak(stats.get("streak")),
                standing_summary=detail.get("standingSummary"),
            ),
        }
    )


def soccer_conference(group_id: str | None) -> str | None:
    if group_id is None:
        return None
    return "Eastern Conference" if group_id == "1" else "Western Conference"


def transform_soccer_detail(team: Team, detail: dict[str, Any], has_conferences: bool = False) -> Team:
    """Merge a soccer team detail payload (MLS/EPL) into a roster Team."""
    total = _record_items(detail).get("total")
    stats = _stat_map(total)

    goals_for = parse_int(stats.get("pointsFor"))
    goals_against = parse_int(stats.get("pointsAgainst"))
    differential = stats.get("pointDifferential")
    rank = stats.get("rank")

    return team.model_copy(
        update={
            "conference": soccer_conference(_group_id(detail)) if has_conferences else None,
            "record": _summary(total) or team.record,
            "stats": SoccerTeamStats(
                games_played=parse_int(stats.get("gamesPlayed")),
                wins=parse_int(stats.get("wins")),
                draws=parse_int(stats.get("ties")),
                losses=parse_int(stats.get("losses")),
                goals_for=goals_for,
                goals_against=goals_against,
                goal_difference=(
                    parse_int(differential) if differential is not None else goals_for - goals_against
                ),
                points=parse_int(stats.get("points")),
                rank=parse_int(rank) if rank is not None else None,
                standing_summary=detail.get("standingSummary"),
            ),
        }
    )


def transform_team_detail(config: LeagueConfig, team: Team, detail: dict[str, Any]) -> Team:
    if config.sport == "football":
        return transform_football_detail(team, detail)
    if config.sport == "baseball":
        return transform_baseball_detail(team, detail)
    return transform_soccer_detail(team, detail, has_conferences=config.has_conferences)


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

def game_url(config: LeagueConfig, game_id: str) -> str:
    return f"{settings.espn_web_url.rstrip('/')}/{config.web_path}/_/gameId/{game_id}"


def _competitor_team(competitor: dict[str, Any]) -> Team:
    if not isinstance(competitor, dict):
        raise MalformedResponseError("Competitor is not an object")
    raw_team = competitor.get("team")
    if not isinstance(raw_team, dict):
        raise MalformedResponseError("Competitor has no team object")
    records = competitor.get("records") or []
    record = records[0].get("summary") if records and isinstance(records[0], dict) else None
    return transform_team(raw_team, team_id=competitor.get("id") or raw_team.get("id"), record=record)


def transform_game(raw: dict[str, Any], config: LeagueConfig) -> Game:
    """Map an ESPN scoreboard event to a Game.

    Raises MalformedResponseError when the event is not an object, has no
    competition, holds a non-object competitor or is missing its home or away
    competitor.
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Event is not an object: {raw!r}")
    game_id = raw.get("id")
    if game_id is None:
        raise MalformedResponseError("Event has no id")

    competitions = raw.get("competitions") or []
    if not competitions or not isinstance(competitions[0], dict):
        raise MalformedResponseError(f"Event {game_id} has no competitions")
    competition = competitions[0]
    competitors = competition.get("competitors") or []
    if not all(isinstance(c, dict) for c in competitors):
        raise MalformedResponseError(f"Event {game_id} has a non-object competitor")

    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if home is None or away is None:
        raise MalformedResponseError(f"Event {game_id} is missing a home or away competitor")

    status_block = _obj(raw.get("status"))
    status_type = _obj(status_block.get("type"))
    status = normalize_status(status_type.get("name"), status_type.get("state"))
    display = build_display(
        config.sport,
        status,
        period=parse_int(status_block.get("period")),
        clock=status_block.get("displayClock"),
        short_detail=status_type.get("shortDetail"),
        outs=_obj(competition.get("situation")).get("outs"),
    )

    return Game(
        id=str(game_id),
        home_team=_competitor_team(home),
        away_team=_competitor_team(away),
        home_score=parse_int(home.get("score")),
        away_score=parse_int(away.get("score")),
        status=status,
        time=display.time,
        quarter=display.quarter,
        period=display.period,
        date=raw.get("date"),
        venue=_obj(competition.get("venue")).get("fullName"),
        league=config.id,
        url=game_url(config, str(game_id)),
    )


def transform_season_info(data: dict[str, Any], fallback_year: int) -> SeasonInfo | None:
    """Parse the ``leagues[0]`` block of a scoreboard response, if present."""
    leagues = data.get("leagues") or []
    if not leagues:
        return None
    league = leagues[0]
    season = league.get("season") or {}
    raw_type = season.get("type")
    if isinstance(raw_type, dict):
        raw_type = raw_type.get("type", raw_type.get("id"))
    season_type = parse_int(raw_type) or 2
    return SeasonInfo(
        week=parse_int((league.get("week") or {}).get("number")),
        season=parse_int(season.get("year")) or fallback_year,
        season_type=SEASON_TYPES.get(season_type, "Off Season"),
    )
