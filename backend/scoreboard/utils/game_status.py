"""Status and clock normalization.

Maps ESPN's status vocabulary and per-sport clock/period conventions onto
the unified ``GameStatus`` and the display strings shown on a game card.
"""

from dataclasses import dataclass

from scoreboard.schemas.games import GameStatus

# Fine-grained ESPN status names. Anything missing here falls back to the
# coarse state code.
ESPN_STATUS_MAP: dict[str, GameStatus] = {
    "STATUS_SCHEDULED": GameStatus.SCHEDULED,
    "STATUS_IN_PROGRESS": GameStatus.LIVE,
    "STATUS_HALFTIME": GameStatus.LIVE,
    "STATUS_FINAL": GameStatus.FINAL,
    "STATUS_POSTPONED": GameStatus.POSTPONED,
    "STATUS_CANCELLED": GameStatus.CANCELLED,
    "STATUS_DELAYED": GameStatus.POSTPONED,
    # Soccer-specific or alternates
    "STATUS_FULL_TIME": GameStatus.FINAL,
    "STATUS_END": GameStatus.FINAL,
    "STATUS_EXTRA_TIME": GameStatus.LIVE,
    "STATUS_PENALTIES": GameStatus.LIVE,
    "STATUS_END_PERIOD": GameStatus.LIVE,
    "STATUS_END_REGULATION": GameStatus.LIVE,
}

ESPN_STATE_MAP: dict[str, GameStatus] = {
    "pre": GameStatus.SCHEDULED,
    "in": GameStatus.LIVE,
    "post": GameStatus.FINAL,
}

SOCCER_PERIOD_LABELS = {1: "1H", 2: "2H", 3: "ET1", 4: "ET2"}

FINAL_DISPLAY = "Final"


@dataclass(frozen=True)
class LiveDisplay:
    time: str | None = None
    quarter: str | None = None
    period: str | None = None


def normalize_status(status_name: str | None, state: str | None) -> GameStatus:
    """Resolve an ESPN status name, falling back to the pre/in/post state code."""
    if status_name and status_name in ESPN_STATUS_MAP:
        return ESPN_STATUS_MAP[status_name]
    if state and state in ESPN_STATE_MAP:
        return ESPN_STATE_MAP[state]
    return GameStatus.SCHEDULED


def soccer_period_label(period: int) -> str:
    return SOCCER_PERIOD_LABELS.get(period, f"P{period}")


def format_live_display(
    sport: str,
    period: int,
    clock: str | None = None,
    short_detail: str | None = None,
    outs: int | None = None,
) -> LiveDisplay:
    """Build the quarter/period strings for an in-progress game.

    Football shows ``Q{n}`` with the clock underneath, soccer folds the
    half (or extra-time period) and clock into one string, and baseball
    prefers ESPN's own short detail ("Top 5th") with the out count appended.
    """
    if sport == "football":
        return LiveDisplay(quarter=f"Q{period}", period=clock or None)

    if sport == "soccer":
        label = soccer_period_label(period)
        return LiveDisplay(period=f"{label} - {clock}" if clock else label)

    if sport == "baseball":
        base = short_detail or f"Inning {period}"
        if isinstance(outs, int) and not isinstance(outs, bool):
            noun = "Out" if outs == 1 else "Outs"
            return LiveDisplay(period=f"{base} - {outs} {noun}")
        return LiveDisplay(period=base)

    raise ValueError(f"Unsupported sport: {sport}")


def build_display(
    sport: str,
    status: GameStatus,
    period: int,
    clock: str | None = None,
    short_detail: str | None = None,
    outs: int | None = None,
) -> LiveDisplay:
    if status == GameStatus.LIVE:
        return format_live_display(sport, period, clock, short_detail, outs)
    if status == GameStatus.FINAL:
        return LiveDisplay(time=FINAL_DISPLAY)
    # Scheduled games show their date instead.
    return LiveDisplay()
