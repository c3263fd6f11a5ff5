from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class FavoritePreferences(BaseModel):
    teams: list[str] = Field(default_factory=list)
    leagues: list[str] = Field(default_factory=list)
    last_updated: str = Field(default_factory=utc_now_iso)
    # Set on load when stored team ids predate the internal id scheme.
    needs_migration: bool = Field(default=False, exclude=True)
