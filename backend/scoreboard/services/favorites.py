import json
import logging
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from scoreboard.config import settings
from scoreboard.schemas.favorites import FavoritePreferences, utc_now_iso
from scoreboard.schemas.scoreboard import League
from scoreboard.schemas.teams import Team
from scoreboard.services.team_ids import (
    SEPARATOR,
    build_translation_table,
    internal_team_id,
    migrate_favorite_team_ids,
)

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"

T = TypeVar("T", Team, League)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStorage:
    """All keys live in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r") as f:
            return json.load(f)

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class FavoritesStore:
    """Favorite teams (by internal id) and leagues, persisted to a key-value store.

    Favorites saved before internal ids existed hold bare ESPN ids; they are
    flagged on load and translated by ``migrate_favorites`` once rosters are
    available.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage
        self.preferences = self._load()

    def _load(self) -> FavoritePreferences:
        try:
            saved = self.storage.get(FAVORITES_KEY)
            if not saved:
                return FavoritePreferences()
            preferences = FavoritePreferences.model_validate_json(saved)
        except (OSError, ValueError, ValidationError):
            logger.exception("Error loading favorites from storage")
            return FavoritePreferences()

        if preferences.teams and SEPARATOR not in preferences.teams[0]:
            preferences.needs_migration = True
        return preferences

    def _save(self) -> None:
        self.preferences.last_updated = utc_now_iso()
        try:
            self.storage.set(FAVORITES_KEY, self.preferences.model_dump_json())
        except OSError:
            logger.exception("Failed to save favorites to storage")

    @property
    def needs_migration(self) -> bool:
        return self.preferences.needs_migration

    def migrate_favorites(self, leagues: list[League]) -> bool:
        """Translate legacy ESPN ids to internal ids. Returns True if anything ran."""
        if not self.preferences.needs_migration:
            return False

        translation = build_translation_table(leagues)
        migrated = migrate_favorite_team_ids(self.preferences.teams, translation)
        logger.info(
            "Migrated %d of %d favorite teams to internal ids",
            len(migrated),
            len(self.preferences.teams),
        )
        self.preferences.teams = migrated
        self.preferences.needs_migration = False
        self._save()
        return True

    def toggle_team(self, internal_id: str) -> bool:
        """Flip a team's favorite flag. Returns the new state."""
        is_favorite = _toggle(self.preferences.teams, internal_id)
        self._save()
        return is_favorite

    def toggle_league(self, league_id: str) -> bool:
        is_favorite = _toggle(self.preferences.leagues, league_id)
        self._save()
        return is_favorite

    def is_team_favorite(self, internal_id: str) -> bool:
        return internal_id in self.preferences.teams

    def is_league_favorite(self, league_id: str) -> bool:
        return league_id in self.preferences.leagues

    def is_team_favorite_by_espn_id(self, espn_id: str, league_id: str) -> bool:
        return internal_team_id(league_id, espn_id) in self.preferences.teams

    def clear_all(self) -> None:
        self.preferences = FavoritePreferences()
        try:
            self.storage.remove(FAVORITES_KEY)
        except OSError:
            logger.exception("Failed to clear favorites storage")


def _toggle(values: list[str], value: str) -> bool:
    if value in values:
        values.remove(value)
        return False
    values.append(value)
    return True


def apply_favorite_status(items: list[T], favorite_ids: list[str]) -> list[T]:
    """Copies of `items` with ``is_favorite`` set from `favorite_ids`."""
    favorites = set(favorite_ids)
    return [item.model_copy(update={"is_favorite": item.id in favorites}) for item in items]


_store_instance: FavoritesStore | None = None


def get_favorites_store() -> FavoritesStore:
    """Singleton accessor for the FavoritesStore kept at ``settings.favorites_path``."""
    global _store_instance
    if _store_instance is None:
        _store_instance = FavoritesStore(JsonFileStorage(settings.favorites_path))
    return _store_instance
