"""Tests for the favorites store and legacy id migration."""

import json

from scoreboard.config import settings
from scoreboard.schemas.favorites import FavoritePreferences
from scoreboard.schemas.scoreboard import League
from scoreboard.schemas.teams import Team
from scoreboard.services import favorites
from scoreboard.services.favorites import (
    FAVORITES_KEY,
    FavoritesStore,
    JsonFileStorage,
    MemoryStorage,
    apply_favorite_status,
    get_favorites_store,
)


def _stored(teams: list[str], leagues: list[str] | None = None) -> MemoryStorage:
    prefs = FavoritePreferences(teams=teams, leagues=leagues or [])
    return MemoryStorage({FAVORITES_KEY: prefs.model_dump_json()})


def _leagues() -> list[League]:
    return [
        League(id="nfl", name="NFL", sport="Football", teams=(Team(id="17", name="Patriots"),)),
        League(id="mlb", name="MLB", sport="Baseball", teams=(Team(id="17", name="Reds"), Team(id="5", name="Guardians"))),
    ]


class TestToggle:
    def test_toggle_team_on_and_off(self):
        store = FavoritesStore(MemoryStorage())
        assert store.toggle_team("nfl-17") is True
        assert store.is_team_favorite("nfl-17")
        assert store.toggle_team("nfl-17") is False
        assert not store.is_team_favorite("nfl-17")

    def test_toggle_league(self):
        store = FavoritesStore(MemoryStorage())
        store.toggle_league("epl")
        assert store.is_league_favorite("epl")
        assert not store.is_league_favorite("mls")

    def test_lookup_by_espn_id(self):
        store = FavoritesStore(MemoryStorage())
        store.toggle_team("mlb-17")
        assert store.is_team_favorite_by_espn_id("17", "mlb")
        assert not store.is_team_favorite_by_espn_id("17", "nfl")

    def test_mutations_persist(self):
        storage = MemoryStorage()
        FavoritesStore(storage).toggle_team("mls-9")
        assert FavoritesStore(storage).is_team_favorite("mls-9")

    def test_clear_all(self):
        storage = MemoryStorage()
        store = FavoritesStore(storage)
        store.toggle_team("mls-9")
        store.clear_all()
        assert store.preferences.teams == []
        assert storage.get(FAVORITES_KEY) is None


class TestMigration:
    def test_legacy_ids_are_flagged(self):
        assert FavoritesStore(_stored(["17"])).needs_migration

    def test_internal_ids_are_not_flagged(self):
        assert not FavoritesStore(_stored(["nfl-17"])).needs_migration

    def test_migrates_to_first_league(self):
        storage = _stored(["17", "5", "404"])
        store = FavoritesStore(storage)
        assert store.migrate_favorites(_leagues()) is True
        assert store.preferences.teams == ["nfl-17", "mlb-5"]
        assert not store.needs_migration
        assert FavoritesStore(storage).preferences.teams == ["nfl-17", "mlb-5"]

    def test_migration_runs_once(self):
        store = FavoritesStore(_stored(["nfl-17"]))
        assert store.migrate_favorites(_leagues()) is False
        assert store.preferences.teams == ["nfl-17"]

    def test_flag_is_not_persisted(self):
        storage = _stored(["17"])
        FavoritesStore(storage)
        assert "needs_migration" not in json.loads(storage.get(FAVORITES_KEY))


class TestStorage:
    def test_corrupt_storage_falls_back_to_defaults(self):
        store = FavoritesStore(MemoryStorage({FAVORITES_KEY: "{not json"}))
        assert store.preferences.teams == []

    def test_json_file_round_trip(self, tmp_path):
        path = tmp_path / "prefs" / "favorites.json"
        FavoritesStore(JsonFileStorage(path)).toggle_league("mlb")
        assert FavoritesStore(JsonFileStorage(path)).is_league_favorite("mlb")

    def test_json_file_missing(self, tmp_path):
        assert JsonFileStorage(tmp_path / "nope.json").get(FAVORITES_KEY) is None

    def test_shared_store_uses_configured_path(self, tmp_path, monkeypatch):
        path = tmp_path / "shared.json"
        monkeypatch.setattr(settings, "favorites_path", str(path))
        monkeypatch.setattr(favorites, "_store_instance", None)

        store = get_favorites_store()
        assert get_favorites_store() is store
        store.toggle_team("nfl-12")
        assert json.loads(path.read_text())[FAVORITES_KEY]
        assert FavoritesStore(JsonFileStorage(path)).is_team_favorite("nfl-12")


class TestApplyFavoriteStatus:
    def test_marks_copies(self):
        teams = [Team(id="1", name="A"), Team(id="2", name="B")]
        marked = apply_favorite_status(teams, ["2"])
        assert [t.is_favorite for t in marked] == [False, True]
        assert teams[1].is_favorite is False

    def test_leagues(self):
        marked = apply_favorite_status(_leagues(), ["mlb"])
        assert [league.is_favorite for league in marked] == [False, True]
