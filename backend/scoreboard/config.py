from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    espn_base_url: str = "https://site.api.espn.com/apis/site/v2/sports"
    espn_web_url: str = "https://www.espn.com"
    request_timeout: float = 10.0
    league_timeout: float = 20.0
    aggregate_timeout: float = 30.0
    team_detail_concurrency: int = 8
    teams_cache_ttl: int = 5 * 60
    cors_origins: str = "http://localhost:5173"
    favorites_path: str = "favorites.json"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
