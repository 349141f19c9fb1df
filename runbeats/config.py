"""Application settings loaded from the environment and .env."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_redirect_uri: str = "http://127.0.0.1:8888/callback"
    spotify_timeout: int = 15  # seconds

    default_genres: list[str] = ["pop", "electronic", "hip-hop"]
    min_popularity: int = 30
    pool_size: int = 50
    genre_min_tracks: int = 20

    log_level: str = "WARNING"

    def has_spotify_credentials(self) -> bool:
        return bool(self.spotify_client_id.strip() and self.spotify_client_secret.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
