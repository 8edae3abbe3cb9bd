"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


def _default_cache_dir() -> Path:
    return Path.home() / ".cache" / "anigrid" / "images"


class Settings(BaseSettings):
    anigrid_env: str = "development"
    anigrid_log_level: str = "info"

    # AniList
    anilist_token: str = ""
    anilist_endpoint: str = "https://graphql.anilist.co"

    # Image downloads
    image_cache_dir: Path = _default_cache_dir()
    http_timeout: float = 30.0

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
