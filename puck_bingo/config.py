"""
Typed settings for the puck bingo engine.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. A local .env file at the repository root
is honoured for development.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class NHLApiConfig(BaseModel):
    base_url: str = Field(default="https://api-web.nhle.com/v1")
    request_timeout_seconds: int = 10
    user_agent: str = "puck-bingo/1.0"


class BingoConfig(BaseModel):
    # Generation gives up after target_count * multiplier attempts
    generation_attempt_multiplier: int = 5
    refresh_max_workers: int = 4
    upcoming_games_limit: int = 20
    game_status_cache_ttl_seconds: float = 30.0


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Nested config blocks carry defaults that match the public NHL API;
    NHL_API_BASE_URL overrides the base URL without double-underscore syntax.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow"
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    nhl_config: NHLApiConfig = Field(default_factory=NHLApiConfig)
    bingo_config: BingoConfig = Field(default_factory=BingoConfig)
    nhl_api_base_url_override: str | None = Field(None, alias="NHL_API_BASE_URL")

    @model_validator(mode="after")
    def apply_nhl_overrides(self) -> Settings:
        if self.nhl_api_base_url_override:
            self.nhl_config.base_url = self.nhl_api_base_url_override.rstrip("/")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()
