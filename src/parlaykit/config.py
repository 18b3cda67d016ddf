"""Environment-driven configuration helpers for parlaykit."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PARLAYKIT_",
        extra="ignore",
    )

    default_leg_count: int = Field(default=4, ge=2, le=6)
    default_risk_tier: str = Field(default="steady", pattern="^(lock|steady|swing)$")
    default_sport: str = Field(default="nba")

    espn_search_url: str = Field(default="https://site.api.espn.com/apis/common/v3/search")
    espn_sport: str = Field(default="basketball")
    espn_league: str = Field(default="nba")
    headshot_timeout_seconds: float = Field(default=5.0, gt=0)
    headshot_retry_attempts: int = Field(default=2, ge=1, le=5)

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
