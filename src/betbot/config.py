"""Configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from betbot.models.analysis import Grade


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (BETBOT_*)
    or a local .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BETBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── The Odds API ────────────────────────────────────────────────────────
    odds_api_key: str = Field(default="", description="The Odds API key")
    odds_api_base_url: str = Field(default="https://api.the-odds-api.com/v4")
    odds_api_requests_per_second: float = Field(default=1.0)
    sport: str = Field(default="baseball_mlb", description="Sport key to fetch")
    regions: str = Field(default="us", description="Comma-separated bookmaker regions")
    bookmakers: Optional[str] = Field(default=None, description="Optional comma-separated bookmaker keys")

    # ── Grading ─────────────────────────────────────────────────────────────
    grade_profile: str = Field(default="standard", description="Weight table and grade ladder to use")
    profiles_file: Optional[str] = Field(default=None, description="YAML file with extra grade profiles")
    min_grade: Grade = Field(default=Grade.C_PLUS, description="Lowest grade kept in the final list")
    reasoning_threshold: int = Field(default=75, ge=0, le=100, description="Factor score that earns a reasoning clause")
    random_seed: Optional[int] = Field(default=None, description="Seed for reproducible factor noise")

    # ── Display ─────────────────────────────────────────────────────────────
    timezone: str = Field(default="America/New_York", description="Timezone for game times")

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")

    # ── Output ──────────────────────────────────────────────────────────────
    last_recommendations_file: str = Field(default=".betbot_last_recommendations.json")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone {v!r}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    # ── Helpers ─────────────────────────────────────────────────────────────

    @property
    def odds_api_configured(self) -> bool:
        return bool(self.odds_api_key)

    @property
    def profiles_path(self) -> Optional[Path]:
        return Path(self.profiles_file) if self.profiles_file else None

    @property
    def last_recommendations_path(self) -> Path:
        return Path(self.last_recommendations_file)


def get_settings(**overrides) -> Settings:  # type: ignore
    """Factory with optional overrides."""
    return Settings(**overrides)
