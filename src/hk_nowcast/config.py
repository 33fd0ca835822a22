"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HK_NOWCAST_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # HKO gridded rainfall nowcast (CSV, 2 hours ahead in 30 minute steps)
    rainfall_nowcast_url: str = (
        "https://data.weather.gov.hk/weatherAPI/hko_data/F3/Gridded_rainfall_nowcast.csv"
    )

    # HKO warning summary (JSON)
    weather_warning_url: str = (
        "https://data.weather.gov.hk/weatherAPI/opendata/weather.php?dataType=warnsum&lang=en"
    )

    # HKO latest 1-minute regional temperature (CSV)
    regional_temperature_url: str = (
        "https://data.weather.gov.hk/weatherAPI/hko_data/regional-weather/latest_1min_temperature.csv"
    )

    # HTTP request timeout seconds
    http_timeout: float = 30.0

    # Seconds between playback frames
    autoplay_interval: float = 1.4

    # Seconds between warning carousel rotations
    warning_rotation_interval: float = 5.0

    # Datasets older than this (seconds) are refetched on foreground re-entry
    stale_after: float = 15.0

    @field_validator("http_timeout", "autoplay_interval", "warning_rotation_interval", "stale_after")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"interval must be > 0, got {v}")
        return v


def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
