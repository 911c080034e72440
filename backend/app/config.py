"""Application configuration using Pydantic Settings."""

from datetime import timedelta, timezone, tzinfo
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Resolve config: prefer system config (installed), fall back to repo .env (dev)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_SYSTEM_CONF = Path("/etc/weather-lookup/weather-lookup.conf")
_ENV_FILE = _SYSTEM_CONF if _SYSTEM_CONF.exists() else _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # OpenWeatherMap
    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    # Display strings and forecast summaries assume Celsius and m/s
    units: Literal["metric"] = "metric"
    request_timeout: float = 10.0

    # Forecast cache lifetime, 0 disables
    cache_ttl_sec: int = 600

    # IANA zone used to bucket forecast days. Empty = the location's own
    # UTC offset as reported by the API.
    forecast_timezone: str = ""

    @field_validator("forecast_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"unknown time zone: {value!r}") from e
        return value

    # Client preferences (read-only, served by /api/config)
    theme: str = "system"  # light, dark, or system
    onboarding_complete: bool = False

    # Server
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "WXLOOKUP_", "env_file": str(_ENV_FILE)}


settings = Settings()


def resolve_timezone(utc_offset_seconds: int) -> tzinfo:
    """Zone used to bucket forecast days and format local times.

    The configured IANA zone wins; otherwise the location's own offset as
    reported by OpenWeatherMap.
    """
    if settings.forecast_timezone:
        return ZoneInfo(settings.forecast_timezone)
    return timezone(timedelta(seconds=utc_offset_seconds))
