"""Typed settings loader for the weather insights application."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_FALLBACK_LAT = 40.7128
DEFAULT_FALLBACK_LON = -74.0060


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    openweather_api_key: str = Field(alias="OPENWEATHER_API_KEY", repr=False)
    opencage_api_key: str = Field(alias="OPENCAGE_API_KEY", repr=False)
    openweather_base_url: AnyUrl = Field(
        default="https://api.openweathermap.org",
        alias="OPENWEATHER_BASE_URL",
    )
    opencage_base_url: AnyUrl = Field(
        default="https://api.opencagedata.com",
        alias="OPENCAGE_BASE_URL",
    )
    weather_units: Literal["metric", "imperial", "standard"] = Field(
        default="metric", alias="WEATHER_UNITS"
    )

    geolocation_enabled: bool = Field(default=True, alias="GEOLOCATION_ENABLED")
    ip_geolocation_url: AnyUrl = Field(
        default="https://ipapi.co/json/",
        alias="IP_GEOLOCATION_URL",
    )
    geolocation_timeout_seconds: float = Field(
        default=5.0, alias="GEOLOCATION_TIMEOUT_SECONDS"
    )

    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")
    fetch_max_attempts: int = Field(default=3, alias="FETCH_MAX_ATTEMPTS")

    fallback_lat: float = Field(default=DEFAULT_FALLBACK_LAT, alias="FALLBACK_LAT")
    fallback_lon: float = Field(default=DEFAULT_FALLBACK_LON, alias="FALLBACK_LON")

    @field_validator("openweather_api_key", "opencage_api_key")
    @classmethod
    def strip_api_key(cls, value: str) -> str:
        """Reject blank API keys early instead of failing every request."""
        stripped = value.strip()
        if not stripped:
            raise ValueError("API keys must not be empty.")
        return stripped

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric bounds that pydantic field types cannot express."""
        if self.http_timeout_seconds <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be > 0.")
        if self.geolocation_timeout_seconds <= 0:
            raise ValueError("GEOLOCATION_TIMEOUT_SECONDS must be > 0.")
        if self.fetch_max_attempts <= 0:
            raise ValueError("FETCH_MAX_ATTEMPTS must be > 0.")
        if not (-90 <= self.fallback_lat <= 90):
            raise ValueError("FALLBACK_LAT must be between -90 and 90.")
        if not (-180 <= self.fallback_lon <= 180):
            raise ValueError("FALLBACK_LON must be between -180 and 180.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "app_env": self.app_env,
            "openweather_base_url": str(self.openweather_base_url),
            "opencage_base_url": str(self.opencage_base_url),
            "weather_units": self.weather_units,
            "geolocation_enabled": self.geolocation_enabled,
            "http_timeout_seconds": self.http_timeout_seconds,
            "fetch_max_attempts": self.fetch_max_attempts,
            "fallback": [self.fallback_lat, self.fallback_lon],
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
