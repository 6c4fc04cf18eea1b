"""OpenWeather One Call provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ProviderPayloadError, WeatherFetchError
from ..http import join_url, request_json
from .base import WeatherProvider
from .models import WeatherRecord

WEATHER_FAILURE_PREFIX = "Failed to fetch weather data"


class OpenWeatherProvider(WeatherProvider):
    """Fetches One Call snapshots (metric units, minutely data excluded)."""

    provider_name = "openweather"
    onecall_path = "/data/2.5/onecall"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    async def __aenter__(self) -> OpenWeatherProvider:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherRecord:
        payload = await request_json(
            self._client,
            join_url(self.settings.openweather_base_url, self.onecall_path),
            params={
                "lat": latitude,
                "lon": longitude,
                "exclude": "minutely",
                "units": self.settings.weather_units,
                "appid": self.settings.openweather_api_key,
            },
            context="OpenWeather one call",
            error_cls=WeatherFetchError,
            failure_prefix=WEATHER_FAILURE_PREFIX,
            logger=self.logger,
        )
        try:
            record = WeatherRecord.model_validate(payload)
        except ValidationError as exc:
            raise ProviderPayloadError(
                f"OpenWeather payload did not match the One Call shape: {exc.error_count()} error(s)."
            ) from exc

        self.logger.info(
            "Weather fetched for (%.4f, %.4f): timezone=%s hourly=%d daily=%d",
            latitude, longitude, record.timezone, len(record.hourly), len(record.daily),
        )
        return record
