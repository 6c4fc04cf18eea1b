"""Shared payload builders and in-memory providers for tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from weather_insights.exceptions import (
    GeolocationError,
    LocationFetchError,
    WeatherFetchError,
)
from weather_insights.geo.base import DeviceLocator, Geocoder
from weather_insights.geo.models import RawGeocodeResult
from weather_insights.weather.base import WeatherProvider
from weather_insights.weather.models import WeatherRecord

# 2024-01-15T14:30:00Z, a Monday.
BASE_DT = 1705329000


def make_onecall_payload(
    *,
    base_dt: int = BASE_DT,
    timezone: str = "Europe/Paris",
    hours: int = 48,
    days: int = 8,
) -> dict[str, Any]:
    """Build a One Call style payload with hourly and daily series."""
    condition = {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}
    return {
        "lat": 48.8566,
        "lon": 2.3522,
        "timezone": timezone,
        "timezone_offset": 3600,
        "current": {
            "dt": base_dt,
            "sunrise": base_dt - 6 * 3600,
            "sunset": base_dt + 2 * 3600,
            "temp": 7.6,
            "feels_like": 4.5,
            "pressure": 1021,
            "humidity": 81,
            "visibility": 10000,
            "wind_speed": 4.12,
            "weather": [condition],
        },
        "hourly": [
            {"dt": base_dt + i * 3600, "temp": 7.0 + i * 0.1, "weather": [condition]}
            for i in range(hours)
        ],
        "daily": [
            {
                "dt": base_dt + i * 86400,
                "temp": {"min": 2.5 + i, "max": 9.5 + i},
                "weather": [condition],
            }
            for i in range(days)
        ],
    }


def make_paris_geocode() -> dict[str, Any]:
    return {
        "formatted": "Paris, France",
        "components": {
            "_type": "city",
            "city": "Paris",
            "country": "France",
            "state": "Ile-de-France",
            "country_code": "fr",
        },
        "geometry": {"lat": 48.8566, "lng": 2.3522},
        "annotations": {
            "timezone": {"name": "Europe/Paris", "offset_string": "+0100", "offset_sec": 3600},
            "currency": {"name": "Euro", "symbol": "€", "iso_code": "EUR"},
            "flag": "🇫🇷",
            "callingcode": 33,
        },
    }


def make_new_york_geocode() -> dict[str, Any]:
    return {
        "components": {"city": "New York", "country": "United States", "state": "New York"},
        "geometry": {"lat": 40.7128, "lng": -74.006},
        "annotations": {
            "timezone": {"name": "America/New_York", "offset_string": "-0500"},
            "currency": {"name": "United States Dollar", "symbol": "$"},
            "flag": "🇺🇸",
            "callingcode": 1,
        },
    }


class FakeWeatherProvider(WeatherProvider):
    """Returns a canned payload after `failures` failed calls."""

    def __init__(
        self,
        payload: dict[str, Any] | None = None,
        *,
        failures: int = 0,
        always_fail: bool = False,
    ) -> None:
        self.payload = payload or make_onecall_payload()
        self.failures = failures
        self.always_fail = always_fail
        self.calls: list[tuple[float, float]] = []

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherRecord:
        self.calls.append((latitude, longitude))
        if self.always_fail or self.failures > 0:
            self.failures -= 1
            raise WeatherFetchError("Failed to fetch weather data: 503", status_code=503)
        return WeatherRecord.model_validate(self.payload)

    async def aclose(self) -> None:
        return None


class FakeGeocoder(Geocoder):
    def __init__(
        self,
        *,
        forward_results: list[dict[str, Any]] | None = None,
        reverse_result: dict[str, Any] | None = None,
        reverse_always_fail: bool = False,
        forward_exc: Exception | None = None,
    ) -> None:
        self.forward_results = forward_results or []
        self.reverse_result = reverse_result or make_new_york_geocode()
        self.reverse_always_fail = reverse_always_fail
        self.forward_exc = forward_exc
        self.forward_calls: list[str] = []
        self.reverse_calls: list[tuple[float, float]] = []

    async def forward(self, query: str) -> list[RawGeocodeResult]:
        self.forward_calls.append(query)
        if self.forward_exc is not None:
            raise self.forward_exc
        return [RawGeocodeResult.model_validate(item) for item in self.forward_results]

    async def reverse(self, latitude: float, longitude: float) -> RawGeocodeResult:
        self.reverse_calls.append((latitude, longitude))
        if self.reverse_always_fail:
            raise LocationFetchError("Failed to fetch location details: 401", status_code=401)
        return RawGeocodeResult.model_validate(self.reverse_result)

    async def aclose(self) -> None:
        return None


class FakeLocator(DeviceLocator):
    def __init__(
        self,
        position: tuple[float, float] | None = None,
        *,
        reason: str = "denied",
    ) -> None:
        self.position = position
        self.reason = reason
        self.calls = 0

    async def locate(self) -> tuple[float, float]:
        self.calls += 1
        if self.position is None:
            raise GeolocationError("User denied Geolocation", reason=self.reason)
        return self.position


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("test_weather_insights")
