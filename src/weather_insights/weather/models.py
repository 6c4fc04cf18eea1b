"""Typed models for One Call weather responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)


class WeatherCondition(_ProviderModel):
    """One entry of the provider's `weather` condition list."""

    id: int | None = None
    main: str | None = None
    description: str | None = None
    icon: str | None = None


class CurrentWeather(_ProviderModel):
    dt: int
    sunrise: int | None = None
    sunset: int | None = None
    temp: float | None = None
    feels_like: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    visibility: float | None = None
    wind_speed: float | None = None
    weather: list[WeatherCondition] = Field(default_factory=list)


class HourlyWeather(_ProviderModel):
    dt: int
    temp: float | None = None
    weather: list[WeatherCondition] = Field(default_factory=list)


class DailyTemperature(_ProviderModel):
    min: float | None = None
    max: float | None = None


class DailyWeather(_ProviderModel):
    dt: int
    temp: DailyTemperature = Field(default_factory=DailyTemperature)
    weather: list[WeatherCondition] = Field(default_factory=list)


class WeatherRecord(_ProviderModel):
    """Read-only weather snapshot; presentation reads these fields directly."""

    timezone: str | None = None
    timezone_offset: int | None = None
    current: CurrentWeather
    hourly: list[HourlyWeather] = Field(default_factory=list)
    daily: list[DailyWeather] = Field(default_factory=list)

    def primary_condition(self) -> WeatherCondition:
        """Return the first current condition or an empty placeholder."""
        if self.current.weather:
            return self.current.weather[0]
        return WeatherCondition()
