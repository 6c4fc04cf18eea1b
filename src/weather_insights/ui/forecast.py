"""Presentation view models derived from a WeatherRecord and LocationRecord."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

from ..formatting import day_progress, format_date, format_day, format_time
from ..geo.models import LocationRecord
from ..weather.models import WeatherCondition, WeatherRecord

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}{suffix}.png"
FORECAST_DAYS = 5
CHART_DAYS = 7
HOURLY_WINDOW = 24
HOURLY_STEP = 3

UNIT_LABELS: dict[str, tuple[str, str]] = {
    "metric": ("°C", "m/s"),
    "imperial": ("°F", "mph"),
    "standard": ("K", "m/s"),
}


def round_half_up(value: float | None) -> int | None:
    if value is None:
        return None
    return math.floor(value + 0.5)


def icon_url(condition: WeatherCondition, *, large: bool = False) -> str | None:
    if not condition.icon:
        return None
    return ICON_URL_TEMPLATE.format(icon=condition.icon, suffix="@2x" if large else "")


def _condition(conditions: list[WeatherCondition]) -> WeatherCondition:
    return conditions[0] if conditions else WeatherCondition()


@dataclass(frozen=True)
class CurrentConditions:
    location_name: str
    date_text: str
    temperature: int | None
    feels_like: int | None
    description: str
    icon: str | None
    wind: str
    humidity: str
    pressure: str
    visibility: str
    sunrise: str
    sunset: str
    local_time: str
    sun_progress: float | None
    temperature_unit: str


@dataclass(frozen=True)
class ForecastDay:
    label: str
    max_temp: int | None
    min_temp: int | None
    description: str
    icon: str | None


@dataclass(frozen=True)
class HourlySlot:
    label: str
    temp: int | None
    description: str
    icon: str | None


@dataclass(frozen=True)
class ForecastChart:
    """Two-series line chart data: daily max and min temperatures."""

    title: str
    labels: list[str] = field(default_factory=list)
    max_temps: list[int | None] = field(default_factory=list)
    min_temps: list[int | None] = field(default_factory=list)


@dataclass(frozen=True)
class LocationInsights:
    country: str
    region: str
    coordinates: str
    timezone: str
    currency: str
    calling_code: str
    flag: str
    population: str


def build_current_conditions(
    weather: WeatherRecord,
    location: LocationRecord,
    *,
    units: str = "metric",
    now: float | None = None,
) -> CurrentConditions:
    temp_unit, wind_unit = UNIT_LABELS.get(units, UNIT_LABELS["metric"])
    current = weather.current
    tz = weather.timezone
    condition = weather.primary_condition()

    progress: float | None = None
    if current.sunrise is not None and current.sunset is not None:
        progress = day_progress(current.dt, current.sunrise, current.sunset)

    visibility = "-"
    if current.visibility is not None:
        visibility = f"{current.visibility / 1000:.1f} km"

    return CurrentConditions(
        location_name=location.name,
        date_text=format_date(current.dt, tz),
        temperature=round_half_up(current.temp),
        feels_like=round_half_up(current.feels_like),
        description=condition.description or "-",
        icon=icon_url(condition, large=True),
        wind=f"{current.wind_speed:g} {wind_unit}" if current.wind_speed is not None else "-",
        humidity=f"{current.humidity:g}%" if current.humidity is not None else "-",
        pressure=f"{current.pressure:g} hPa" if current.pressure is not None else "-",
        visibility=visibility,
        sunrise=format_time(current.sunrise, tz) if current.sunrise is not None else "-",
        sunset=format_time(current.sunset, tz) if current.sunset is not None else "-",
        local_time=format_time(time.time() if now is None else now, tz),
        sun_progress=progress,
        temperature_unit=temp_unit,
    )


def build_forecast_days(weather: WeatherRecord, *, days: int = FORECAST_DAYS) -> list[ForecastDay]:
    """The next `days` days, skipping today."""
    result = []
    for day in weather.daily[1 : days + 1]:
        condition = _condition(day.weather)
        result.append(
            ForecastDay(
                label=format_day(day.dt, weather.timezone),
                max_temp=round_half_up(day.temp.max),
                min_temp=round_half_up(day.temp.min),
                description=condition.description or "-",
                icon=icon_url(condition),
            )
        )
    return result


def build_hourly_slots(
    weather: WeatherRecord,
    *,
    window: int = HOURLY_WINDOW,
    step: int = HOURLY_STEP,
) -> list[HourlySlot]:
    """Every `step`-th hour of the next `window` hours."""
    slots = []
    for hour in weather.hourly[:window:step]:
        condition = _condition(hour.weather)
        slots.append(
            HourlySlot(
                label=format_time(hour.dt, weather.timezone, {"hour": "2-digit"}),
                temp=round_half_up(hour.temp),
                description=condition.description or "-",
                icon=icon_url(condition),
            )
        )
    return slots


def build_forecast_chart(
    weather: WeatherRecord,
    *,
    days: int = CHART_DAYS,
    units: str = "metric",
) -> ForecastChart:
    temp_unit = UNIT_LABELS.get(units, UNIT_LABELS["metric"])[0]
    daily = weather.daily[:days]
    return ForecastChart(
        title=f"Temperature Forecast ({len(daily)} Days, {temp_unit})",
        labels=[format_day(day.dt, weather.timezone) for day in daily],
        max_temps=[round_half_up(day.temp.max) for day in daily],
        min_temps=[round_half_up(day.temp.min) for day in daily],
    )


def build_location_insights(location: LocationRecord) -> LocationInsights:
    currency = location.currency
    if location.currency_symbol:
        currency = f"{currency} {location.currency_symbol}"
    return LocationInsights(
        country=location.country,
        region=location.region,
        coordinates=f"{location.coordinates.latitude}, {location.coordinates.longitude}",
        timezone=f"{location.timezone} ({location.timezone_offset})",
        currency=currency,
        calling_code=f"+{location.calling_code}" if location.calling_code else "-",
        flag=location.flag,
        population=location.population,
    )
