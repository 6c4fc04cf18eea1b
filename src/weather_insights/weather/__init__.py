"""Weather provider integrations."""

from .base import WeatherProvider
from .models import (
    CurrentWeather,
    DailyTemperature,
    DailyWeather,
    HourlyWeather,
    WeatherCondition,
    WeatherRecord,
)
from .openweather import OpenWeatherProvider

__all__ = [
    "CurrentWeather",
    "DailyTemperature",
    "DailyWeather",
    "HourlyWeather",
    "OpenWeatherProvider",
    "WeatherCondition",
    "WeatherProvider",
    "WeatherRecord",
]
