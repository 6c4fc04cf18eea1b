"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import WeatherRecord


class WeatherProvider(ABC):
    """Base contract for weather providers used by the acquisition pipeline."""

    @abstractmethod
    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherRecord:
        """Fetch current, hourly and daily weather for a coordinate pair."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release provider resources."""
