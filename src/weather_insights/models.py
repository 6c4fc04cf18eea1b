"""Shared typed models passed between resolver, pipeline and presentation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .geo.models import LocationRecord, RawGeocodeResult
from .weather.models import WeatherRecord

LocationSource = Literal["device", "search", "fallback"]


class Coordinates(BaseModel):
    """Immutable latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ResolvedLocation(BaseModel):
    """Coordinates plus an optional pre-fetched geocode candidate."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    geocode_result: RawGeocodeResult | None = None
    source: LocationSource
    notice: str | None = None


class AcquisitionResult(BaseModel):
    """Weather and location detail acquired together for one cycle."""

    model_config = ConfigDict(frozen=True)

    generation: int
    coordinates: Coordinates
    weather: WeatherRecord
    location: LocationRecord
