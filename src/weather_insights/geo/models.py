"""Typed models for geocoder responses and the canonical location record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

UNKNOWN = "Unknown"
POPULATION_NOT_AVAILABLE = "Data not available"


class _ProviderModel(BaseModel):
    """Lenient base for provider payloads: every field optional, extras kept."""

    model_config = ConfigDict(extra="allow", frozen=True)


class GeocodeComponents(_ProviderModel):
    """Free-form place-name fields of a geocoder candidate."""

    city: str | None = None
    town: str | None = None
    village: str | None = None
    county: str | None = None
    state: str | None = None
    province: str | None = None
    region: str | None = None
    country: str | None = None


class GeocodeGeometry(_ProviderModel):
    lat: float | None = None
    lng: float | None = None


class TimezoneAnnotation(_ProviderModel):
    name: str | None = None
    offset_string: str | None = None
    offset_sec: int | None = None


class CurrencyAnnotation(_ProviderModel):
    name: str | None = None
    symbol: str | None = None
    iso_code: str | None = None


class GeocodeAnnotations(_ProviderModel):
    timezone: TimezoneAnnotation | None = None
    currency: CurrencyAnnotation | None = None
    flag: str | None = None
    callingcode: int | str | None = None


class RawGeocodeResult(_ProviderModel):
    """One geocoder candidate as returned by the provider."""

    formatted: str | None = None
    components: GeocodeComponents | None = None
    geometry: GeocodeGeometry | None = None
    annotations: GeocodeAnnotations | None = None


class LocationCoordinates(BaseModel):
    """Display coordinates, already rounded and formatted."""

    model_config = ConfigDict(frozen=True)

    latitude: str
    longitude: str


class LocationRecord(BaseModel):
    """Canonical location detail; every field always carries a display value."""

    model_config = ConfigDict(frozen=True)

    name: str = UNKNOWN
    country: str = UNKNOWN
    region: str = UNKNOWN
    coordinates: LocationCoordinates = LocationCoordinates(latitude=UNKNOWN, longitude=UNKNOWN)
    timezone: str = UNKNOWN
    timezone_offset: str = UNKNOWN
    currency: str = UNKNOWN
    currency_symbol: str = ""
    flag: str = ""
    calling_code: str = ""
    population: str = POPULATION_NOT_AVAILABLE
