"""Geocoding, device position and location normalization."""

from .base import DeviceLocator, Geocoder
from .device import FixedLocator, IPGeolocator, UnavailableLocator
from .models import LocationRecord, RawGeocodeResult
from .normalizer import format_coordinate, normalize_location
from .opencage import OpenCageGeocoder

__all__ = [
    "DeviceLocator",
    "FixedLocator",
    "Geocoder",
    "IPGeolocator",
    "LocationRecord",
    "OpenCageGeocoder",
    "RawGeocodeResult",
    "UnavailableLocator",
    "format_coordinate",
    "normalize_location",
]
