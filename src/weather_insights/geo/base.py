"""Provider-agnostic geocoding and device-position interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import RawGeocodeResult


class Geocoder(ABC):
    """Forward and reverse geocoding used by the resolver and pipeline."""

    @abstractmethod
    async def forward(self, query: str) -> list[RawGeocodeResult]:
        """Resolve free text to candidate places, best match first."""

    @abstractmethod
    async def reverse(self, latitude: float, longitude: float) -> RawGeocodeResult:
        """Resolve a coordinate pair to the best matching place."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release provider resources."""


class DeviceLocator(ABC):
    """Source of the current device position."""

    @abstractmethod
    async def locate(self) -> tuple[float, float]:
        """Return (latitude, longitude) or raise GeolocationError."""

    async def aclose(self) -> None:
        return None
