"""Decide which coordinates a user action resolves to."""

from __future__ import annotations

import logging

from .exceptions import GeolocationError, LocationNotFoundError, QueryValidationError
from .geo.base import DeviceLocator, Geocoder
from .geo.models import RawGeocodeResult
from .models import Coordinates, ResolvedLocation
from .redaction import sanitize_text

GEOLOCATION_FAILED_NOTICE = (
    "Unable to get your location. Please try searching for a location instead."
)
GEOLOCATION_UNSUPPORTED_NOTICE = (
    "Geolocation is not available on this device. Please try searching for a location instead."
)
EMPTY_QUERY_MESSAGE = "Please enter a location to search"


class CoordinateResolver:
    """Produces a ResolvedLocation from the device position or a search query."""

    def __init__(
        self,
        *,
        geocoder: Geocoder,
        locator: DeviceLocator | None,
        fallback: Coordinates,
        logger: logging.Logger,
    ) -> None:
        self.geocoder = geocoder
        self.locator = locator
        self.fallback = fallback
        self.logger = logger

    async def resolve_current_location(self) -> ResolvedLocation:
        """Use the device position, or the fallback coordinates if it is unavailable.

        Never raises for geolocation problems: the failure becomes a notice on
        the returned fallback location.
        """
        if self.locator is None:
            self.logger.warning("No device locator configured; using fallback location")
            return self._fallback(GEOLOCATION_UNSUPPORTED_NOTICE)

        try:
            latitude, longitude = await self.locator.locate()
        except GeolocationError as exc:
            self.logger.warning(
                "Geolocation failed (%s): %s", exc.reason, sanitize_text(str(exc))
            )
            notice = (
                GEOLOCATION_UNSUPPORTED_NOTICE
                if exc.reason == "unsupported"
                else GEOLOCATION_FAILED_NOTICE
            )
            return self._fallback(notice)

        return ResolvedLocation(
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
            source="device",
        )

    async def resolve_search(self, query: str) -> ResolvedLocation:
        """Forward-geocode `query` and keep the first candidate.

        Raises QueryValidationError for blank input before any request is made,
        and LocationNotFoundError when the geocoder has no usable candidate.
        """
        cleaned = query.strip() if query else ""
        if not cleaned:
            raise QueryValidationError(EMPTY_QUERY_MESSAGE)

        candidates = await self.geocoder.forward(cleaned)
        if not candidates:
            raise LocationNotFoundError(f"Location not found: {cleaned!r}")

        best = candidates[0]
        coordinates = self._candidate_coordinates(best)
        if coordinates is None:
            raise LocationNotFoundError(f"Top candidate for {cleaned!r} has no geometry")

        self.logger.info(
            "Search %r resolved to (%.4f, %.4f)",
            cleaned, coordinates.latitude, coordinates.longitude,
        )
        return ResolvedLocation(coordinates=coordinates, geocode_result=best, source="search")

    def _fallback(self, notice: str) -> ResolvedLocation:
        return ResolvedLocation(coordinates=self.fallback, source="fallback", notice=notice)

    @staticmethod
    def _candidate_coordinates(candidate: RawGeocodeResult) -> Coordinates | None:
        geometry = candidate.geometry
        if geometry is None or geometry.lat is None or geometry.lng is None:
            return None
        return Coordinates(latitude=geometry.lat, longitude=geometry.lng)
