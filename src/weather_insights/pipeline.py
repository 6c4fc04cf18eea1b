"""Acquisition pipeline: fetch weather and location detail for one coordinate pair."""

from __future__ import annotations

import asyncio
import itertools
import logging

from .exceptions import LocationFetchError, StaleCycleError, WeatherFetchError
from .geo.base import Geocoder
from .geo.models import LocationRecord, RawGeocodeResult
from .geo.normalizer import normalize_location
from .models import AcquisitionResult, Coordinates
from .retry import DEFAULT_MAX_ATTEMPTS, retry_fetch
from .weather.base import WeatherProvider
from .weather.models import WeatherRecord

WEATHER_ERROR_MESSAGE = (
    "Unable to fetch weather data. Please check your API key or try again later."
)
LOCATION_ERROR_MESSAGE = (
    "Unable to fetch location details. Please check your API key or try again later."
)
GENERIC_ERROR_MESSAGE = "Unable to fetch data for this location. Please try again later."


def describe_failure(exc: BaseException) -> str:
    """Map an acquisition failure to the message shown to the user."""
    if isinstance(exc, WeatherFetchError):
        return WEATHER_ERROR_MESSAGE
    if isinstance(exc, LocationFetchError):
        return LOCATION_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


class AcquisitionPipeline:
    """Runs the weather and location branches concurrently for each cycle.

    Every call to `acquire` starts a new generation. A cycle that succeeds or fails
    after a newer one has started raises StaleCycleError instead of returning,
    so callers only ever apply the latest result.
    """

    def __init__(
        self,
        *,
        weather_provider: WeatherProvider,
        geocoder: Geocoder,
        logger: logging.Logger,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self.weather_provider = weather_provider
        self.geocoder = geocoder
        self.logger = logger
        self.max_attempts = max_attempts
        self._generations = itertools.count(1)
        self._latest_generation = 0

    @property
    def latest_generation(self) -> int:
        return self._latest_generation

    def is_current(self, generation: int) -> bool:
        return generation == self._latest_generation

    async def acquire(
        self,
        coordinates: Coordinates,
        geocode_result: RawGeocodeResult | None = None,
    ) -> AcquisitionResult:
        """Fetch weather and location detail; both must succeed."""
        generation = next(self._generations)
        self._latest_generation = generation
        self.logger.info(
            "Acquisition cycle %d started for (%.4f, %.4f) prefetched_geocode=%s",
            generation,
            coordinates.latitude,
            coordinates.longitude,
            geocode_result is not None,
            extra={"generation": generation},
        )

        weather_task = asyncio.ensure_future(
            retry_fetch(
                lambda: self._fetch_weather(coordinates),
                self.max_attempts,
                label="weather fetch",
                logger=self.logger,
            )
        )
        location_task = asyncio.ensure_future(
            retry_fetch(
                lambda: self._fetch_location(coordinates, geocode_result),
                self.max_attempts,
                label="location fetch",
                logger=self.logger,
            )
        )
        try:
            weather, location = await asyncio.gather(weather_task, location_task)
        except BaseException as exc:
            # The surviving branch's result is never used.
            for task in (weather_task, location_task):
                task.cancel()
            await asyncio.gather(weather_task, location_task, return_exceptions=True)
            if isinstance(exc, Exception) and not self.is_current(generation):
                self.logger.warning(
                    "Acquisition cycle %d failed after cycle %d started; ignoring (%s)",
                    generation,
                    self._latest_generation,
                    type(exc).__name__,
                    extra={"generation": generation},
                )
                raise StaleCycleError(generation, self._latest_generation) from exc
            self.logger.error(
                "Acquisition cycle %d failed", generation, extra={"generation": generation}
            )
            raise

        if not self.is_current(generation):
            self.logger.warning(
                "Acquisition cycle %d finished after cycle %d started; discarding",
                generation,
                self._latest_generation,
            )
            raise StaleCycleError(generation, self._latest_generation)

        self.logger.info(
            "Acquisition cycle %d succeeded: %s",
            generation,
            location.name,
            extra={"generation": generation},
        )
        return AcquisitionResult(
            generation=generation,
            coordinates=coordinates,
            weather=weather,
            location=location,
        )

    async def _fetch_weather(self, coordinates: Coordinates) -> WeatherRecord:
        return await self.weather_provider.fetch_weather(
            coordinates.latitude, coordinates.longitude
        )

    async def _fetch_location(
        self,
        coordinates: Coordinates,
        geocode_result: RawGeocodeResult | None,
    ) -> LocationRecord:
        if geocode_result is not None:
            return normalize_location(geocode_result)
        raw = await self.geocoder.reverse(coordinates.latitude, coordinates.longitude)
        return normalize_location(raw)
