"""End-to-end session tests: user action to displayed outcome."""

from __future__ import annotations

import asyncio
import logging

from weather_insights.exceptions import WeatherFetchError
from weather_insights.models import Coordinates
from weather_insights.pipeline import (
    GENERIC_ERROR_MESSAGE,
    LOCATION_ERROR_MESSAGE,
    WEATHER_ERROR_MESSAGE,
    AcquisitionPipeline,
)
from weather_insights.resolver import (
    EMPTY_QUERY_MESSAGE,
    GEOLOCATION_FAILED_NOTICE,
    CoordinateResolver,
)
from weather_insights.session import SEARCH_FAILED_MESSAGE, InsightsSession, SessionState

from conftest import FakeGeocoder, FakeLocator, FakeWeatherProvider, make_paris_geocode

FALLBACK = Coordinates(latitude=40.7128, longitude=-74.0060)


def _session(
    logger: logging.Logger,
    *,
    weather: FakeWeatherProvider | None = None,
    geocoder: FakeGeocoder | None = None,
    locator: FakeLocator | None = None,
) -> InsightsSession:
    geocoder = geocoder or FakeGeocoder()
    resolver = CoordinateResolver(
        geocoder=geocoder, locator=locator, fallback=FALLBACK, logger=logger
    )
    pipeline = AcquisitionPipeline(
        weather_provider=weather or FakeWeatherProvider(),
        geocoder=geocoder,
        logger=logger,
    )
    return InsightsSession(resolver=resolver, pipeline=pipeline, logger=logger)


def test_paris_search_end_to_end(logger: logging.Logger) -> None:
    weather = FakeWeatherProvider()
    geocoder = FakeGeocoder(forward_results=[make_paris_geocode()])
    session = _session(logger, weather=weather, geocoder=geocoder)

    outcome = asyncio.run(session.search("Paris"))

    assert outcome.state is SessionState.SUCCESS
    assert session.state is SessionState.SUCCESS
    assert outcome.result is not None
    location = outcome.result.location
    assert location.name == "Paris"
    assert location.country == "France"
    assert location.coordinates.latitude == "48.8566"
    assert location.coordinates.longitude == "2.3522"
    assert weather.calls == [(48.8566, 2.3522)]
    # Geocode result was reused, no reverse lookup.
    assert geocoder.reverse_calls == []
    assert session.map_session.marker is not None
    assert session.map_session.marker.label == "Paris"


def test_denied_geolocation_still_acquires_fallback(logger: logging.Logger) -> None:
    weather = FakeWeatherProvider()
    session = _session(logger, weather=weather, locator=FakeLocator(None))

    outcome = asyncio.run(session.use_current_location())

    assert outcome.state is SessionState.SUCCESS
    assert outcome.notices == (GEOLOCATION_FAILED_NOTICE,)
    assert weather.calls == [(40.7128, -74.0060)]
    assert outcome.result is not None
    assert outcome.result.location.name == "New York"


def test_empty_search_reports_validation_message(logger: logging.Logger) -> None:
    weather = FakeWeatherProvider()
    geocoder = FakeGeocoder()
    session = _session(logger, weather=weather, geocoder=geocoder)

    outcome = asyncio.run(session.search("   "))

    assert outcome.state is SessionState.ERROR
    assert outcome.message == EMPTY_QUERY_MESSAGE
    assert geocoder.forward_calls == []
    assert weather.calls == []


def test_unknown_place_is_terminal_for_search(logger: logging.Logger) -> None:
    weather = FakeWeatherProvider()
    session = _session(logger, weather=weather, geocoder=FakeGeocoder(forward_results=[]))

    outcome = asyncio.run(session.search("Atlantis"))

    assert outcome.state is SessionState.ERROR
    assert outcome.message == SEARCH_FAILED_MESSAGE
    assert weather.calls == []


def test_weather_failure_reports_weather_message(logger: logging.Logger) -> None:
    session = _session(
        logger,
        weather=FakeWeatherProvider(always_fail=True),
        locator=FakeLocator((48.8566, 2.3522)),
    )
    outcome = asyncio.run(session.use_current_location())

    assert outcome.state is SessionState.ERROR
    assert outcome.message == WEATHER_ERROR_MESSAGE
    assert outcome.result is None
    assert session.map_session.marker is None


def test_location_failure_reports_location_message(logger: logging.Logger) -> None:
    session = _session(
        logger,
        geocoder=FakeGeocoder(reverse_always_fail=True),
        locator=FakeLocator((48.8566, 2.3522)),
    )
    outcome = asyncio.run(session.use_current_location())
    assert outcome.message == LOCATION_ERROR_MESSAGE


def test_reverse_not_found_reports_generic_message(logger: logging.Logger) -> None:
    class _EmptyReverse(FakeGeocoder):
        async def reverse(self, latitude: float, longitude: float):  # type: ignore[override]
            from weather_insights.exceptions import LocationNotFoundError

            raise LocationNotFoundError("Location details not found")

    session = _session(logger, geocoder=_EmptyReverse(), locator=FakeLocator((0.0, 0.0)))
    outcome = asyncio.run(session.use_current_location())
    assert outcome.message == GENERIC_ERROR_MESSAGE


def test_map_style_survives_new_marker(logger: logging.Logger) -> None:
    session = _session(logger, geocoder=FakeGeocoder(forward_results=[make_paris_geocode()]))
    session.set_map_style("satellite")

    asyncio.run(session.search("Paris"))

    assert session.map_session.tile_layer.style == "satellite"
    assert session.map_session.center == (48.8566, 2.3522)


def test_late_failure_of_superseded_cycle_keeps_newer_success(logger: logging.Logger) -> None:
    release_first = asyncio.Event()

    class _GatedFailingWeather(FakeWeatherProvider):
        async def fetch_weather(self, latitude: float, longitude: float):  # type: ignore[override]
            if latitude == 48.8566:
                await release_first.wait()
                raise WeatherFetchError("Failed to fetch weather data: 500", status_code=500)
            return await super().fetch_weather(latitude, longitude)

    class _SequenceLocator(FakeLocator):
        def __init__(self, positions: list[tuple[float, float]]) -> None:
            super().__init__()
            self.positions = positions

        async def locate(self) -> tuple[float, float]:
            self.calls += 1
            return self.positions.pop(0)

    session = _session(
        logger,
        weather=_GatedFailingWeather(),
        locator=_SequenceLocator([(48.8566, 2.3522), (35.6762, 139.6503)]),
    )

    async def _scenario():
        first = asyncio.ensure_future(session.use_current_location())
        await asyncio.sleep(0)
        second = await session.use_current_location()
        assert session.state is SessionState.SUCCESS
        release_first.set()
        return await first, second

    first_outcome, second_outcome = asyncio.run(_scenario())

    assert first_outcome.stale
    assert first_outcome.message is None
    assert session.state is SessionState.SUCCESS
    assert session.last_outcome is second_outcome
    assert session.map_session.center == (35.6762, 139.6503)
