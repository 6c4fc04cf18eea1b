"""CLI: show current weather, forecast and location insights for a place."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

from rich.console import Console

from .config import Settings, load_settings
from .exceptions import ConfigError
from .geo.base import DeviceLocator
from .geo.device import FixedLocator, IPGeolocator, UnavailableLocator
from .geo.opencage import OpenCageGeocoder
from .log_setup import setup_logger
from .models import Coordinates
from .pipeline import AcquisitionPipeline
from .resolver import CoordinateResolver
from .session import CycleOutcome, InsightsSession, SessionState
from .ui.dashboard import WeatherDashboard
from .weather.openweather import OpenWeatherProvider

POPULAR_SEARCHES = ("London", "New York", "Tokyo", "Paris", "Sydney")


def parse_args() -> argparse.Namespace:
    """Parse weather insights CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Show current weather, forecast and location insights."
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--search", "-s", type=str, default=None, help="Place to search for.")
    target.add_argument(
        "--preset",
        choices=POPULAR_SEARCHES,
        default=None,
        help="Search one of the popular locations.",
    )
    target.add_argument(
        "--current-location",
        action="store_true",
        help="Use the device position (default when no search is given).",
    )
    parser.add_argument("--lat", type=float, default=None, help="Device latitude override.")
    parser.add_argument("--lon", type=float, default=None, help="Device longitude override.")
    parser.add_argument(
        "--map-style",
        choices=["standard", "satellite"],
        default="standard",
        help="Map tile style.",
    )
    return parser.parse_args()


def _validate_cli_input(args: argparse.Namespace) -> None:
    if (args.lat is None) != (args.lon is None):
        raise ValueError("--lat and --lon must be given together.")
    if args.lat is not None and not (-90 <= args.lat <= 90):
        raise ValueError(f"Invalid latitude {args.lat}; expected between -90 and 90.")
    if args.lon is not None and not (-180 <= args.lon <= 180):
        raise ValueError(f"Invalid longitude {args.lon}; expected between -180 and 180.")
    if args.lat is not None and (args.search or args.preset):
        raise ValueError("--lat/--lon apply to the current-location path only.")


@asynccontextmanager
async def build_session(
    settings: Settings,
    logger: logging.Logger,
    *,
    device_position: tuple[float, float] | None = None,
) -> AsyncIterator[InsightsSession]:
    """Wire providers, resolver and pipeline; close every client on exit."""
    async with AsyncExitStack() as stack:
        weather = await stack.enter_async_context(OpenWeatherProvider(settings, logger))
        geocoder = await stack.enter_async_context(OpenCageGeocoder(settings, logger))

        locator: DeviceLocator
        if device_position is not None:
            locator = FixedLocator(*device_position)
        elif settings.geolocation_enabled:
            locator = IPGeolocator(settings, logger)
        else:
            locator = UnavailableLocator()
        stack.push_async_callback(locator.aclose)

        resolver = CoordinateResolver(
            geocoder=geocoder,
            locator=locator,
            fallback=Coordinates(latitude=settings.fallback_lat, longitude=settings.fallback_lon),
            logger=logger,
        )
        pipeline = AcquisitionPipeline(
            weather_provider=weather,
            geocoder=geocoder,
            logger=logger,
            max_attempts=settings.fetch_max_attempts,
        )
        yield InsightsSession(resolver=resolver, pipeline=pipeline, logger=logger)


async def _run(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
) -> CycleOutcome:
    dashboard = WeatherDashboard(console=console, units=settings.weather_units)
    device_position = (args.lat, args.lon) if args.lat is not None else None
    query = args.search if args.search is not None else args.preset

    async with build_session(settings, logger, device_position=device_position) as session:
        session.set_map_style(args.map_style)
        if query is not None:
            dashboard.render_loading(repr(query.strip()))
            outcome = await session.search(query)
        else:
            dashboard.render_loading("your current location")
            outcome = await session.use_current_location()

        for notice in outcome.notices:
            dashboard.notify(notice)
        if outcome.state is SessionState.SUCCESS and outcome.result is not None:
            dashboard.render_result(outcome.result, session.map_session)
        else:
            dashboard.render_error(outcome.message or "Unexpected error.")
        return outcome


def main() -> int:
    """Run one lookup and render the dashboard."""
    args = parse_args()
    logger = setup_logger()
    console = Console()

    try:
        _validate_cli_input(args)
    except ValueError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())

    try:
        outcome = asyncio.run(_run(args, settings, logger, console))
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected weather insights failure: %s", exc)
        return 99
    return 0 if outcome.state is SessionState.SUCCESS else 4


if __name__ == "__main__":
    sys.exit(main())
