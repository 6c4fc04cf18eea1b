"""Device position sources used by the current-location path."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import GeolocationError
from .base import DeviceLocator


class IPGeolocator(DeviceLocator):
    """Approximate the device position from its public IP address."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = str(settings.ip_geolocation_url)
        self.logger = logger
        self._client = client or httpx.AsyncClient(
            timeout=settings.geolocation_timeout_seconds
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def locate(self) -> tuple[float, float]:
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            raise GeolocationError("Position lookup timed out.", reason="timeout") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            reason = "denied" if status in {401, 403, 429} else "unavailable"
            raise GeolocationError(
                f"Position lookup failed with status {status}.", reason=reason
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise GeolocationError(
                f"Position lookup failed: {type(exc).__name__}.", reason="unavailable"
            ) from exc

        return self._extract_position(payload)

    @staticmethod
    def _extract_position(payload: Any) -> tuple[float, float]:
        if not isinstance(payload, dict):
            raise GeolocationError("Position lookup returned no coordinates.")
        # ipapi.co style first, then ip-api.com style.
        lat = payload.get("latitude", payload.get("lat"))
        lon = payload.get("longitude", payload.get("lon"))
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            raise GeolocationError("Position lookup returned no coordinates.")
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise GeolocationError(f"Position lookup returned invalid coordinates {lat}, {lon}.")
        return float(lat), float(lon)


class FixedLocator(DeviceLocator):
    """Position supplied by the user, e.g. from --lat/--lon."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude

    async def locate(self) -> tuple[float, float]:
        return self.latitude, self.longitude


class UnavailableLocator(DeviceLocator):
    """Stand-in used when geolocation is disabled."""

    async def locate(self) -> tuple[float, float]:
        raise GeolocationError("Geolocation is not supported.", reason="unsupported")
