"""OpenCage geocoding provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import (
    GeocodingError,
    LocationFetchError,
    LocationNotFoundError,
    ProviderError,
    ProviderPayloadError,
)
from ..http import join_url, request_json
from .base import Geocoder
from .models import RawGeocodeResult

LOCATION_FAILURE_PREFIX = "Failed to fetch location details"
GEOCODE_FAILURE_PREFIX = "Failed to geocode location"


class OpenCageGeocoder(Geocoder):
    """Forward and reverse geocoding against the OpenCage JSON API."""

    provider_name = "opencage"
    geocode_path = "/geocode/v1/json"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    async def __aenter__(self) -> OpenCageGeocoder:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def forward(self, query: str) -> list[RawGeocodeResult]:
        payload = await self._request_json(
            query,
            context="OpenCage forward geocode",
            error_cls=GeocodingError,
            failure_prefix=GEOCODE_FAILURE_PREFIX,
        )
        results = self._parse_results(payload, context="OpenCage forward geocode")
        self.logger.info("Forward geocode %r returned %d candidate(s)", query, len(results))
        return results

    async def reverse(self, latitude: float, longitude: float) -> RawGeocodeResult:
        payload = await self._request_json(
            f"{latitude}+{longitude}",
            context="OpenCage reverse geocode",
            error_cls=LocationFetchError,
            failure_prefix=LOCATION_FAILURE_PREFIX,
        )
        results = self._parse_results(payload, context="OpenCage reverse geocode")
        if not results:
            raise LocationNotFoundError("Location details not found")
        return results[0]

    async def _request_json(
        self,
        query: str,
        *,
        context: str,
        error_cls: type[ProviderError],
        failure_prefix: str,
    ) -> dict[str, Any]:
        return await request_json(
            self._client,
            join_url(self.settings.opencage_base_url, self.geocode_path),
            params={"q": query, "key": self.settings.opencage_api_key},
            context=context,
            error_cls=error_cls,
            failure_prefix=failure_prefix,
            logger=self.logger,
        )

    @staticmethod
    def _parse_results(payload: dict[str, Any], *, context: str) -> list[RawGeocodeResult]:
        raw_results = payload.get("results")
        if raw_results is None:
            return []
        if not isinstance(raw_results, list):
            raise ProviderPayloadError(f"{context} payload 'results' is not a list.")
        try:
            return [
                RawGeocodeResult.model_validate(item)
                for item in raw_results
                if isinstance(item, dict)
            ]
        except ValidationError as exc:
            raise ProviderPayloadError(
                f"{context} returned an unparseable candidate: {exc.error_count()} error(s)."
            ) from exc
