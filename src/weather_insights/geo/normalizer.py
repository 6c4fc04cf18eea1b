"""Map raw geocoder candidates onto the canonical LocationRecord."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .models import (
    POPULATION_NOT_AVAILABLE,
    UNKNOWN,
    GeocodeAnnotations,
    GeocodeComponents,
    GeocodeGeometry,
    LocationCoordinates,
    LocationRecord,
    RawGeocodeResult,
)

_FOUR_PLACES = Decimal("0.0001")


def format_coordinate(value: float | None) -> str:
    """Round half away from zero to 4 decimals; missing or non-finite is Unknown."""
    if value is None or not math.isfinite(value):
        return UNKNOWN
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # Enough digits for the integer part plus four decimals.
        ctx.prec = max(28, exact.adjusted() + 6)
        return f"{exact.quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP):.4f}"


def _first_present(*values: Any, default: str) -> str:
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return default


def normalize_location(raw: RawGeocodeResult | dict[str, Any]) -> LocationRecord:
    """Build a LocationRecord from a geocoder candidate.

    Missing sub-objects are treated as empty, so this never raises for any
    candidate shape the provider model accepts.
    """
    result = raw if isinstance(raw, RawGeocodeResult) else RawGeocodeResult.model_validate(raw)
    components = result.components or GeocodeComponents()
    geometry = result.geometry or GeocodeGeometry()
    annotations = result.annotations or GeocodeAnnotations()
    timezone = annotations.timezone
    currency = annotations.currency

    return LocationRecord(
        name=_first_present(
            components.city,
            components.town,
            components.village,
            components.county,
            default=UNKNOWN,
        ),
        country=_first_present(components.country, default=UNKNOWN),
        region=_first_present(
            components.state,
            components.province,
            components.region,
            default=UNKNOWN,
        ),
        coordinates=LocationCoordinates(
            latitude=format_coordinate(geometry.lat),
            longitude=format_coordinate(geometry.lng),
        ),
        timezone=_first_present(timezone.name if timezone else None, default=UNKNOWN),
        timezone_offset=_first_present(
            timezone.offset_string if timezone else None, default=UNKNOWN
        ),
        currency=_first_present(currency.name if currency else None, default=UNKNOWN),
        currency_symbol=_first_present(currency.symbol if currency else None, default=""),
        flag=_first_present(annotations.flag, default=""),
        calling_code=_first_present(annotations.callingcode, default=""),
        population=POPULATION_NOT_AVAILABLE,
    )
