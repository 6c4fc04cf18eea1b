"""Epoch timestamp formatting and sun-position calculation for display."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Any, Literal, TypedDict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .log_setup import get_logger

logger = get_logger("formatting")

# en-US names; display strings must not depend on the process locale.
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class TimeFormatOptions(TypedDict, total=False):
    hour: Literal["2-digit", "numeric"]
    minute: Literal["2-digit"] | None
    hour12: bool


DEFAULT_TIME_OPTIONS: TimeFormatOptions = {"hour": "2-digit", "minute": "2-digit", "hour12": True}


def resolve_timezone(name: str | None) -> tzinfo:
    """Return the named IANA zone, or UTC when it is missing or unknown."""
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; formatting in UTC", name)
        return UTC


def to_local(timestamp: float, timezone: str | None) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=UTC).astimezone(resolve_timezone(timezone))


def format_date(timestamp: float, timezone: str | None) -> str:
    """Long date, e.g. `Monday, January 15, 2024`."""
    local = to_local(timestamp, timezone)
    return f"{_WEEKDAYS[local.weekday()]}, {_MONTHS[local.month - 1]} {local.day}, {local.year}"


def format_day(timestamp: float, timezone: str | None) -> str:
    """Abbreviated weekday, e.g. `Mon`."""
    return _WEEKDAYS[to_local(timestamp, timezone).weekday()][:3]


def format_time(
    timestamp: float,
    timezone: str | None,
    options: TimeFormatOptions | dict[str, Any] | None = None,
) -> str:
    """Hour and minute, e.g. `02:30 PM`; `options` override the defaults."""
    merged: dict[str, Any] = {**DEFAULT_TIME_OPTIONS, **(options or {})}
    local = to_local(timestamp, timezone)

    if merged.get("hour12", True):
        hour = local.hour % 12 or 12
        suffix = " AM" if local.hour < 12 else " PM"
    else:
        hour = local.hour
        suffix = ""
    hour_text = f"{hour:02d}" if merged.get("hour") == "2-digit" else str(hour)

    if merged.get("minute"):
        return f"{hour_text}:{local.minute:02d}{suffix}"
    return f"{hour_text}{suffix}"


def day_progress(current: float, sunrise: float, sunset: float) -> float:
    """Percentage of the daylight interval elapsed at `current`, in [0, 100]."""
    if current < sunrise:
        return 0.0
    if current > sunset:
        return 100.0
    day_length = sunset - sunrise
    if day_length <= 0:
        return 100.0
    percent = (current - sunrise) / day_length * 100
    return min(100.0, max(0.0, percent))
