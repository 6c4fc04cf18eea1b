"""Strip provider API keys and tokens from log lines and error text."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "[REDACTED]"

# OpenWeather takes its key as `appid=`, OpenCage as `key=`.
QUERY_SECRET_NAMES = ("appid", "key", "api_key", "apikey", "token")

_QUERY_SECRET_RE = re.compile(
    r"(?i)([?&](?:" + "|".join(QUERY_SECRET_NAMES) + r")=)[^&#\s]+"
)
_BEARER_RE = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*")
_ASSIGNED_SECRET_RE = re.compile(
    r"(?i)\b(authorization|token|secret|openweather_api_key|opencage_api_key|api[_-]?key)"
    r"\s*[:=]\s*([^\s,;&]+)"
)
_SENSITIVE_FIELD_RE = re.compile(
    r"(?i)^(authorization|token|secret|appid|key|api[_-]?key|\w+_api_key)$"
)


def sanitize_text(text: str) -> str:
    """Redact secrets in URLs, headers and `name=value` fragments."""
    text = _QUERY_SECRET_RE.sub(lambda m: m.group(1) + REDACTED, text)
    text = _BEARER_RE.sub(lambda m: f"{m.group(1)} {REDACTED}", text)
    return _ASSIGNED_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact secrets in request params and other nested values."""
    if isinstance(value, Mapping):
        return {
            key: REDACTED if _SENSITIVE_FIELD_RE.match(str(key)) else sanitize_for_logging(child)
            for key, child in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
