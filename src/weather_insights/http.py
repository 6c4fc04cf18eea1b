"""Shared JSON-over-HTTP helper for the async provider clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import ProviderError, ProviderPayloadError
from .redaction import sanitize_for_logging, sanitize_text


async def request_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, Any],
    context: str,
    error_cls: type[ProviderError],
    failure_prefix: str,
    logger: logging.Logger,
) -> dict[str, Any]:
    """GET `url` and return the decoded JSON object.

    Non-2xx statuses and transport failures raise `error_cls` with a message
    starting with `failure_prefix`; undecodable bodies raise ProviderPayloadError.
    """
    logger.debug("%s request %s params=%s", context, url, sanitize_for_logging(params))
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.debug(
            "%s failed (HTTP %d) at %s: %s",
            context, status, sanitize_text(str(exc.request.url)),
            sanitize_text(exc.response.text[:300]),
        )
        raise error_cls(f"{failure_prefix}: {status}", status_code=status) from exc
    except httpx.HTTPError as exc:
        raise error_cls(
            f"{failure_prefix}: {type(exc).__name__}: {sanitize_text(str(exc))}"
        ) from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise ProviderPayloadError(f"{context} returned non-JSON response.") from exc

    if not isinstance(payload, dict):
        raise ProviderPayloadError(
            f"{context} returned unexpected payload type {type(payload).__name__}."
        )
    return payload


def join_url(base: Any, path: str) -> str:
    return f"{str(base).rstrip('/')}/{path.lstrip('/')}"
