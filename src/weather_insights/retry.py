"""Bounded immediate retry around a single asynchronous call."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .log_setup import get_logger
from .redaction import sanitize_text

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


async def retry_fetch(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    label: str = "fetch",
    logger: logging.Logger | None = None,
) -> T:
    """Await `operation()` until it succeeds or `max_attempts` calls have failed.

    Retries happen immediately, with no backoff, and every failure kind is
    retried the same way. The last exception is re-raised unchanged.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}.")
    log = logger or get_logger("retry")

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt == max_attempts:
                log.error(
                    "%s failed after %d attempt(s): %s",
                    label, attempt, sanitize_text(str(exc)),
                )
                raise
            log.warning(
                "%s attempt %d/%d failed (%s); retrying",
                label, attempt, max_attempts, type(exc).__name__,
                extra={"attempt": attempt, "status_code": getattr(exc, "status_code", None)},
            )
    raise AssertionError("unreachable")  # pragma: no cover
