"""Tests for the bounded immediate retry wrapper."""

from __future__ import annotations

import asyncio
import logging

import pytest

from weather_insights.retry import retry_fetch

_logger = logging.getLogger("test_retry")


class _Flaky:
    def __init__(self, failures: int, value: str = "ok") -> None:
        self.failures = failures
        self.value = value
        self.calls = 0
        self.errors: list[Exception] = []

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            exc = RuntimeError(f"boom {self.calls}")
            self.errors.append(exc)
            raise exc
        return self.value


def test_fails_twice_then_succeeds_with_three_attempts() -> None:
    operation = _Flaky(failures=2, value="weather")
    result = asyncio.run(retry_fetch(operation, 3, logger=_logger))
    assert result == "weather"
    assert operation.calls == 3


def test_always_failing_raises_after_exactly_max_attempts() -> None:
    operation = _Flaky(failures=100)
    with pytest.raises(RuntimeError, match="boom 3") as excinfo:
        asyncio.run(retry_fetch(operation, 3, logger=_logger))
    assert operation.calls == 3
    # Final error is re-raised unmodified.
    assert excinfo.value is operation.errors[-1]


def test_first_success_is_not_retried() -> None:
    operation = _Flaky(failures=0)
    assert asyncio.run(retry_fetch(operation, logger=_logger)) == "ok"
    assert operation.calls == 1


def test_default_attempt_cap_is_three() -> None:
    operation = _Flaky(failures=100)
    with pytest.raises(RuntimeError):
        asyncio.run(retry_fetch(operation, logger=_logger))
    assert operation.calls == 3


def test_single_attempt_does_not_retry() -> None:
    operation = _Flaky(failures=1)
    with pytest.raises(RuntimeError):
        asyncio.run(retry_fetch(operation, 1, logger=_logger))
    assert operation.calls == 1


@pytest.mark.parametrize("attempts", [0, -1])
def test_invalid_attempt_count_rejected(attempts: int) -> None:
    operation = _Flaky(failures=0)
    with pytest.raises(ValueError, match="max_attempts"):
        asyncio.run(retry_fetch(operation, attempts, logger=_logger))
    assert operation.calls == 0
