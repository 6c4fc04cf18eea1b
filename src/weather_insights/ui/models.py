"""Notice records shown beneath the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

Severity = Literal["INFO", "WARN", "ERROR"]


def as_utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=UTC) if ts.tzinfo is None else ts.astimezone(UTC)


@dataclass(slots=True)
class Notice:
    """A user-facing message; `count` grows when the same message repeats."""

    ts: datetime
    severity: Severity
    message: str
    count: int = 1

    def __post_init__(self) -> None:
        self.ts = as_utc(self.ts)

    def touch(self, ts: datetime) -> None:
        self.count += 1
        self.ts = as_utc(ts)

    @property
    def display_text(self) -> str:
        return self.message if self.count == 1 else f"{self.message} (x{self.count})"
