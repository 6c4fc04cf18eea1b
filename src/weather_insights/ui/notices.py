"""Bounded notice feed with repeat-deduplication."""

from __future__ import annotations

from datetime import UTC, datetime

from .models import Notice, Severity


class NoticeFeed:
    """Keep recent notices and collapse an immediately repeated message."""

    def __init__(self, *, max_notices: int = 20) -> None:
        self.max_notices = max_notices
        self._notices: list[Notice] = []

    def add(self, *, severity: Severity, message: str, ts: datetime | None = None) -> Notice:
        now = ts or datetime.now(UTC)
        if self._notices:
            last = self._notices[-1]
            if last.severity == severity and last.message == message:
                last.touch(now)
                return last

        notice = Notice(ts=now, severity=severity, message=message)
        self._notices.append(notice)
        while len(self._notices) > self.max_notices:
            self._notices.pop(0)
        return notice

    def snapshot(self, *, newest_first: bool = False) -> list[Notice]:
        items = list(self._notices)
        if newest_first:
            items.reverse()
        return items

    def clear(self) -> None:
        self._notices.clear()
