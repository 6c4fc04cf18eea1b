"""User-action orchestration: resolve coordinates, acquire data, report one outcome."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import QueryValidationError, StaleCycleError
from .models import AcquisitionResult, ResolvedLocation
from .pipeline import AcquisitionPipeline, describe_failure
from .redaction import sanitize_text
from .resolver import CoordinateResolver
from .ui.map_view import MapSession, MapStyle

SEARCH_FAILED_MESSAGE = "Unable to find the location. Please try a different search term."


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CycleOutcome:
    """What the presentation layer should show after one user action."""

    state: SessionState
    message: str | None = None
    notices: tuple[str, ...] = ()
    result: AcquisitionResult | None = None
    stale: bool = False


@dataclass
class InsightsSession:
    """Holds the state machine and map session for one interactive run."""

    resolver: CoordinateResolver
    pipeline: AcquisitionPipeline
    logger: logging.Logger
    map_session: MapSession = field(default_factory=MapSession)
    state: SessionState = SessionState.IDLE
    last_outcome: CycleOutcome | None = None

    async def use_current_location(self) -> CycleOutcome:
        """Device position path; falls back to the default location on failure."""
        self.state = SessionState.LOADING
        resolved = await self.resolver.resolve_current_location()
        notices = (resolved.notice,) if resolved.notice else ()
        return await self._acquire(resolved, notices=notices)

    async def search(self, query: str) -> CycleOutcome:
        """Search path; any resolution failure is terminal for this action."""
        try:
            self.state = SessionState.LOADING
            resolved = await self.resolver.resolve_search(query)
        except QueryValidationError as exc:
            return self._finish(CycleOutcome(state=SessionState.ERROR, message=str(exc)))
        except Exception as exc:
            self.logger.error("Search error: %s", sanitize_text(str(exc)))
            return self._finish(
                CycleOutcome(state=SessionState.ERROR, message=SEARCH_FAILED_MESSAGE)
            )
        return await self._acquire(resolved)

    def set_map_style(self, style: MapStyle) -> MapSession:
        self.map_session = self.map_session.with_style(style)
        return self.map_session

    async def _acquire(
        self,
        resolved: ResolvedLocation,
        *,
        notices: tuple[str, ...] = (),
    ) -> CycleOutcome:
        try:
            result = await self.pipeline.acquire(resolved.coordinates, resolved.geocode_result)
        except StaleCycleError as exc:
            self.logger.info("%s", exc)
            # A newer cycle owns the state; leave it untouched.
            return CycleOutcome(state=self.state, notices=notices, stale=True)
        except Exception as exc:
            self.logger.error(
                "Data fetch error (%s): %s", type(exc).__name__, sanitize_text(str(exc))
            )
            return self._finish(
                CycleOutcome(
                    state=SessionState.ERROR,
                    message=describe_failure(exc),
                    notices=notices,
                )
            )

        self.map_session = self.map_session.place_marker(
            result.coordinates.latitude,
            result.coordinates.longitude,
            result.location.name,
        )
        return self._finish(
            CycleOutcome(state=SessionState.SUCCESS, notices=notices, result=result)
        )

    def _finish(self, outcome: CycleOutcome) -> CycleOutcome:
        self.state = outcome.state
        self.last_outcome = outcome
        return outcome
