"""Edge detection on successive operational-state snapshots.

Two independent transitions are tracked per device:

* activity: ``is_active`` going true -> false emits an *operation
  completion* event carrying the elapsed active time;
* error: a changed error descriptor that is not ``NoError`` emits an
  *operational error* event.  Clearing an error emits nothing but still
  updates the stored descriptor, so a recurrence is a fresh edge.

The detector is synchronous and holds no timers; it only reacts to the
snapshots it is given.  Callers must not process two snapshots for the
same device concurrently.

Cold start: the activation instant starts at the Unix epoch.  Because
``is_active`` starts false, a fresh detector always records an activation
before it can report a completion; a detector created mid-run measures from
its first active snapshot and underestimates that run.  State seeded with
``restore(is_active=True)`` and no ``active_since`` is measured from the
epoch, and the resulting (huge) duration is reported as-is rather than
suppressed.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from pyrx9._format import describe_operational_error, format_seconds
from pyrx9.models.events import OperationalErrorEvent, OperationCompletionEvent
from pyrx9.models.operational import NO_ERROR, OperationalError, OperationalSnapshot, errors_equal

_logger = logging.getLogger(__name__)

COLD_START = datetime.fromtimestamp(0, tz=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class EdgeEventName(StrEnum):
    OPERATION_COMPLETION = "operationCompletion"
    OPERATIONAL_ERROR = "operationalError"


@dataclass(frozen=True, slots=True)
class EdgeEvent:
    """A detected edge, ready to be emitted."""

    name: EdgeEventName
    payload: OperationCompletionEvent | OperationalErrorEvent

    def payload_dict(self) -> dict[str, object]:
        return self.payload.to_attributes()


class EdgeDetector:
    """Per-device activity and error edge detector."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._last_is_active = False
        self._active_since = COLD_START
        self._last_error: OperationalError = NO_ERROR

    @property
    def is_active(self) -> bool:
        return self._last_is_active

    @property
    def active_since(self) -> datetime:
        return self._active_since

    @property
    def last_error(self) -> OperationalError:
        return self._last_error

    def restore(
        self,
        *,
        is_active: bool,
        active_since: datetime | None = None,
        last_error: OperationalError = NO_ERROR,
    ) -> None:
        """Seed state, e.g. when a session is recreated while the device runs."""
        self._last_is_active = is_active
        self._active_since = active_since if active_since is not None else COLD_START
        self._last_error = last_error

    def _activity_edge(self, snapshot: OperationalSnapshot) -> EdgeEvent | None:
        if snapshot.is_active == self._last_is_active:
            return None
        self._last_is_active = snapshot.is_active
        now = self._clock()

        if snapshot.is_active:
            _logger.info("RVC operation started")
            self._active_since = now
            return None

        elapsed = (now - self._active_since).total_seconds()
        total_operational_time = math.floor(elapsed + 0.5)
        _logger.info("RVC operation completion in %s", format_seconds(total_operational_time))
        return EdgeEvent(
            name=EdgeEventName.OPERATION_COMPLETION,
            payload=OperationCompletionEvent(
                completion_error_code=snapshot.operational_error.error_state_id,
                total_operational_time=total_operational_time,
            ),
        )

    def _error_edge(self, snapshot: OperationalSnapshot) -> EdgeEvent | None:
        error = snapshot.operational_error
        if errors_equal(self._last_error, error):
            return None
        self._last_error = error

        if not error.is_error:
            _logger.info("RVC operational error: error cleared")
            return None

        _logger.info("RVC operational error: %s", describe_operational_error(error))
        return EdgeEvent(
            name=EdgeEventName.OPERATIONAL_ERROR,
            payload=OperationalErrorEvent(error_state=error),
        )

    def process(self, snapshot: OperationalSnapshot) -> list[EdgeEvent]:
        """Return the events triggered by *snapshot*, completion first."""
        events: list[EdgeEvent] = []
        for detect in (self._activity_edge, self._error_edge):
            event = detect(snapshot)
            if event is not None:
                events.append(event)
        return events
