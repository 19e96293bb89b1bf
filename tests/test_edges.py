from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pyrx9.models.events import OperationalErrorEvent, OperationCompletionEvent
from pyrx9.models.operational import (
    NO_ERROR,
    ErrorStateId,
    OperationalError,
    OperationalSnapshot,
    OperationalStateId,
    errors_equal,
)
from pyrx9.state.edges import COLD_START, EdgeDetector, EdgeEventName

STUCK = OperationalError(error_state_id=ErrorStateId.STUCK, error_state_label="Wheel", error_state_details="Left")


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def _snapshot(*, active: bool, error: OperationalError = NO_ERROR) -> OperationalSnapshot:
    state = OperationalStateId.RUNNING if active else OperationalStateId.DOCKED
    if error.is_error:
        state = OperationalStateId.ERROR
    return OperationalSnapshot(operational_state=state, operational_error=error, is_active=active)


def test_initial_state() -> None:
    detector = EdgeDetector()

    assert detector.is_active is False
    assert detector.active_since == COLD_START
    assert errors_equal(detector.last_error, NO_ERROR)


def test_activation_then_completion_after_125_seconds() -> None:
    clock = _Clock()
    detector = EdgeDetector(clock=clock)

    assert detector.process(_snapshot(active=False)) == []
    assert detector.process(_snapshot(active=True)) == []
    assert detector.active_since == clock.now

    clock.advance(125)
    events = detector.process(_snapshot(active=False))

    assert len(events) == 1
    event = events[0]
    assert event.name == EdgeEventName.OPERATION_COMPLETION
    assert isinstance(event.payload, OperationCompletionEvent)
    assert event.payload_dict() == {"completionErrorCode": ErrorStateId.NO_ERROR, "totalOperationalTime": 125}


def test_completion_duration_rounds_to_whole_seconds() -> None:
    clock = _Clock()
    detector = EdgeDetector(clock=clock)

    detector.process(_snapshot(active=True))
    clock.advance(59.5)
    events = detector.process(_snapshot(active=False))

    assert events[0].payload.total_operational_time == 60  # type: ignore[union-attr]


def test_repeated_snapshots_are_idempotent() -> None:
    clock = _Clock()
    detector = EdgeDetector(clock=clock)

    detector.process(_snapshot(active=True, error=STUCK))
    started = detector.active_since

    for _ in range(3):
        clock.advance(10)
        assert detector.process(_snapshot(active=True, error=STUCK)) == []

    assert detector.active_since == started
    assert detector.is_active is True


def test_error_onset_clearance_and_recurrence() -> None:
    detector = EdgeDetector(clock=_Clock())

    assert detector.process(_snapshot(active=True)) == []

    onset = detector.process(_snapshot(active=True, error=STUCK))
    assert [event.name for event in onset] == [EdgeEventName.OPERATIONAL_ERROR]
    assert isinstance(onset[0].payload, OperationalErrorEvent)
    assert onset[0].payload_dict() == {
        "errorState": {"errorStateId": 65, "errorStateLabel": "Wheel", "errorStateDetails": "Left"},
    }

    assert detector.process(_snapshot(active=True)) == []
    assert errors_equal(detector.last_error, NO_ERROR)

    recurrence = detector.process(_snapshot(active=True, error=STUCK))
    assert [event.name for event in recurrence] == [EdgeEventName.OPERATIONAL_ERROR]


def test_error_details_change_is_a_new_edge() -> None:
    detector = EdgeDetector(clock=_Clock())
    detector.process(_snapshot(active=True, error=STUCK))

    relabelled = STUCK.model_copy(update={"error_state_details": "Right"})
    events = detector.process(_snapshot(active=True, error=relabelled))

    assert [event.name for event in events] == [EdgeEventName.OPERATIONAL_ERROR]
    assert events[0].payload.error_state == relabelled  # type: ignore[union-attr]


def test_completion_precedes_error_in_same_snapshot() -> None:
    clock = _Clock()
    detector = EdgeDetector(clock=clock)

    detector.process(_snapshot(active=True))
    clock.advance(30)
    events = detector.process(_snapshot(active=False, error=STUCK))

    assert [event.name for event in events] == [
        EdgeEventName.OPERATION_COMPLETION,
        EdgeEventName.OPERATIONAL_ERROR,
    ]
    # The completion carries the error of the run that just ended.
    assert events[0].payload_dict() == {"completionErrorCode": 65, "totalOperationalTime": 30}


def test_error_while_inactive_emits_only_error() -> None:
    detector = EdgeDetector(clock=_Clock())

    events = detector.process(_snapshot(active=False, error=STUCK))

    assert [event.name for event in events] == [EdgeEventName.OPERATIONAL_ERROR]


def test_restored_active_state_without_start_measures_from_epoch() -> None:
    # Cold-start artifact: reported as-is rather than suppressed.
    clock = _Clock()
    detector = EdgeDetector(clock=clock)
    detector.restore(is_active=True)

    events = detector.process(_snapshot(active=False))

    expected = round((clock.now - COLD_START).total_seconds())
    assert events[0].payload.total_operational_time == expected  # type: ignore[union-attr]


def test_restore_with_start_time() -> None:
    clock = _Clock()
    detector = EdgeDetector(clock=clock)
    detector.restore(is_active=True, active_since=clock.now - timedelta(minutes=5), last_error=STUCK)

    events = detector.process(_snapshot(active=False, error=STUCK))

    assert [event.name for event in events] == [EdgeEventName.OPERATION_COMPLETION]
    assert events[0].payload.total_operational_time == 300  # type: ignore[union-attr]
