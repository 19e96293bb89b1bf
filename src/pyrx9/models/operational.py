"""RVC Operational State, Run Mode and Clean Mode payloads."""

from __future__ import annotations

from pyrx9.models._base import Rx9BaseModel, Rx9Enum


class OperationalStateId(Rx9Enum):
    UNKNOWN = -1
    STOPPED = 0
    RUNNING = 1
    PAUSED = 2
    ERROR = 3
    SEEKING_CHARGER = 64
    CHARGING = 65
    DOCKED = 66


class ErrorStateId(Rx9Enum):
    UNKNOWN = -1
    NO_ERROR = 0
    UNABLE_TO_START_OR_RESUME = 1
    UNABLE_TO_COMPLETE_OPERATION = 2
    COMMAND_INVALID_IN_STATE = 3
    FAILED_TO_FIND_CHARGING_DOCK = 64
    STUCK = 65
    DUST_BIN_MISSING = 66
    DUST_BIN_FULL = 67
    WATER_TANK_EMPTY = 68
    WATER_TANK_MISSING = 69
    WATER_TANK_LID_OPEN = 70
    MOP_CLEANING_PAD_MISSING = 71

    @classmethod
    def name_for(cls, value: int) -> str | None:
        """Return the member name for *value*, or ``None`` when unmapped."""
        member = cls(value)
        return None if member is cls.UNKNOWN else member.name


class RunMode(Rx9Enum):
    UNKNOWN = -1
    IDLE = 1
    CLEANING = 2


class OperationalError(Rx9BaseModel):
    """Operational error descriptor.

    ``error_state_id == ErrorStateId.NO_ERROR`` means there is no fault.
    """

    error_state_id: int = int(ErrorStateId.NO_ERROR)
    error_state_label: str | None = None
    error_state_details: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error_state_id != ErrorStateId.NO_ERROR


NO_ERROR = OperationalError()


def errors_equal(a: OperationalError, b: OperationalError) -> bool:
    """Field-wise comparison of two error descriptors."""
    return (
        a.error_state_id == b.error_state_id
        and a.error_state_label == b.error_state_label
        and a.error_state_details == b.error_state_details
    )


class OperationalSnapshot(Rx9BaseModel):
    """One point-in-time reading of the operational state."""

    operational_state: int
    operational_error: OperationalError = NO_ERROR
    is_active: bool = False
