"""Pydantic models for RX9 state notifications and events."""

from pyrx9.models._base import Rx9BaseModel, Rx9Enum
from pyrx9.models.events import OperationalErrorEvent, OperationCompletionEvent
from pyrx9.models.operational import (
    NO_ERROR,
    ErrorStateId,
    OperationalError,
    OperationalSnapshot,
    OperationalStateId,
    RunMode,
    errors_equal,
)
from pyrx9.models.power_source import BatChargeLevel, BatChargeState, BatteryStatus, PowerSourceStatus
from pyrx9.models.service_area import Area, AreaProgress, AreaStatus, ServiceAreaStatus

__all__ = [
    "NO_ERROR",
    "Area",
    "AreaProgress",
    "AreaStatus",
    "BatChargeLevel",
    "BatChargeState",
    "BatteryStatus",
    "ErrorStateId",
    "OperationCompletionEvent",
    "OperationalError",
    "OperationalErrorEvent",
    "OperationalSnapshot",
    "OperationalStateId",
    "PowerSourceStatus",
    "RunMode",
    "Rx9BaseModel",
    "Rx9Enum",
    "ServiceAreaStatus",
    "errors_equal",
]
