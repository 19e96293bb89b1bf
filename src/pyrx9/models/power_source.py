"""Power Source cluster payloads."""

from __future__ import annotations

from pydantic import Field

from pyrx9.models._base import Rx9BaseModel, Rx9Enum


class PowerSourceStatus(Rx9Enum):
    UNKNOWN = -1
    UNSPECIFIED = 0
    ACTIVE = 1
    STANDBY = 2
    UNAVAILABLE = 3


class BatChargeLevel(Rx9Enum):
    UNKNOWN = -1
    OK = 0
    WARNING = 1
    CRITICAL = 2


class BatChargeState(Rx9Enum):
    UNKNOWN = -1
    UNKNOWN_STATE = 0
    IS_CHARGING = 1
    IS_AT_FULL_CHARGE = 2
    IS_NOT_CHARGING = 3


class BatteryStatus(Rx9BaseModel):
    """Battery status notification."""

    status: int
    bat_percent_remaining: int = Field(..., ge=0, le=200)
    """Remaining charge in half-percent units (0-200)."""
    bat_charge_level: int
    bat_charge_state: int

    @property
    def percent(self) -> float:
        return self.bat_percent_remaining / 2
