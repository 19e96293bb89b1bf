"""Event payloads emitted on detected edges."""

from __future__ import annotations

from pydantic import Field

from pyrx9.models._base import Rx9BaseModel
from pyrx9.models.operational import OperationalError


class OperationCompletionEvent(Rx9BaseModel):
    """Emitted when an active period ends."""

    completion_error_code: int
    total_operational_time: int = Field(..., description="Elapsed active time in whole seconds")


class OperationalErrorEvent(Rx9BaseModel):
    """Emitted when a new (non-NoError) error descriptor is observed."""

    error_state: OperationalError
