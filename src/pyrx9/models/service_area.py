"""Service Area cluster payloads."""

from __future__ import annotations

from pydantic import Field

from pyrx9.models._base import Rx9BaseModel, Rx9Enum


class AreaStatus(Rx9Enum):
    UNKNOWN = -1
    PENDING = 0
    OPERATING = 1
    SKIPPED = 2
    COMPLETED = 3


class Area(Rx9BaseModel):
    """A supported (cleanable) area."""

    area_id: int
    name: str


class AreaProgress(Rx9BaseModel):
    area_id: int
    status: int


class ServiceAreaStatus(Rx9BaseModel):
    """Service Area notification."""

    current_area: int | None = None
    progress: list[AreaProgress] = Field(default_factory=list)
