"""Typed subscription interface between the telemetry source and a device.

The telemetry collaborator publishes one payload per attribute group;
the device session subscribes handlers per group.  Delivery within a group
is strictly ordered (one notification at a time); different groups are
independent and may interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

_logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Any]]


class AttributeGroup(StrEnum):
    REACHABLE = "reachable"
    SOFTWARE_VERSION = "software_version"
    BATTERY_STATUS = "battery_status"
    RUN_MODE = "run_mode"
    CLEAN_MODE = "clean_mode"
    OPERATIONAL_STATE = "operational_state"
    SERVICE_AREA = "service_area"


class NotificationHub:
    """Per-device publish/subscribe hub."""

    def __init__(self) -> None:
        self._handlers: dict[AttributeGroup, list[Handler]] = {}
        self._locks: dict[AttributeGroup, asyncio.Lock] = {}

    def subscribe(self, group: AttributeGroup, handler: Handler) -> Callable[[], None]:
        """Register *handler* for *group*; returns an unsubscribe callable."""
        handlers = self._handlers.setdefault(group, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def subscriber_count(self, group: AttributeGroup) -> int:
        return len(self._handlers.get(group, []))

    def _lock(self, group: AttributeGroup) -> asyncio.Lock:
        lock = self._locks.get(group)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[group] = lock
        return lock

    async def publish(self, group: AttributeGroup, payload: Any) -> int:
        """Deliver *payload* to every handler of *group*, in subscription order.

        A failing handler is logged and does not affect later handlers or
        later notifications.  Returns the number of handlers that failed.
        """
        failures = 0
        async with self._lock(group):
            for handler in list(self._handlers.get(group, [])):
                try:
                    await handler(payload)
                except Exception:
                    failures += 1
                    _logger.warning("Handler for %s notification failed", group.value, exc_info=True)
        return failures
