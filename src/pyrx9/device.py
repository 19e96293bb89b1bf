"""Robot vacuum device session.

Owns the per-session fingerprint cache and edge detector, turns incoming
notifications into attribute writes and events, and maps control-surface
commands onto appliance activities.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from enum import StrEnum
from typing import Any, Protocol

from pyrx9.clusters import ClusterId
from pyrx9.config import BridgeConfig
from pyrx9.exceptions import InvalidInModeError, InvalidInStateError, UnsupportedCommandError
from pyrx9.models.operational import OperationalSnapshot, OperationalStateId, RunMode
from pyrx9.models.power_source import BatChargeLevel, BatChargeState, BatteryStatus, PowerSourceStatus
from pyrx9.models.service_area import Area, AreaStatus, ServiceAreaStatus
from pyrx9.notifications import AttributeGroup, NotificationHub
from pyrx9.state.edges import EdgeDetector, EdgeEvent
from pyrx9.state.fingerprint import FingerprintCache

_logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class AttributeWriter(Protocol):
    async def write(self, cluster: Any, attribute: str, value: Any) -> Any: ...


class EventEmitter(Protocol):
    async def emit(self, cluster: Any, event: str, payload: dict[str, Any]) -> Any: ...


class ActivityController(Protocol):
    async def set_activity(self, activity: Activity) -> bool: ...


class Activity(StrEnum):
    CLEAN = "Clean"
    STOP = "Stop"
    PAUSE = "Pause"
    RESUME = "Resume"
    HOME = "Home"


_RUN_MODE_ACTIVITIES: dict[int, Activity] = {
    RunMode.IDLE: Activity.STOP,
    RunMode.CLEANING: Activity.CLEAN,
}


def parse_software_version(version: str) -> int:
    """Leading integer of a version string (``"42.7"`` -> 42), 0 if none."""
    match = _LEADING_INT.match(version)
    return int(match.group(1)) if match else 0


class Rx9Device:
    """A single robot vacuum session.

    Notifications for the same attribute group must be delivered one at a
    time (the :class:`NotificationHub` guarantees this); different groups may
    be processed concurrently.
    """

    def __init__(
        self,
        config: BridgeConfig,
        writer: AttributeWriter,
        emitter: EventEmitter,
        *,
        controller: ActivityController | None = None,
        supported_areas: Sequence[Area] = (),
        bridged: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._writer = writer
        self._emitter = emitter
        self._controller = controller
        self._supported_areas: dict[int, Area] = {area.area_id: area for area in supported_areas}
        self._selected_areas: list[int] = []
        self._bridged = bridged
        self._fingerprints = FingerprintCache(
            commit_policy=config.commit_policy,
            suppress_redundant_writes=config.suppress_redundant_writes,
        )
        self._edges = EdgeDetector(clock=clock) if clock is not None else EdgeDetector()
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def fingerprints(self) -> FingerprintCache:
        return self._fingerprints

    @property
    def edges(self) -> EdgeDetector:
        return self._edges

    @property
    def selected_areas(self) -> list[int]:
        return list(self._selected_areas)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def attach(self, hub: NotificationHub) -> None:
        """Subscribe this device's entry points to *hub*."""
        handlers = {
            AttributeGroup.REACHABLE: self.process_reachable,
            AttributeGroup.SOFTWARE_VERSION: self.process_software_version,
            AttributeGroup.BATTERY_STATUS: self.process_battery_update,
            AttributeGroup.RUN_MODE: self.process_run_mode,
            AttributeGroup.CLEAN_MODE: self.process_clean_mode,
            AttributeGroup.OPERATIONAL_STATE: self.process_operational_snapshot,
        }
        if self._supported_areas:
            handlers[AttributeGroup.SERVICE_AREA] = self.process_service_area
        for group, handler in handlers.items():
            self._unsubscribers.append(hub.subscribe(group, handler))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _update(self, cluster: Any, attribute: str, value: Any) -> bool:
        return await self._fingerprints.write_if_changed(cluster, attribute, value, self._writer.write)

    async def _update_all(self, cluster: Any, values: dict[str, Any]) -> None:
        await asyncio.gather(*(self._update(cluster, attribute, value) for attribute, value in values.items()))

    def _debug_payload(self, group: AttributeGroup, payload: Any) -> None:
        if self._config.debug_payloads:
            _logger.debug("[%s] %s notification: %r", self._config.device_name, group.value, payload)

    @property
    def _basic_information_cluster(self) -> ClusterId:
        if self._bridged:
            return ClusterId.BRIDGED_DEVICE_BASIC_INFORMATION
        return ClusterId.BASIC_INFORMATION

    # ------------------------------------------------------------------
    # Notification entry points
    # ------------------------------------------------------------------

    async def process_reachable(self, reachable: bool) -> None:
        self._debug_payload(AttributeGroup.REACHABLE, reachable)
        _logger.info("Reachable: %s", reachable)
        await self._update(self._basic_information_cluster, "reachable", reachable)

    async def process_software_version(self, version: str) -> None:
        self._debug_payload(AttributeGroup.SOFTWARE_VERSION, version)
        _logger.info("Software version: %s", version)
        await self._update_all(
            self._basic_information_cluster,
            {
                "softwareVersion": parse_software_version(version),
                "softwareVersionString": version,
            },
        )

    async def process_battery_update(self, battery: BatteryStatus) -> None:
        self._debug_payload(AttributeGroup.BATTERY_STATUS, battery)
        _logger.info(
            "Battery status: %s%% %s, %s, %s",
            battery.percent,
            BatChargeLevel.describe(battery.bat_charge_level),
            PowerSourceStatus.describe(battery.status),
            BatChargeState.describe(battery.bat_charge_state),
        )
        await self._update_all(ClusterId.POWER_SOURCE, battery.to_attributes())

    async def process_run_mode(self, run_mode: int) -> None:
        self._debug_payload(AttributeGroup.RUN_MODE, run_mode)
        _logger.info("RVC run mode: %s", RunMode.describe(run_mode))
        await self._update(ClusterId.RVC_RUN_MODE, "currentMode", run_mode)

    async def process_clean_mode(self, clean_mode: int) -> None:
        self._debug_payload(AttributeGroup.CLEAN_MODE, clean_mode)
        _logger.info("RVC clean mode: %s", clean_mode)
        await self._update(ClusterId.RVC_CLEAN_MODE, "currentMode", clean_mode)

    async def process_operational_snapshot(self, snapshot: OperationalSnapshot) -> list[EdgeEvent]:
        """Write the operational attributes, then emit any detected edges.

        Events are emitted in order (completion before error); an emitter
        failure propagates and skips the remaining events of this snapshot.
        The detector state has already advanced at that point.
        """
        self._debug_payload(AttributeGroup.OPERATIONAL_STATE, snapshot)
        cluster = ClusterId.RVC_OPERATIONAL_STATE
        _logger.info("RVC operational state: %s", OperationalStateId.describe(snapshot.operational_state))
        await self._update_all(
            cluster,
            {
                "operationalState": snapshot.operational_state,
                "operationalError": snapshot.operational_error.to_attributes(),
            },
        )

        events = self._edges.process(snapshot)
        for event in events:
            await self._emitter.emit(cluster, event.name.value, event.payload_dict())
        return events

    def _area_name(self, area_id: int | None) -> str:
        if area_id is None:
            return "None"
        area = self._supported_areas.get(area_id)
        return area.name if area is not None else f"Unknown {area_id}"

    async def process_service_area(self, service_area: ServiceAreaStatus) -> None:
        self._debug_payload(AttributeGroup.SERVICE_AREA, service_area)
        progress = ", ".join(
            f"{self._area_name(item.area_id)}: {AreaStatus.describe(item.status)}" for item in service_area.progress
        )
        _logger.info("Service area: %s [%s]", self._area_name(service_area.current_area), progress)
        await self._update_all(ClusterId.SERVICE_AREA, service_area.to_attributes())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def identify(self) -> None:
        _logger.info("Identify device %s", self._config.device_name)

    async def _set_activity(self, activity: Activity) -> bool:
        if self._controller is None:
            return False
        return await self._controller.set_activity(activity)

    async def _operational_command(self, command: str, activity: Activity) -> None:
        _logger.info("RVC operational state %s -> %s", command, activity.value)
        if not await self._set_activity(activity):
            raise InvalidInStateError(f"{command} not allowed in the current state", command=command)

    async def pause(self) -> None:
        await self._operational_command("Pause", Activity.PAUSE)

    async def resume(self) -> None:
        await self._operational_command("Resume", Activity.RESUME)

    async def go_home(self) -> None:
        await self._operational_command("GoHome", Activity.HOME)

    async def change_run_mode(self, new_mode: int) -> None:
        activity = _RUN_MODE_ACTIVITIES.get(new_mode)
        _logger.info("RVC run mode ChangeToMode %s -> %s", RunMode.describe(new_mode), activity)
        if activity is None or not await self._set_activity(activity):
            raise InvalidInModeError(f"Cannot change to run mode {new_mode}", command="ChangeToMode")

    async def change_clean_mode(self, new_mode: int) -> None:
        _logger.info("RVC clean mode ChangeToMode %s -> not supported", new_mode)
        raise UnsupportedCommandError("Changing the clean mode is not supported", command="ChangeToMode")

    def select_areas(self, area_ids: Iterable[int]) -> list[int]:
        """Store the areas to clean on the next run; empty means all."""
        selected = list(dict.fromkeys(area_ids))
        unknown = [area_id for area_id in selected if area_id not in self._supported_areas]
        if unknown:
            raise InvalidInStateError(f"Unsupported areas: {unknown}", command="SelectAreas")
        self._selected_areas = selected
        names = ", ".join(self._area_name(area_id) for area_id in selected) or "All areas"
        _logger.info("Service area SelectAreas %s", names)
        return list(selected)
