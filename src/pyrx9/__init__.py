"""pyrx9 - State synchronization core for AEG RX9 / Electrolux Pure i9 robot vacuums."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrx9")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrx9.clusters import ClusterId, ClusterRef, attribute_key, normalize_cluster_id
from pyrx9.config import BridgeConfig, CommitPolicy
from pyrx9.device import Activity, ActivityController, AttributeWriter, EventEmitter, Rx9Device
from pyrx9.exceptions import (
    InvalidInModeError,
    InvalidInStateError,
    Rx9CommandError,
    Rx9ConfigError,
    Rx9DelegateError,
    Rx9EmitError,
    Rx9Error,
    Rx9WriteError,
    UnsupportedCommandError,
)
from pyrx9.models import (
    Area,
    AreaProgress,
    BatteryStatus,
    ErrorStateId,
    OperationalError,
    OperationalSnapshot,
    OperationalStateId,
    RunMode,
    ServiceAreaStatus,
)
from pyrx9.notifications import AttributeGroup, NotificationHub
from pyrx9.state.edges import EdgeDetector, EdgeEvent, EdgeEventName
from pyrx9.state.fingerprint import MISSING, FingerprintCache, fingerprint_value

__all__ = [
    "__version__",
    "MISSING",
    "Activity",
    "ActivityController",
    "Area",
    "AreaProgress",
    "AttributeGroup",
    "AttributeWriter",
    "BatteryStatus",
    "BridgeConfig",
    "ClusterId",
    "ClusterRef",
    "CommitPolicy",
    "EdgeDetector",
    "EdgeEvent",
    "EdgeEventName",
    "ErrorStateId",
    "EventEmitter",
    "FingerprintCache",
    "InvalidInModeError",
    "InvalidInStateError",
    "NotificationHub",
    "OperationalError",
    "OperationalSnapshot",
    "OperationalStateId",
    "RunMode",
    "Rx9CommandError",
    "Rx9ConfigError",
    "Rx9DelegateError",
    "Rx9Device",
    "Rx9EmitError",
    "Rx9Error",
    "Rx9WriteError",
    "ServiceAreaStatus",
    "UnsupportedCommandError",
    "attribute_key",
    "fingerprint_value",
    "normalize_cluster_id",
]
