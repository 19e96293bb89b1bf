"""Custom exception hierarchy for pyrx9."""

from __future__ import annotations

from typing import Any


class Rx9Error(Exception):
    """Base exception for all pyrx9 errors."""


class Rx9ConfigError(Rx9Error):
    """Invalid or missing configuration."""


class Rx9DelegateError(Rx9Error):
    """A downstream delegate (attribute writer or event emitter) failed.

    Delegates are free to raise any exception; this hierarchy exists for
    delegates that want to report *which* cluster and attribute/event was
    affected.  The core never wraps delegate failures.
    """

    def __init__(
        self,
        message: str,
        *,
        cluster: Any = None,
        target: str = "",
    ) -> None:
        self.cluster = cluster
        self.target = target
        super().__init__(message)


class Rx9WriteError(Rx9DelegateError):
    """Attribute write delegate failed."""


class Rx9EmitError(Rx9DelegateError):
    """Event emission delegate failed."""


class Rx9CommandError(Rx9Error):
    """Command from the control surface was rejected.

    ``status_code`` is the status returned to the command-issuing layer.
    Rejections are never retried.
    """

    status_code: int = 0x01

    def __init__(self, message: str, *, command: str = "") -> None:
        self.command = command
        super().__init__(message)


class InvalidInStateError(Rx9CommandError):
    """Pause/Resume/GoHome (or area selection) not possible in the current state."""

    status_code = 0x03


class InvalidInModeError(Rx9CommandError):
    """Run mode change not possible in the current mode."""

    status_code = 0x03


class UnsupportedCommandError(Rx9CommandError):
    """Command that the cloud API cannot perform (e.g. changing the clean mode)."""

    status_code = 0x81
