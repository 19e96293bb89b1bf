"""Bridge configuration for pyrx9."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from pyrx9.exceptions import Rx9ConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


class CommitPolicy(StrEnum):
    """When a fingerprint is recorded relative to the write delegate's outcome."""

    OPTIMISTIC = "optimistic"
    ON_SUCCESS = "on_success"

    @classmethod
    def parse(cls, value: str | CommitPolicy) -> CommitPolicy:
        if isinstance(value, CommitPolicy):
            return value
        normalized = value.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(policy.value for policy in cls)
            raise Rx9ConfigError(f"commit_policy must be one of {choices}, got {value!r}") from None


@dataclasses.dataclass(frozen=True)
class BridgeConfig:
    """Bridge configuration.

    Parameters
    ----------
    device_name : str
        Human-readable device name, used as log context.
    suppress_redundant_writes : bool
        Skip attribute writes whose value has not changed since the last
        write for the same cluster/attribute.  When disabled every
        notification writes through.
    commit_policy : CommitPolicy
        What happens to the stored fingerprint when the write delegate
        raises.  ``OPTIMISTIC`` records it anyway, so an identical value
        arriving later is *not* retried.  ``ON_SUCCESS`` keeps the previous
        fingerprint so the next identical value is written again.
    debug_payloads : bool
        Log every incoming notification payload at DEBUG level.
    """

    device_name: str = "AEG RX9"
    suppress_redundant_writes: bool = True
    commit_policy: CommitPolicy = CommitPolicy.OPTIMISTIC
    debug_payloads: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "commit_policy", CommitPolicy.parse(self.commit_policy))

    @classmethod
    def from_env(cls, **overrides: Any) -> BridgeConfig:
        """Create configuration from ``RX9_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        name_env = env.get("RX9_DEVICE_NAME")
        if name_env is not None:
            config_kwargs["device_name"] = name_env

        config_kwargs["suppress_redundant_writes"] = _env_bool(env.get("RX9_SUPPRESS_REDUNDANT_WRITES"), True)
        config_kwargs["debug_payloads"] = _env_bool(env.get("RX9_DEBUG_PAYLOADS"), False)

        policy_env = env.get("RX9_COMMIT_POLICY")
        if policy_env is not None and "commit_policy" not in overrides:
            config_kwargs["commit_policy"] = CommitPolicy.parse(policy_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
