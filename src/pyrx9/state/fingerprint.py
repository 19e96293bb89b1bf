"""Attribute fingerprint cache.

Suppresses downstream attribute writes when a value has not changed since
the last write for the same cluster/attribute.  Values are compared through
their *fingerprint*: a deterministic, type-tagged string.  Two values are
"unchanged" if and only if their fingerprints are equal.

Structured values are fingerprinted via canonical JSON (sorted keys, compact
separators).  Values that cannot be serialized (cycles, unsupported types)
fall back to a type-only tag, so distinct unserializable values of the same
type collide.  That imprecision only costs a skipped write when such a value
is followed by another unserializable value of the same type.
"""

from __future__ import annotations

import asyncio
import dataclasses
import enum
import json
import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any, Final

from pydantic import BaseModel

from pyrx9.clusters import attribute_key
from pyrx9.config import CommitPolicy

_logger = logging.getLogger(__name__)

WriteDelegate = Callable[[Any, str, Any], Awaitable[Any]]


class _Missing:
    """Marker for an absent value (distinct from ``None``)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        # Order-insensitive: sort members by their own fingerprint.
        return sorted(value, key=fingerprint_value)
    if isinstance(value, bytes):
        return value.hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _number_literal(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(int(value))


def fingerprint_value(value: Any) -> str:
    """Return the fingerprint of *value*."""
    if value is None:
        return "null"
    if value is MISSING:
        return "undefined"
    if isinstance(value, bool):
        return f"boolean:{'true' if value else 'false'}"
    if isinstance(value, (int, float)):
        return f"number:{_number_literal(value)}"
    if isinstance(value, str):
        return f"string:{value}"
    if isinstance(value, bytes):
        return f"bytes:{value.hex()}"
    if callable(value):
        return "function"
    try:
        canonical = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=_json_default,
        )
    except (TypeError, ValueError, RecursionError):
        return f"object:{type(value).__name__}"
    return f"json:{canonical}"


class FingerprintCache:
    """Per-session map of attribute key -> last written fingerprint.

    Entries are created on the first write for a key and replaced on every
    accepted change; they are never removed.  The cache lives and dies with
    the owning device session.
    """

    def __init__(
        self,
        *,
        commit_policy: CommitPolicy = CommitPolicy.OPTIMISTIC,
        suppress_redundant_writes: bool = True,
    ) -> None:
        self._commit_policy = commit_policy
        self._suppress = suppress_redundant_writes
        self._fingerprints: dict[str, str] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._fingerprints)

    def __contains__(self, key: object) -> bool:
        return key in self._fingerprints

    def get(self, key: str) -> str | None:
        return self._fingerprints.get(key)

    def check(self, key: str, value: Any) -> str | None:
        """Return the new fingerprint when *value* differs, else ``None``.

        A key never seen before always counts as changed.
        """
        fingerprint = fingerprint_value(value)
        if self._suppress and self._fingerprints.get(key) == fingerprint:
            return None
        return fingerprint

    def commit(self, key: str, fingerprint: str) -> None:
        self._fingerprints[key] = fingerprint

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def write_if_changed(self, cluster: Any, attribute: str, value: Any, write: WriteDelegate) -> bool:
        """Write *value* through *write* unless it is unchanged.

        Returns ``True`` when the delegate was called.  Exceptions raised by
        the delegate propagate; whether the fingerprint is still recorded is
        governed by the commit policy.
        """
        key = attribute_key(cluster, attribute)
        async with self._lock(key):
            fingerprint = self.check(key, value)
            if fingerprint is None:
                _logger.debug("Skipping unchanged attribute %s", key)
                return False
            try:
                await write(cluster, attribute, value)
            except Exception:
                if self._commit_policy is CommitPolicy.OPTIMISTIC:
                    self.commit(key, fingerprint)
                raise
            self.commit(key, fingerprint)
            return True
