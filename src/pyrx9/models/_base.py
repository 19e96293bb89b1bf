"""Base model and enum for RX9 state payloads.

Every payload model inherits from :class:`Rx9BaseModel` which provides:

* ``alias_generator=to_camel`` so snake_case fields dump to the camelCase
  attribute/struct names the control framework expects.
* ``to_attributes()`` returning that by-alias dump.

State enums inherit from :class:`Rx9Enum` which adds an ``UNKNOWN`` member
at ``-1`` and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.  Enum members are only used for naming values in
logs; payloads keep the raw integers so unmapped vendor codes survive.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Rx9Enum(enum.IntEnum):
    """Base for RX9 state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    """

    @classmethod
    def _missing_(cls, value: object) -> Rx9Enum:
        # noinspection PyUnresolvedReferences
        # pylint: disable=no-member
        if hasattr(cls, "UNKNOWN"):
            unknown: Rx9Enum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))

    @classmethod
    def describe(cls, value: int | None) -> str:
        """Return ``"NAME (value)"`` for logs."""
        if value is None:
            return "None"
        return f"{cls(value).name} ({int(value)})"


class Rx9BaseModel(BaseModel):
    """Base for RX9 state payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_attributes(self) -> dict[str, Any]:
        """Dump using the framework's camelCase names."""
        return self.model_dump(by_alias=True)
