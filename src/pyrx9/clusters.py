"""Cluster identifiers and their normalization.

The control framework hands cluster identifiers around in several shapes:
a raw numeric id, a named constant (``ClusterId.POWER_SOURCE`` or the string
``"PowerSource"``), or a cluster object exposing ``id`` / ``name``.
:func:`normalize_cluster_id` maps every shape of the same logical cluster
to one key string.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class ClusterId(enum.IntEnum):
    BASIC_INFORMATION = 0x0028
    BRIDGED_DEVICE_BASIC_INFORMATION = 0x0039
    POWER_SOURCE = 0x002F
    RVC_RUN_MODE = 0x0054
    RVC_CLEAN_MODE = 0x0055
    RVC_OPERATIONAL_STATE = 0x0061
    SERVICE_AREA = 0x0150


class ClusterRef(BaseModel):
    """A cluster object as exposed by the framework (``id`` and/or ``name``)."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str | None = None


def _name_token(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


_CLUSTERS_BY_NAME: dict[str, int] = {_name_token(member.name): int(member) for member in ClusterId}


def _normalize_name(name: str) -> str:
    text = name.strip()
    cluster = _CLUSTERS_BY_NAME.get(_name_token(text))
    if cluster is not None:
        return f"cluster:{cluster}"
    try:
        return f"cluster:{int(text, 0)}"
    except ValueError:
        return f"name:{text}"


def normalize_cluster_id(cluster: Any) -> str:
    """Return a representation-independent key for *cluster*."""
    if isinstance(cluster, bool):
        return f"bool:{cluster}"
    if isinstance(cluster, int):
        return f"cluster:{int(cluster)}"
    if isinstance(cluster, str):
        return _normalize_name(cluster)

    if isinstance(cluster, Mapping):
        cluster_id = cluster.get("id")
        cluster_name = cluster.get("name")
    else:
        cluster_id = getattr(cluster, "id", None)
        cluster_name = getattr(cluster, "name", None)

    if isinstance(cluster_id, int) and not isinstance(cluster_id, bool):
        return f"cluster:{int(cluster_id)}"
    if isinstance(cluster_name, str):
        return _normalize_name(cluster_name)
    return f"object:{type(cluster).__name__}"


def attribute_key(cluster: Any, attribute: str) -> str:
    """Key identifying one attribute slot of one cluster."""
    return f"{normalize_cluster_id(cluster)}:{attribute}"
