"""Pod watch events, decoded once into a small tagged variant.

Only the event kinds the readiness wait consumes are modelled.  Every
variant carries a ``kind`` tag so consumers can ``match`` on it instead of
inspecting raw watch payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal


class PodPhase(StrEnum):
    """Pod lifecycle phase as reported in ``status.phase``."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class PodUpdated:
    """The pod was added or modified."""

    namespace: str
    name: str
    phase: PodPhase
    kind: Literal["updated"] = "updated"


@dataclass(frozen=True)
class PodDeleted:
    """The pod was deleted while being watched."""

    namespace: str
    name: str
    kind: Literal["deleted"] = "deleted"


@dataclass(frozen=True)
class WatchError:
    """The API server reported an error on the watch stream."""

    reason: str
    message: str
    code: int = 0
    kind: Literal["error"] = "error"


PodEvent = PodUpdated | PodDeleted | WatchError
