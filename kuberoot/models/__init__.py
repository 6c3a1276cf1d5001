"""Core data structures for kuberoot."""

from kuberoot.models.config import (
    DEFAULT_EXCLUDED_NAMESPACES,
    DEFAULT_PROBE_COMMAND,
    KubeRootConfig,
)
from kuberoot.models.events import PodDeleted, PodEvent, PodPhase, PodUpdated, WatchError
from kuberoot.models.records import ClassificationResult, ContainerRecord

__all__ = [
    "ClassificationResult",
    "ContainerRecord",
    "DEFAULT_EXCLUDED_NAMESPACES",
    "DEFAULT_PROBE_COMMAND",
    "KubeRootConfig",
    "PodDeleted",
    "PodEvent",
    "PodPhase",
    "PodUpdated",
    "WatchError",
]
