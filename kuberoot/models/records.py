"""Audit result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class ContainerRecord:
    """One probed container.

    Ordering follows field order, so sorting a list of records sorts by
    namespace, then pod, then container name.
    """

    namespace: str
    pod_name: str
    container_name: str
    probe_command: str

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity of the container, independent of the command that probed it."""
        return (self.namespace, self.pod_name, self.container_name)


@dataclass
class ClassificationResult:
    """Outcome of one traversal over the cluster.

    ``root_containers`` holds containers whose probe output indicated a root
    identity.  ``error_containers`` holds containers that could not be probed.
    A container is recorded in at most one of the two lists; containers that
    answered with a non-root identity are counted but not recorded.
    """

    root_containers: list[ContainerRecord] = field(default_factory=list)
    error_containers: list[ContainerRecord] = field(default_factory=list)
    namespaces_scanned: int = 0
    namespaces_skipped: int = 0
    pods_scanned: int = 0
    pods_skipped: int = 0
    containers_probed: int = 0

    def sorted(self) -> ClassificationResult:
        """Return a copy with both record lists in (namespace, pod, container) order."""
        return ClassificationResult(
            root_containers=sorted(self.root_containers),
            error_containers=sorted(self.error_containers),
            namespaces_scanned=self.namespaces_scanned,
            namespaces_skipped=self.namespaces_skipped,
            pods_scanned=self.pods_scanned,
            pods_skipped=self.pods_skipped,
            containers_probed=self.containers_probed,
        )

    def summary(self) -> dict[str, int]:
        return {
            "namespaces_scanned": self.namespaces_scanned,
            "namespaces_skipped": self.namespaces_skipped,
            "pods_scanned": self.pods_scanned,
            "pods_skipped": self.pods_skipped,
            "containers_probed": self.containers_probed,
            "root_containers": len(self.root_containers),
            "error_containers": len(self.error_containers),
        }
