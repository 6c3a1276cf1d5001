"""Traversal and classification of every container in the cluster.

The walk is strictly sequential: namespaces -> pods -> containers -> probe.
Each remote call is awaited before the next one starts, so cancelling the
task running ``RootAuditor.run()`` stops at whichever call is in flight.

Failure handling per level:
    namespaces  -- EnumerationError propagates; no partial result.
    pods        -- namespace skipped, traversal continues.
    containers  -- pod skipped, traversal continues.
    probe       -- container recorded in ``error_containers``.
"""

from __future__ import annotations

import time
from collections.abc import Collection
from typing import Any

from kuberoot.cluster.enumerate import list_containers, list_namespaces, list_pods
from kuberoot.cluster.exec import exec_in_container
from kuberoot.errors import EnumerationError, ExecError
from kuberoot.models.config import DEFAULT_EXCLUDED_NAMESPACES, DEFAULT_PROBE_COMMAND
from kuberoot.models.records import ClassificationResult, ContainerRecord
from kuberoot.observability.logging import get_logger
from kuberoot.observability.metrics import (
    enumeration_errors_total,
    last_scan_duration_seconds,
    probes_total,
)

_log = get_logger("audit.traversal")

ROOT_MARKER = "root"


def is_root_identity(output: str) -> bool:
    """True if the probe output names the root user.

    This is a substring test, so any identity containing "root" matches too.
    """
    return ROOT_MARKER in output


class RootAuditor:
    """Walks the cluster once and classifies every container it can reach.

    Args:
        core_v1:         CoreV1Api used for list/get calls.
        exec_v1:         CoreV1Api bound to a websocket client, used for exec.
        excluded:        Namespace names never visited (exact match).
        probe_command:   Shell command whose stdout identifies the process user.
        request_timeout: Per-call deadline in seconds; None waits indefinitely.
    """

    def __init__(
        self,
        core_v1: Any,
        exec_v1: Any,
        *,
        excluded: Collection[str] = DEFAULT_EXCLUDED_NAMESPACES,
        probe_command: str = DEFAULT_PROBE_COMMAND,
        request_timeout: float | None = None,
    ) -> None:
        self._core_v1 = core_v1
        self._exec_v1 = exec_v1
        self._excluded = frozenset(excluded)
        self._probe_command = probe_command
        self._timeout = request_timeout

    async def run(self) -> ClassificationResult:
        """Traverse the cluster and return the classification.

        Raises:
            EnumerationError: the namespace list could not be read.
        """
        t_start = time.monotonic()
        result = ClassificationResult()

        namespaces = await list_namespaces(self._core_v1, self._excluded, timeout=self._timeout)
        _log.info("namespaces listed", count=len(namespaces), excluded=sorted(self._excluded))

        for namespace in namespaces:
            await self._scan_namespace(namespace, result)

        duration = time.monotonic() - t_start
        last_scan_duration_seconds.set(duration)
        _log.info("scan complete", duration_s=round(duration, 3), **result.summary())
        return result

    async def _scan_namespace(self, namespace: str, result: ClassificationResult) -> None:
        try:
            pods = await list_pods(self._core_v1, namespace, timeout=self._timeout)
        except EnumerationError as exc:
            _log.warning("namespace skipped", namespace=namespace, error=str(exc))
            enumeration_errors_total.labels(level="pods").inc()
            result.namespaces_skipped += 1
            return

        result.namespaces_scanned += 1
        for pod_name in pods:
            await self._scan_pod(namespace, pod_name, result)

    async def _scan_pod(self, namespace: str, pod_name: str, result: ClassificationResult) -> None:
        try:
            containers = await list_containers(self._core_v1, namespace, pod_name, timeout=self._timeout)
        except EnumerationError as exc:
            _log.warning("pod skipped", namespace=namespace, pod=pod_name, error=str(exc))
            enumeration_errors_total.labels(level="containers").inc()
            result.pods_skipped += 1
            return

        result.pods_scanned += 1
        for container_name in containers:
            await self._probe(namespace, pod_name, container_name, result)

    async def _probe(
        self,
        namespace: str,
        pod_name: str,
        container_name: str,
        result: ClassificationResult,
    ) -> None:
        record = ContainerRecord(
            namespace=namespace,
            pod_name=pod_name,
            container_name=container_name,
            probe_command=self._probe_command,
        )
        result.containers_probed += 1

        try:
            output = await exec_in_container(
                self._exec_v1,
                namespace,
                pod_name,
                container_name,
                self._probe_command,
                timeout=self._timeout,
            )
        except ExecError as exc:
            _log.warning(
                "probe failed",
                namespace=namespace,
                pod=pod_name,
                container=container_name,
                command=self._probe_command,
                error=exc.reason,
            )
            probes_total.labels(outcome="error").inc()
            result.error_containers.append(record)
            return

        if is_root_identity(output.stdout):
            _log.info("root container found", namespace=namespace, pod=pod_name, container=container_name)
            probes_total.labels(outcome="root").inc()
            result.root_containers.append(record)
        else:
            _log.debug(
                "container not root",
                namespace=namespace,
                pod=pod_name,
                container=container_name,
                identity=output.stdout.strip()[:64],
            )
            probes_total.labels(outcome="non_root").inc()


async def find_root_containers(
    session: Any,
    *,
    excluded: Collection[str] = DEFAULT_EXCLUDED_NAMESPACES,
    probe_command: str = DEFAULT_PROBE_COMMAND,
    request_timeout: float | None = None,
) -> ClassificationResult:
    """Run one audit pass using the handles of a ClusterSession."""
    auditor = RootAuditor(
        session.core_v1,
        session.exec_v1,
        excluded=excluded,
        probe_command=probe_command,
        request_timeout=request_timeout,
    )
    return await auditor.run()
