"""Pod watch helpers.

Raw watch events are decoded into the tagged PodEvent variant at this
boundary; nothing downstream looks at the raw payload.
"""

from __future__ import annotations

import asyncio
from typing import Any

from kubernetes_asyncio import watch

from kuberoot.errors import EnumerationError
from kuberoot.models.events import PodDeleted, PodEvent, PodPhase, PodUpdated, WatchError
from kuberoot.observability.logging import get_logger

_log = get_logger("cluster.watch")


def _phase(raw: str | None) -> PodPhase:
    try:
        return PodPhase(raw or "Unknown")
    except ValueError:
        return PodPhase.UNKNOWN


def decode_pod_event(event: dict[str, Any]) -> PodEvent | None:
    """Decode one event yielded by ``Watch.stream`` over a pod list call.

    Returns None for event types that carry nothing the caller acts on
    (BOOKMARK, or anything unrecognised).
    """
    event_type = event.get("type", "")
    raw = event.get("raw_object") or {}
    metadata = raw.get("metadata") or {}

    if event_type in ("ADDED", "MODIFIED"):
        status = raw.get("status") or {}
        return PodUpdated(
            namespace=str(metadata.get("namespace", "")),
            name=str(metadata.get("name", "")),
            phase=_phase(status.get("phase")),
        )
    if event_type == "DELETED":
        return PodDeleted(
            namespace=str(metadata.get("namespace", "")),
            name=str(metadata.get("name", "")),
        )
    if event_type == "ERROR":
        return WatchError(
            reason=str(raw.get("reason", "")),
            message=str(raw.get("message", "")),
            code=int(raw.get("code") or 0),
        )
    return None


async def wait_for_pod_running(
    core_v1: Any,
    namespace: str,
    pod_name: str,
    timeout: float = 60.0,
) -> None:
    """Block until the pod reports phase Running.

    Raises:
        TimeoutError:     the pod did not reach Running within *timeout*.
        EnumerationError: the pod was deleted or the watch reported an error.
    """
    watcher = watch.Watch()
    async with asyncio.timeout(timeout):
        async with watcher.stream(
            core_v1.list_namespaced_pod,
            namespace,
            field_selector=f"metadata.name={pod_name}",
        ) as stream:
            async for raw_event in stream:
                match decode_pod_event(raw_event):
                    case PodUpdated(phase=PodPhase.RUNNING):
                        _log.debug("pod running", namespace=namespace, pod=pod_name)
                        return
                    case PodUpdated(phase=phase):
                        _log.debug("pod not running yet", namespace=namespace, pod=pod_name, phase=str(phase))
                    case PodDeleted():
                        raise EnumerationError(
                            "pods",
                            f"pod {namespace}/{pod_name} was deleted while waiting for it",
                            namespace=namespace,
                            pod=pod_name,
                        )
                    case WatchError(reason=reason, message=message):
                        raise EnumerationError(
                            "pods",
                            f"watch on pod {namespace}/{pod_name} failed: {reason} {message}",
                            namespace=namespace,
                            pod=pod_name,
                        )
    raise TimeoutError(f"watch on pod {namespace}/{pod_name} ended before it was running")
