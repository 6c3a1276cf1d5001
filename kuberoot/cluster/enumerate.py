"""Namespace, pod and container enumeration.

Each enumerator wraps exactly one API call and converts its transport
failures into EnumerationError.  Whether that error is fatal is decided by
the caller, not here.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection, Iterable
from typing import Any

from kuberoot.cluster.session import TRANSPORT_ERRORS, describe_transport_error
from kuberoot.errors import EnumerationError
from kuberoot.models.config import DEFAULT_EXCLUDED_NAMESPACES


def contains(items: Iterable[str], value: str) -> bool:
    """Exact, case-sensitive membership test."""
    return any(item == value for item in items)


def is_excluded(namespace: str, excluded: Collection[str]) -> bool:
    """Return True if *namespace* is in the exclusion set.

    Matching is exact: no prefixes, wildcards or case folding.
    """
    return contains(excluded, namespace)


async def list_namespaces(
    core_v1: Any,
    excluded: Collection[str] = DEFAULT_EXCLUDED_NAMESPACES,
    *,
    timeout: float | None = None,
) -> list[str]:
    """Names of every visible namespace not in *excluded*, in API list order."""
    try:
        namespace_list = await asyncio.wait_for(core_v1.list_namespace(), timeout=timeout)
    except TRANSPORT_ERRORS as exc:
        raise EnumerationError(
            "namespaces",
            f"failed to list namespaces: {describe_transport_error(exc)}",
        ) from exc

    names = (ns.metadata.name for ns in namespace_list.items or [])
    return [name for name in names if not is_excluded(name, excluded)]


async def list_pods(core_v1: Any, namespace: str, *, timeout: float | None = None) -> list[str]:
    """Names of the pods in *namespace*."""
    try:
        pod_list = await asyncio.wait_for(core_v1.list_namespaced_pod(namespace), timeout=timeout)
    except TRANSPORT_ERRORS as exc:
        raise EnumerationError(
            "pods",
            f"failed to list pods in namespace {namespace}: {describe_transport_error(exc)}",
            namespace=namespace,
        ) from exc

    return [pod.metadata.name for pod in pod_list.items or []]


async def list_containers(
    core_v1: Any,
    namespace: str,
    pod_name: str,
    *,
    timeout: float | None = None,
) -> list[str]:
    """Names of the containers declared in the pod spec.

    Init and ephemeral containers are not included.
    """
    try:
        pod = await asyncio.wait_for(core_v1.read_namespaced_pod(pod_name, namespace), timeout=timeout)
    except TRANSPORT_ERRORS as exc:
        raise EnumerationError(
            "containers",
            f"failed to read pod {namespace}/{pod_name}: {describe_transport_error(exc)}",
            namespace=namespace,
            pod=pod_name,
        ) from exc

    if pod.spec is None:
        return []
    return [container.name for container in pod.spec.containers or []]
