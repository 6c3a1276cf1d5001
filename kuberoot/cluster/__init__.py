"""Kubernetes API access for kuberoot.

Submodules:
    session   -- connect(): credentials -> ClusterSession (REST + websocket handles).
    enumerate -- Exclusion filter and namespace / pod / container enumerators.
    exec      -- Streaming exec of a shell command inside one container.
    watch     -- Pod watch decoding and the wait-until-running helper.
"""

from kuberoot.cluster.enumerate import (
    contains,
    is_excluded,
    list_containers,
    list_namespaces,
    list_pods,
)
from kuberoot.cluster.exec import ExecOutput, exec_in_container
from kuberoot.cluster.session import ClusterSession, connect

__all__ = [
    "ClusterSession",
    "ExecOutput",
    "connect",
    "contains",
    "exec_in_container",
    "is_excluded",
    "list_containers",
    "list_namespaces",
    "list_pods",
]
