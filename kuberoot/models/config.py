"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_EXCLUDED_NAMESPACES: frozenset[str] = frozenset({"kube-system", "kube-public", "kube-node-lease"})

DEFAULT_PROBE_COMMAND = "whoami"


@dataclass
class ClusterConfig:
    """Where cluster credentials come from.

    Empty strings mean "use the client library's default resolution":
    in-cluster service account first, then ``$KUBECONFIG`` or ``~/.kube/config``.
    """

    kubeconfig: str = ""
    context: str = ""


@dataclass
class AuditConfig:
    """Traversal and probe configuration."""

    excluded_namespaces: frozenset[str] = DEFAULT_EXCLUDED_NAMESPACES
    probe_command: str = DEFAULT_PROBE_COMMAND
    request_timeout: float | None = None  # seconds per remote call; None = unbounded


@dataclass
class ReportConfig:
    """Report output configuration."""

    output: str = "text"
    webhook_url: str = ""
    metrics_file: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeRootConfig:
    """Top-level kuberoot configuration."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    log: LogConfig = field(default_factory=LogConfig)
