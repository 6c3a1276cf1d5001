"""Prometheus counters for audit runs.

Metrics live on a dedicated registry rather than the process-global default
one: kuberoot is a one-shot command, so the registry is dumped to a
node-exporter textfile at the end of a scan instead of being scraped.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, write_to_textfile

REGISTRY = CollectorRegistry()

probes_total = Counter(
    "kuberoot_probes_total",
    "Identity probes executed, by outcome (root, non_root, error).",
    ["outcome"],
    registry=REGISTRY,
)

enumeration_errors_total = Counter(
    "kuberoot_enumeration_errors_total",
    "Non-fatal enumeration failures, by level (pods, containers).",
    ["level"],
    registry=REGISTRY,
)

last_scan_duration_seconds = Gauge(
    "kuberoot_last_scan_duration_seconds",
    "Wall-clock duration of the most recent scan.",
    registry=REGISTRY,
)


def write_metrics(path: str) -> None:
    """Write the registry to *path* in the Prometheus text exposition format.

    ``write_to_textfile`` writes to a temporary file and renames it, so a
    collector never reads a half-written file.
    """
    write_to_textfile(path, REGISTRY)
