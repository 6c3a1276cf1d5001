"""Report rendering for a ClassificationResult."""

from __future__ import annotations

import json
from datetime import UTC, datetime

from kuberoot.models.records import ClassificationResult, ContainerRecord


def _record_line(record: ContainerRecord) -> str:
    return (
        f"Namespace: {record.namespace}, Pod: {record.pod_name}, "
        f"Container: {record.container_name}, CommandExec: {record.probe_command}"
    )


def render_text(result: ClassificationResult) -> str:
    """Console report: one section per classification, one line per container."""
    lines = ["", "Root Containers:"]
    lines.extend(_record_line(r) for r in result.root_containers)
    lines.extend(["", "Containers with Errors:"])
    lines.extend(_record_line(r) for r in result.error_containers)
    return "\n".join(lines)


def _record_dict(record: ContainerRecord) -> dict[str, str]:
    return {
        "namespace": record.namespace,
        "pod_name": record.pod_name,
        "container_name": record.container_name,
        "probe_command": record.probe_command,
    }


def build_payload(result: ClassificationResult, generated_at: datetime | None = None) -> dict[str, object]:
    """Serialise *result* to a plain dict for JSON encoding."""
    timestamp = generated_at or datetime.now(tz=UTC)
    return {
        "root_containers": [_record_dict(r) for r in result.root_containers],
        "error_containers": [_record_dict(r) for r in result.error_containers],
        "summary": result.summary(),
        "generated_at": timestamp.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }


def render_json(result: ClassificationResult, generated_at: datetime | None = None) -> str:
    return json.dumps(build_payload(result, generated_at), indent=2)


def render(result: ClassificationResult, output: str) -> str:
    """Render *result* in the named format ("text" or "json")."""
    if output == "json":
        return render_json(result)
    if output == "text":
        return render_text(result)
    raise ValueError(f"unknown output format: {output!r}")
