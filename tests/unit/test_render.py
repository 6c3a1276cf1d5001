"""Tests for text and JSON report rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from kuberoot.models.records import ClassificationResult, ContainerRecord
from kuberoot.report.render import build_payload, render, render_json, render_text

_TS = datetime(2026, 10, 17, 12, 0, 0, tzinfo=UTC)


def _result() -> ClassificationResult:
    return ClassificationResult(
        root_containers=[ContainerRecord("default", "busybox-pod", "busybox", "whoami")],
        error_containers=[ContainerRecord("apps", "distroless-0", "server", "whoami")],
        namespaces_scanned=2,
        pods_scanned=2,
        containers_probed=3,
    )


class TestRenderText:
    def test_layout(self) -> None:
        assert render_text(_result()) == (
            "\n"
            "Root Containers:\n"
            "Namespace: default, Pod: busybox-pod, Container: busybox, CommandExec: whoami\n"
            "\n"
            "Containers with Errors:\n"
            "Namespace: apps, Pod: distroless-0, Container: server, CommandExec: whoami"
        )

    def test_empty_result(self) -> None:
        assert render_text(ClassificationResult()) == "\nRoot Containers:\n\nContainers with Errors:"


class TestRenderJson:
    def test_payload(self) -> None:
        payload = build_payload(_result(), generated_at=_TS)
        assert payload["root_containers"] == [
            {"namespace": "default", "pod_name": "busybox-pod", "container_name": "busybox", "probe_command": "whoami"}
        ]
        assert payload["error_containers"] == [
            {"namespace": "apps", "pod_name": "distroless-0", "container_name": "server", "probe_command": "whoami"}
        ]
        assert payload["summary"] == {
            "namespaces_scanned": 2,
            "namespaces_skipped": 0,
            "pods_scanned": 2,
            "pods_skipped": 0,
            "containers_probed": 3,
            "root_containers": 1,
            "error_containers": 1,
        }
        assert payload["generated_at"] == "2026-10-17T12:00:00Z"

    def test_render_json_is_valid(self) -> None:
        decoded = json.loads(render_json(_result(), generated_at=_TS))
        assert decoded == build_payload(_result(), generated_at=_TS)


class TestRender:
    def test_dispatch(self) -> None:
        assert render(_result(), "text") == render_text(_result())
        assert json.loads(render(_result(), "json"))["summary"]["root_containers"] == 1

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="unknown output format"):
            render(_result(), "yaml")
