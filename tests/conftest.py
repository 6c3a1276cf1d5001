"""Shared fixtures for kuberoot tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import structlog


@pytest.fixture(autouse=True)
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog output so tests can assert on it and stdout stays clean."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def two_namespace_cluster() -> dict[str, dict[str, list[str]]]:
    """The canonical scenario: one busybox pod in default, plus kube-system."""
    return {
        "default": {"busybox-pod": ["busybox"]},
        "kube-system": {"coredns-5d78c9869d-abcde": ["coredns"]},
    }
