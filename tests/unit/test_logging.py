"""Tests for structlog configuration."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest
import structlog

from kuberoot.observability.logging import setup_logging


@pytest.fixture
def restore_structlog() -> Iterator[None]:
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


@pytest.mark.usefixtures("restore_structlog")
class TestSetupLogging:
    def test_json_on_stderr_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        structlog.get_logger(component="test").info("namespace skipped", namespace="apps")

        captured = capsys.readouterr()
        assert captured.out == ""
        line = json.loads(captured.err.strip())
        assert line["event"] == "namespace skipped"
        assert line["level"] == "info"
        assert line["component"] == "test"
        assert "ts" in line

    def test_level_threshold(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning")
        log = structlog.get_logger(component="test")
        log.info("dropped")
        log.warning("kept")

        lines = [json.loads(raw) for raw in capsys.readouterr().err.splitlines()]
        assert [line["event"] for line in lines] == ["kept"]
