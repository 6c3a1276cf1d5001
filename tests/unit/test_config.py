"""Tests for environment configuration and command-line overrides."""

from __future__ import annotations

import pytest

from kuberoot.cli.main import apply_overrides
from kuberoot.config import load_config
from kuberoot.models.config import DEFAULT_EXCLUDED_NAMESPACES, KubeRootConfig

_VARS = (
    "KUBECONFIG_PATH",
    "CONTEXT",
    "EXCLUDE_NAMESPACES",
    "PROBE_COMMAND",
    "REQUEST_TIMEOUT",
    "OUTPUT",
    "WEBHOOK_URL",
    "METRICS_FILE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _VARS:
        monkeypatch.delenv(f"KUBEROOT_{var}", raising=False)


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()
        assert config == KubeRootConfig()
        assert config.audit.excluded_namespaces == DEFAULT_EXCLUDED_NAMESPACES
        assert config.audit.probe_command == "whoami"
        assert config.audit.request_timeout is None
        assert config.report.output == "text"
        assert config.log.level == "info"

    def test_values_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEROOT_KUBECONFIG_PATH", "/etc/kube/admin.conf")
        monkeypatch.setenv("KUBEROOT_CONTEXT", "prod")
        monkeypatch.setenv("KUBEROOT_EXCLUDE_NAMESPACES", "kube-system, monitoring ,")
        monkeypatch.setenv("KUBEROOT_PROBE_COMMAND", "id -un")
        monkeypatch.setenv("KUBEROOT_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("KUBEROOT_OUTPUT", "JSON")
        monkeypatch.setenv("KUBEROOT_LOG_LEVEL", "DEBUG")

        config = load_config()
        assert config.cluster.kubeconfig == "/etc/kube/admin.conf"
        assert config.cluster.context == "prod"
        assert config.audit.excluded_namespaces == frozenset({"kube-system", "monitoring"})
        assert config.audit.probe_command == "id -un"
        assert config.audit.request_timeout == 2.5
        assert config.report.output == "json"
        assert config.log.level == "debug"

    def test_empty_exclusions_audit_everything(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEROOT_EXCLUDE_NAMESPACES", "")
        assert load_config().audit.excluded_namespaces == frozenset()

    @pytest.mark.parametrize(
        ("var", "value"),
        [
            ("REQUEST_TIMEOUT", "0"),
            ("REQUEST_TIMEOUT", "-1"),
            ("REQUEST_TIMEOUT", "soon"),
            ("OUTPUT", "yaml"),
            ("LOG_LEVEL", "verbose"),
            ("PROBE_COMMAND", "   "),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, var: str, value: str) -> None:
        monkeypatch.setenv(f"KUBEROOT_{var}", value)
        with pytest.raises(ValueError):
            load_config()


class TestApplyOverrides:
    def test_no_flags_keeps_config(self) -> None:
        config = load_config()
        assert apply_overrides(config) == config

    def test_exclude_adds_to_defaults(self) -> None:
        config = apply_overrides(KubeRootConfig(), exclude=("monitoring",))
        assert config.audit.excluded_namespaces == DEFAULT_EXCLUDED_NAMESPACES | {"monitoring"}

    def test_no_default_excludes(self) -> None:
        config = apply_overrides(KubeRootConfig(), exclude=("monitoring",), no_default_excludes=True)
        assert config.audit.excluded_namespaces == frozenset({"monitoring"})

    def test_flags_win(self) -> None:
        config = apply_overrides(
            KubeRootConfig(),
            kubeconfig="/tmp/kc",
            context="dev",
            probe_command="id -un",
            timeout=3.0,
            output="json",
            webhook_url="https://hooks.example.com/kuberoot",
            metrics_file="/tmp/kuberoot.prom",
            log_level="warning",
        )
        assert config.cluster.kubeconfig == "/tmp/kc"
        assert config.cluster.context == "dev"
        assert config.audit.probe_command == "id -un"
        assert config.audit.request_timeout == 3.0
        assert config.report.output == "json"
        assert config.report.webhook_url == "https://hooks.example.com/kuberoot"
        assert config.report.metrics_file == "/tmp/kuberoot.prom"
        assert config.log.level == "warning"
