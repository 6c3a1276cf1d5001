"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kuberoot.models.config import (
    DEFAULT_EXCLUDED_NAMESPACES,
    DEFAULT_PROBE_COMMAND,
    AuditConfig,
    ClusterConfig,
    KubeRootConfig,
    LogConfig,
    ReportConfig,
)

OUTPUT_FORMATS = ("text", "json")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEROOT_{key}", default)


def _env_list(key: str) -> list[str] | None:
    """Comma-separated list, or None when the variable is unset."""
    raw = os.environ.get(f"KUBEROOT_{key}")
    if raw is None:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def _validate_timeout(value: str) -> float | None:
    if not value:
        return None
    timeout = float(value)
    if timeout <= 0:
        raise ValueError(f"Invalid request timeout: {value}. Must be a positive number of seconds")
    return timeout


def _validate_output(value: str) -> str:
    if value.lower() not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output format: {value}. Must be one of {OUTPUT_FORMATS}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def validate_command(value: str) -> str:
    if not value.strip():
        raise ValueError("Probe command must not be empty")
    return value


def load_config() -> KubeRootConfig:
    """Load configuration from KUBEROOT_* environment variables.

    ``KUBEROOT_EXCLUDE_NAMESPACES`` replaces the default exclusion set when
    present; set it to an empty string to audit every namespace.
    """
    excluded = _env_list("EXCLUDE_NAMESPACES")
    return KubeRootConfig(
        cluster=ClusterConfig(
            kubeconfig=_env("KUBECONFIG_PATH", ""),
            context=_env("CONTEXT", ""),
        ),
        audit=AuditConfig(
            excluded_namespaces=DEFAULT_EXCLUDED_NAMESPACES if excluded is None else frozenset(excluded),
            probe_command=validate_command(_env("PROBE_COMMAND", DEFAULT_PROBE_COMMAND)),
            request_timeout=_validate_timeout(_env("REQUEST_TIMEOUT", "")),
        ),
        report=ReportConfig(
            output=_validate_output(_env("OUTPUT", "text")),
            webhook_url=_env("WEBHOOK_URL", ""),
            metrics_file=_env("METRICS_FILE", ""),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
