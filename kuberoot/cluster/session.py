"""Authenticated access to the Kubernetes API.

``connect()`` resolves credentials and returns a ClusterSession holding two
CoreV1Api handles built on the same client configuration: one over the REST
client for list/get calls, and one over the websocket client for streaming
exec.  Any failure to build either is an AuthError.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio import config as k8s_config
from kubernetes_asyncio.client.rest import ApiException
from kubernetes_asyncio.stream import WsApiClient

from kuberoot.errors import AuthError
from kuberoot.observability.logging import get_logger

_log = get_logger("cluster.session")

# Failures of a single remote call.  asyncio.TimeoutError is listed for the
# per-call deadline; on 3.11+ it is the builtin TimeoutError.
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    ApiException,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)


def describe_transport_error(exc: BaseException) -> str:
    """Short, log-friendly description of a transport failure."""
    if isinstance(exc, ApiException):
        return f"{exc.status} {exc.reason}"
    if isinstance(exc, asyncio.TimeoutError):
        return "request timed out"
    return str(exc) or type(exc).__name__


@dataclass
class ClusterSession:
    """API handles for one audit run.

    Use as an async context manager, or call ``close()`` when done.
    """

    core_v1: Any
    exec_v1: Any
    source: str = ""
    _clients: tuple[Any, ...] = field(default=(), repr=False)

    async def close(self) -> None:
        for api_client in self._clients:
            try:
                await api_client.close()
            except Exception as exc:  # noqa: BLE001
                _log.debug("k8s client close raised (non-fatal)", error=str(exc))

    async def __aenter__(self) -> ClusterSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


async def connect(
    kubeconfig: str | None = None,
    context: str | None = None,
    in_cluster: bool | None = None,
) -> ClusterSession:
    """Build a ClusterSession.

    Args:
        kubeconfig: Explicit kubeconfig path.  When given, in-cluster
                    credentials are never tried.
        context:    kubeconfig context name; defaults to current-context.
        in_cluster: True forces the in-cluster service account, False skips
                    it, None tries it first and falls back to kubeconfig.

    Raises:
        AuthError: credentials are missing, unreadable, or invalid.
    """
    configuration = k8s_client.Configuration()
    try:
        source = await _load_credentials(configuration, kubeconfig, context, in_cluster)
        api_client = k8s_client.ApiClient(configuration=configuration)
        ws_client = WsApiClient(configuration=configuration)
    except Exception as exc:
        raise AuthError(f"cannot establish cluster session: {exc}") from exc

    _log.info("k8s client configured", source=source, host=configuration.host)
    return ClusterSession(
        core_v1=k8s_client.CoreV1Api(api_client),
        exec_v1=k8s_client.CoreV1Api(ws_client),
        source=source,
        _clients=(api_client, ws_client),
    )


async def _load_credentials(
    configuration: Any,
    kubeconfig: str | None,
    context: str | None,
    in_cluster: bool | None,
) -> str:
    if kubeconfig is None and in_cluster is not False:
        try:
            # load_incluster_config() is synchronous in kubernetes-asyncio
            k8s_config.load_incluster_config(client_configuration=configuration)
            return "in_cluster"
        except k8s_config.ConfigException:
            if in_cluster:
                raise
            _log.debug("not running in-cluster; falling back to kubeconfig")

    # load_kube_config() is async in kubernetes-asyncio.  A None config_file
    # resolves $KUBECONFIG, then ~/.kube/config.
    await k8s_config.load_kube_config(
        config_file=kubeconfig,
        context=context,
        client_configuration=configuration,
    )
    return "kubeconfig"
