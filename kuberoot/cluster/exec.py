"""Remote command execution inside a container.

Commands run through the pod ``exec`` subresource over a websocket with no
stdin and no TTY.  The API server multiplexes the streams on one socket:
every binary frame starts with a channel byte (1 stdout, 2 stderr, 3 status)
followed by the payload.  The status channel carries a v1.Status object once
the remote process exits; anything other than ``Success`` (non-zero exit,
container not found, exec not permitted) is a failed probe.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterable
from dataclasses import dataclass
from typing import Any

import aiohttp

from kuberoot.cluster.session import TRANSPORT_ERRORS, describe_transport_error
from kuberoot.errors import ExecError

STDOUT_CHANNEL = 1
STDERR_CHANNEL = 2
STATUS_CHANNEL = 3


@dataclass(frozen=True)
class ExecOutput:
    """Captured output of one remote command."""

    stdout: str
    stderr: str
    status: dict[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        # No status frame means the server closed the stream without
        # reporting a failure; older API servers behave this way on success.
        return self.status is None or self.status.get("status") == "Success"

    @property
    def failure_message(self) -> str:
        if self.status is None:
            return ""
        return str(self.status.get("message") or self.status.get("reason") or "remote command failed")


async def read_exec_stream(messages: AsyncIterable[Any]) -> ExecOutput:
    """Demultiplex websocket frames into stdout, stderr and the exit status.

    Raises:
        ConnectionError: the websocket reported a transport error.
        ValueError:      the status frame is not a JSON object.
    """
    stdout: list[str] = []
    stderr: list[str] = []
    status: dict[str, Any] | None = None

    async for msg in messages:
        if msg.type == aiohttp.WSMsgType.ERROR:
            raise ConnectionError(f"exec stream failed: {msg.data}")
        if msg.type not in (aiohttp.WSMsgType.BINARY, aiohttp.WSMsgType.TEXT):
            continue

        data = msg.data if isinstance(msg.data, bytes) else msg.data.encode("utf-8")
        if len(data) < 2:
            continue
        channel, payload = data[0], data[1:].decode("utf-8", errors="replace")

        if channel == STDOUT_CHANNEL:
            stdout.append(payload)
        elif channel == STDERR_CHANNEL:
            stderr.append(payload)
        elif channel == STATUS_CHANNEL:
            status = json.loads(payload)
            if not isinstance(status, dict):
                raise ValueError(f"malformed status frame: {payload[:100]!r}")

    return ExecOutput(stdout="".join(stdout), stderr="".join(stderr), status=status)


async def exec_in_container(
    exec_v1: Any,
    namespace: str,
    pod_name: str,
    container_name: str,
    command: str,
    *,
    timeout: float | None = None,
) -> ExecOutput:
    """Run ``sh -c <command>`` in a container and return its output.

    *exec_v1* must be a CoreV1Api bound to a websocket-capable API client.

    Raises:
        ExecError: the channel could not be opened, the stream broke, or the
                   remote process did not exit successfully.
    """
    try:
        output = await asyncio.wait_for(
            _run(exec_v1, namespace, pod_name, container_name, command),
            timeout=timeout,
        )
    except (*TRANSPORT_ERRORS, ValueError) as exc:
        raise ExecError(namespace, pod_name, container_name, describe_transport_error(exc)) from exc

    if not output.succeeded:
        raise ExecError(namespace, pod_name, container_name, output.failure_message)
    return output


async def _run(
    exec_v1: Any,
    namespace: str,
    pod_name: str,
    container_name: str,
    command: str,
) -> ExecOutput:
    websocket = await exec_v1.connect_get_namespaced_pod_exec(
        pod_name,
        namespace,
        container=container_name,
        command=["sh", "-c", command],
        stdin=False,
        stdout=True,
        stderr=True,
        tty=False,
        _preload_content=False,
    )
    async with websocket as ws:
        return await read_exec_stream(ws)
