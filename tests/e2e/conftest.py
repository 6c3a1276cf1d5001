"""Live-cluster fixtures.

Creates a throwaway namespace holding one busybox pod, waits until it is
Running, and deletes the namespace afterwards.  Skipped unless
``KUBEROOT_E2E=1``; credentials come from the default kubeconfig.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator

import pytest
from kubernetes_asyncio import client as k8s_client

from kuberoot.cluster import ClusterSession, connect
from kuberoot.cluster.watch import wait_for_pod_running

TEST_POD_NAME = "test-busybox-pod"
TEST_CONTAINER_NAME = "busybox"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("KUBEROOT_E2E") == "1":
        return
    skip = pytest.mark.skip(reason="set KUBEROOT_E2E=1 to run against a live cluster")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
async def session() -> AsyncIterator[ClusterSession]:
    async with await connect() as cluster_session:
        yield cluster_session


@pytest.fixture
async def busybox_namespace(session: ClusterSession) -> AsyncIterator[str]:
    namespace = f"test-{uuid.uuid4()}"
    await session.core_v1.create_namespace(k8s_client.V1Namespace(metadata=k8s_client.V1ObjectMeta(name=namespace)))
    try:
        pod = k8s_client.V1Pod(
            metadata=k8s_client.V1ObjectMeta(name=TEST_POD_NAME, namespace=namespace),
            spec=k8s_client.V1PodSpec(
                containers=[
                    k8s_client.V1Container(
                        name=TEST_CONTAINER_NAME,
                        image="busybox",
                        command=["sleep", "3600"],
                    )
                ],
                restart_policy="Never",
            ),
        )
        await session.core_v1.create_namespaced_pod(namespace, pod)
        await wait_for_pod_running(session.core_v1, namespace, TEST_POD_NAME, timeout=120)
        yield namespace
    finally:
        await session.core_v1.delete_namespace(namespace)
