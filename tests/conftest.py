"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
from hypothesis import Verbosity, settings
from kubernetes import client

from cluster_gather.client import ClusterClients
from cluster_gather.config import Settings

settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.load_profile("default")

NAMESPACE = "openshift-cluster-version"
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_container_status(
    name: str = "cluster-version-operator",
    restart_count: int = 0,
    waiting_reason: str | None = None,
    exit_code: int | None = None,
) -> client.V1ContainerStatus:
    if waiting_reason:
        state = client.V1ContainerState(waiting=client.V1ContainerStateWaiting(reason=waiting_reason))
    elif exit_code is not None:
        state = client.V1ContainerState(terminated=client.V1ContainerStateTerminated(exit_code=exit_code))
    else:
        state = client.V1ContainerState(running=client.V1ContainerStateRunning(started_at=NOW))
    return client.V1ContainerStatus(
        name=name,
        image="quay.io/openshift/cvo:latest",
        image_id="sha256:abc",
        ready=waiting_reason is None and exit_code is None,
        restart_count=restart_count,
        state=state,
    )


def make_pod(
    name: str = "cluster-version-operator-1",
    namespace: str = NAMESPACE,
    phase: str = "Running",
    age: timedelta = timedelta(hours=1),
    env: dict[str, str] | None = None,
    container_statuses: list[client.V1ContainerStatus] | None = None,
    now: datetime = NOW,
) -> client.V1Pod:
    env_vars = [client.V1EnvVar(name=k, value=v) for k, v in (env or {}).items()]
    statuses = container_statuses
    if statuses is None:
        statuses = [make_container_status()] if phase == "Running" else []
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            creation_timestamp=now - age,
        ),
        spec=client.V1PodSpec(
            containers=[
                client.V1Container(
                    name="cluster-version-operator",
                    image="quay.io/openshift/cvo:latest",
                    env=env_vars or None,
                )
            ]
        ),
        status=client.V1PodStatus(phase=phase, container_statuses=statuses),
    )


def make_event(
    name: str,
    last_seen: datetime | None,
    namespace: str = NAMESPACE,
    reason: str = "BackOff",
    message: str = "Back-off restarting failed container",
    type: str = "Warning",
) -> client.CoreV1Event:
    return client.CoreV1Event(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        involved_object=client.V1ObjectReference(kind="Pod", name="cluster-version-operator-1"),
        last_timestamp=last_seen,
        reason=reason,
        message=message,
        type=type,
    )


def cluster_version_body(cluster_id: str = "abc-123", upstream: str = "https://secret.example.com/x") -> dict[str, Any]:
    return {
        "apiVersion": "config.openshift.io/v1",
        "kind": "ClusterVersion",
        "metadata": {"name": "version"},
        "spec": {"clusterID": cluster_id, "upstream": upstream, "channel": "stable-4.14"},
    }


@pytest.fixture
def gather_settings() -> Settings:
    return Settings(
        _env_file=None,
        namespace=NAMESPACE,
        events_interval=timedelta(hours=2),
        pod_grace_period=timedelta(minutes=2),
        timeout_seconds=None,
    )


@pytest.fixture
def mock_clients() -> ClusterClients:
    """API clients with a ClusterVersion, no pods and no events."""
    core = MagicMock()
    custom = MagicMock()
    custom.get_cluster_custom_object.return_value = cluster_version_body()
    core.list_namespaced_pod.return_value = client.V1PodList(items=[])
    core.list_namespaced_event.return_value = client.CoreV1EventList(items=[])
    return ClusterClients(core=core, custom=custom)
