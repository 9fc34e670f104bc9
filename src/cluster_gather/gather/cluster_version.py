"""Gather the ClusterVersion, cluster ID, cluster-version operator pods and, if needed, their events."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from cluster_gather.client import ClusterClients, build_clients
from cluster_gather.config import Settings, get_settings
from cluster_gather.exceptions import ClientConstructionError, GatherCancelled
from cluster_gather.gather.context import GatherContext
from cluster_gather.gather.events import gather_namespace_events
from cluster_gather.gather.models import (
    ClusterConfig,
    GatherResult,
    GatherWarning,
    RawItem,
    Record,
    ResourceItem,
)
from cluster_gather.utils.anonymize import redact_env_vars
from cluster_gather.utils.health import is_healthy_pod

logger = logging.getLogger(__name__)

CLUSTER_VERSION_GROUP = "config.openshift.io"
CLUSTER_VERSION_VERSION = "v1"
CLUSTER_VERSION_PLURAL = "clusterversions"
CLUSTER_VERSION_NAME = "version"

# Failures of a single API call; anything else is a bug and propagates
TRANSPORT_ERRORS = (ApiException, HTTPError)


def _is_not_found(err: Exception) -> bool:
    return isinstance(err, ApiException) and err.status == 404


def _describe(err: Exception) -> str:
    if isinstance(err, ApiException):
        return f"{err.status} {err.reason}"
    return str(err) or type(err).__name__


class ClusterVersionGatherer:
    """Collects the ``config/version``, ``config/id``, ``config/pod/...`` and ``events/...`` records."""

    def __init__(
        self,
        settings: Settings | None = None,
        clients_factory: Callable[[], ClusterClients] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clients_factory = clients_factory or self._default_clients

    def _default_clients(self) -> ClusterClients:
        kubeconfig = str(self.settings.kubeconfig) if self.settings.kubeconfig else None
        return build_clients(kubeconfig, self.settings.context)

    def gather(self, ctx: GatherContext | None = None, now: datetime | None = None) -> GatherResult:
        """Build clients and run one gather pass. Never raises for API failures."""
        ctx = ctx or GatherContext.with_timeout(self.settings.timeout_seconds)
        try:
            clients = self._clients_factory()
        except ClientConstructionError as e:
            logger.warning("Unable to build API clients: %s", e.message)
            return GatherResult(errors=[e])
        return self.gather_with_clients(clients, ctx, now)

    def gather_with_clients(
        self,
        clients: ClusterClients,
        ctx: GatherContext | None = None,
        now: datetime | None = None,
    ) -> GatherResult:
        ctx = ctx or GatherContext()
        result = GatherResult()
        try:
            self._gather(clients, ctx, now, result)
        except GatherCancelled as e:
            logger.warning("%s", e.format_message())
            result.errors.append(e)
        return result

    def _gather(
        self,
        clients: ClusterClients,
        ctx: GatherContext,
        now: datetime | None,
        result: GatherResult,
    ) -> None:
        try:
            cluster_config = self._get_cluster_version(clients.custom, ctx)
        except TRANSPORT_ERRORS as e:
            if _is_not_found(e):
                return
            self._raise_if_cancelled(ctx, "get clusterversion", e)
            logger.warning("Unable to get ClusterVersion: %s", _describe(e))
            result.errors.append(e)
            return

        result.records.append(
            Record(name="config/version", item=ResourceItem(resource=cluster_config.anonymize().resource))
        )
        if cluster_config.cluster_id:
            result.records.append(Record(name="config/id", item=RawItem(text=cluster_config.cluster_id)))

        namespace = self.settings.namespace
        now = now or datetime.now(timezone.utc)

        try:
            pods = ctx.call("list pods", clients.core.list_namespaced_pod, namespace=namespace)
        except TRANSPORT_ERRORS as e:
            self._raise_if_cancelled(ctx, "list pods", e)
            logger.debug("Unable to find pods in namespace %s for cluster-version operator", namespace)
            result.warnings.append(
                GatherWarning(step="list pods", message=f"namespace {namespace}: {_describe(e)}")
            )
            return

        unhealthy = 0
        for pod in pods.items or []:
            redact_env_vars(pod.spec.containers if pod.spec else None)
            result.records.append(
                Record(
                    name=f"config/pod/{pod.metadata.namespace or namespace}/{pod.metadata.name}",
                    item=ResourceItem(resource=pod),
                )
            )
            if not is_healthy_pod(pod, now, self.settings.pod_grace_period):
                unhealthy += 1

        # Events are only worth the query when something looks wrong
        if unhealthy == 0:
            return
        logger.debug("Found %d unhealthy pods in %s", unhealthy, namespace)

        try:
            result.records.extend(
                gather_namespace_events(clients.core, namespace, self.settings.events_interval, now, ctx)
            )
        except TRANSPORT_ERRORS as e:
            self._raise_if_cancelled(ctx, "list events", e)
            logger.debug("Unable to collect events for namespace %r: %s", namespace, _describe(e))
            result.warnings.append(
                GatherWarning(step="list events", message=f"namespace {namespace}: {_describe(e)}")
            )

    def _get_cluster_version(self, custom: Any, ctx: GatherContext) -> ClusterConfig:
        obj = ctx.call(
            "get clusterversion",
            custom.get_cluster_custom_object,
            group=CLUSTER_VERSION_GROUP,
            version=CLUSTER_VERSION_VERSION,
            plural=CLUSTER_VERSION_PLURAL,
            name=CLUSTER_VERSION_NAME,
        )
        return ClusterConfig.from_resource(obj or {})

    @staticmethod
    def _raise_if_cancelled(ctx: GatherContext, step: str, err: Exception) -> None:
        """A transport failure after the deadline is a cancellation, not a degraded step."""
        if ctx.done():
            raise GatherCancelled(step, _describe(err)) from err
