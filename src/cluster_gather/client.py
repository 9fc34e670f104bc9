"""Build the kubernetes API clients used by the gatherers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from kubernetes import client, config

from cluster_gather.exceptions import ClientConstructionError

logger = logging.getLogger(__name__)


@dataclass
class ClusterClients:
    """Core API for pods and events, custom objects API for ClusterVersion."""

    core: Any
    custom: Any


def _load_kube_config(kubeconfig_path: str | None, context: str | None) -> client.Configuration:
    """Load in-cluster or kubeconfig-based configuration."""
    try:
        config.load_incluster_config()
        return client.Configuration.get_default_copy()
    except config.ConfigException:
        pass
    kwargs: dict[str, Any] = {}
    if kubeconfig_path:
        kwargs["config_file"] = str(kubeconfig_path)
    if context:
        kwargs["context"] = context
    config.load_kube_config(**kwargs)
    return client.Configuration.get_default_copy()


def build_clients(kubeconfig: str | None = None, context: str | None = None) -> ClusterClients:
    """Return connected API clients, or raise ClientConstructionError."""
    try:
        cfg = _load_kube_config(kubeconfig, context)
    except (config.ConfigException, OSError) as e:
        raise ClientConstructionError(
            "Unable to load kubernetes configuration",
            details=str(e),
        ) from e
    api_client = client.ApiClient(cfg)
    logger.debug("Using kubernetes API at %s", cfg.host)
    return ClusterClients(
        core=client.CoreV1Api(api_client),
        custom=client.CustomObjectsApi(api_client),
    )
