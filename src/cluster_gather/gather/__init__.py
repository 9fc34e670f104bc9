"""Gather layer: collect cluster records for the archive."""

from cluster_gather.gather.cluster_version import ClusterVersionGatherer
from cluster_gather.gather.context import GatherContext
from cluster_gather.gather.events import gather_namespace_events
from cluster_gather.gather.models import (
    ClusterConfig,
    CompactedEvent,
    GatherResult,
    GatherWarning,
    RawItem,
    Record,
    ResourceItem,
)

__all__ = [
    "ClusterVersionGatherer",
    "GatherContext",
    "gather_namespace_events",
    "ClusterConfig",
    "CompactedEvent",
    "GatherResult",
    "GatherWarning",
    "RawItem",
    "Record",
    "ResourceItem",
]
