"""Records and result types produced by the gatherers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from kubernetes.client import ApiClient
from pydantic import BaseModel, ConfigDict, Field

from cluster_gather.utils.anonymize import anonymize_url


def _to_jsonable(resource: Any) -> Any:
    if isinstance(resource, BaseModel):
        return resource.model_dump(mode="json", by_alias=True)
    return ApiClient().sanitize_for_serialization(resource)


@dataclass(frozen=True)
class ResourceItem:
    """A structured resource (kubernetes model, pydantic model or dict) archived as JSON."""

    resource: Any
    extension: str = "json"

    def marshal(self) -> bytes:
        return json.dumps(_to_jsonable(self.resource)).encode("utf-8")


@dataclass(frozen=True)
class RawItem:
    """A plain string archived as-is."""

    text: str
    extension: str = ""

    def marshal(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class Record:
    """One named unit of archived output, e.g. ``config/version``."""

    name: str
    item: ResourceItem | RawItem

    @property
    def filename(self) -> str:
        if self.item.extension:
            return f"{self.name}.{self.item.extension}"
        return self.name

    def marshal(self) -> bytes:
        return self.item.marshal()


class GatherWarning(BaseModel):
    """A degraded step: the gather continued without this step's data."""

    step: str
    message: str


@dataclass
class GatherResult:
    """Records of one gather pass plus fatal errors and degraded-step warnings."""

    records: list[Record] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)
    warnings: list[GatherWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def record_names(self) -> list[str]:
        return [r.name for r in self.records]


class ClusterConfig(BaseModel):
    """The cluster's ClusterVersion resource (``config.openshift.io/v1``)."""

    name: str = "version"
    cluster_id: str = ""
    upstream: str = ""
    resource: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_resource(cls, obj: dict[str, Any]) -> ClusterConfig:
        spec = obj.get("spec") or {}
        return cls(
            name=(obj.get("metadata") or {}).get("name", "version"),
            cluster_id=spec.get("clusterID") or "",
            upstream=spec.get("upstream") or "",
            resource=obj,
        )

    def anonymize(self) -> ClusterConfig:
        """Scrub the upstream URL in place, in both the field and the resource body."""
        self.upstream = anonymize_url(self.upstream)
        spec = self.resource.get("spec")
        if isinstance(spec, dict) and spec.get("upstream"):
            spec["upstream"] = self.upstream
        return self


class CompactedEvent(BaseModel):
    """Archived shape of a single event."""

    namespace: str
    last_timestamp: datetime | None = Field(default=None, alias="lastTimestamp")
    reason: str = ""
    message: str = ""
    type: str = ""

    model_config = ConfigDict(populate_by_name=True)


class CompactedEventList(BaseModel):
    items: list[CompactedEvent] = Field(default_factory=list)
