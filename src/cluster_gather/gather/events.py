"""Collect recent events of a namespace into an ``events/<namespace>`` record."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from cluster_gather.gather.context import GatherContext
from cluster_gather.gather.models import CompactedEvent, CompactedEventList, Record, ResourceItem

logger = logging.getLogger(__name__)


def _utc(ts: datetime | None) -> datetime | None:
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def event_last_seen(ev: Any) -> datetime | None:
    """Last time the event was observed, falling back through older timestamp fields."""
    # Repeating events keep their latest observation in the series, not in event_time
    series = getattr(ev, "series", None)
    candidates = (
        getattr(ev, "last_timestamp", None),
        getattr(series, "last_observed_time", None) if series else None,
        getattr(ev, "event_time", None),
        getattr(ev, "first_timestamp", None),
    )
    for ts in candidates:
        if ts is not None:
            return _utc(ts)
    meta = getattr(ev, "metadata", None)
    return _utc(getattr(meta, "creation_timestamp", None)) if meta else None


def _compact_event(ev: Any, namespace: str, last_seen: datetime) -> CompactedEvent:
    return CompactedEvent(
        namespace=getattr(ev.metadata, "namespace", None) or namespace,
        last_timestamp=last_seen,
        reason=ev.reason or "",
        message=ev.message or "",
        type=ev.type or "",
    )


def gather_namespace_events(
    core: Any,
    namespace: str,
    interval: timedelta,
    now: datetime | None = None,
    ctx: GatherContext | None = None,
) -> list[Record]:
    """
    List events in ``namespace`` and keep those last seen within ``[now - interval, now]``.
    Returns an empty list when nothing falls in the window. API failures propagate.
    """
    ctx = ctx or GatherContext()
    now = _utc(now) or datetime.now(timezone.utc)
    oldest = now - interval

    event_list = ctx.call("list events", core.list_namespaced_event, namespace=namespace)

    compacted: list[CompactedEvent] = []
    for ev in event_list.items or []:
        last_seen = event_last_seen(ev)
        if last_seen is None or not (oldest <= last_seen <= now):
            continue
        compacted.append(_compact_event(ev, namespace, last_seen))

    logger.debug("Kept %d of %d events in %s", len(compacted), len(event_list.items or []), namespace)
    if not compacted:
        return []
    return [
        Record(
            name=f"events/{namespace}",
            item=ResourceItem(resource=CompactedEventList(items=compacted)),
        )
    ]
