"""Decide whether a pod looks healthy at a given point in time."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

# Pods younger than this are still considered starting up
POD_GRACE_PERIOD = timedelta(minutes=2)


def _pod_age(pod: Any, now: datetime) -> timedelta:
    created = getattr(pod.metadata, "creation_timestamp", None)
    if created is None:
        return timedelta(0)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - created


def _container_failed(status: Any) -> bool:
    """True if the container restarted or exited with a non-zero code."""
    if (status.restart_count or 0) > 0:
        return True
    for state in (status.state, status.last_state):
        terminated = getattr(state, "terminated", None) if state else None
        if terminated is not None and (terminated.exit_code or 0) != 0:
            return True
    return False


def is_healthy_pod(pod: Any, now: datetime, grace_period: timedelta = POD_GRACE_PERIOD) -> bool:
    """Return True if the pod is running cleanly or still within its startup grace period."""
    status = pod.status
    phase = getattr(status, "phase", None) or "Unknown"
    past_grace = _pod_age(pod, now) > grace_period

    if phase in ("Failed", "Unknown"):
        return False
    if phase == "Pending" and past_grace:
        return False

    for cs in getattr(status, "init_container_statuses", None) or []:
        if _container_failed(cs):
            return False
    for cs in getattr(status, "container_statuses", None) or []:
        if _container_failed(cs):
            return False
        waiting = getattr(cs.state, "waiting", None) if cs.state else None
        if waiting is not None and past_grace:
            return False
    return True
