"""Deadline and cancellation signal shared by one gather pass."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from cluster_gather.exceptions import GatherCancelled

T = TypeVar("T")

# Lower bound for the per-request timeout handed to the kubernetes client
MIN_REQUEST_TIMEOUT = 0.1

# How often an in-flight call re-checks the cancel flag and deadline
POLL_INTERVAL = 0.05


@dataclass
class GatherContext:
    """Carries an optional deadline and a cancel flag through the gather steps.

    ``deadline`` is a ``time.monotonic()`` value, so wall-clock jumps do not move it.
    """

    deadline: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, seconds: float | None) -> GatherContext:
        if seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self.cancel_event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def done(self) -> bool:
        if self.cancel_event.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, step: str) -> None:
        """Raise GatherCancelled if the pass should stop at ``step``."""
        if self.cancel_event.is_set():
            raise GatherCancelled(step, "cancelled by caller")
        if self.done():
            raise GatherCancelled(step, "deadline exceeded")

    def request_kwargs(self) -> dict[str, Any]:
        """Extra keyword arguments for kubernetes client calls."""
        remaining = self.remaining()
        if remaining is None:
            return {}
        return {"_request_timeout": max(remaining, MIN_REQUEST_TIMEOUT)}

    def call(self, step: str, fn: Callable[..., T], **kwargs: Any) -> T:
        """Run one API call, abandoning it as soon as the pass is cancelled or times out.

        The call runs on a worker thread while this thread waits in short slices,
        so ``cancel()`` from another thread stops the wait promptly. Exceptions
        raised by ``fn`` propagate unchanged.
        """
        self.check(step)
        kwargs.update(self.request_kwargs())
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gather")
        future = executor.submit(fn, **kwargs)
        try:
            while True:
                try:
                    result = future.result(timeout=POLL_INTERVAL)
                    break
                except FutureTimeout:
                    self.check(step)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        # A cancel that lands while the call completes still wins
        self.check(step)
        return result
