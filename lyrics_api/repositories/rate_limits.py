"""Per-process gate that suppresses repeated view counts."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol


class RateGate(Protocol):
    """Decides whether an action by a client on a resource may proceed."""

    def check_and_record(self, resource: str, client_id: str) -> bool:
        """Return True and remember the attempt, or False while the window is open."""


class InMemoryRateGate:
    """Remembers the last accepted timestamp per ``resource:client`` key.

    State lives in this process only, so each instance of a multi-instance
    deployment keeps its own independent window. A rejected attempt does not
    refresh the timestamp. Expired keys are swept in one pass whenever the map
    grows past ``max_entries``.
    """

    def __init__(
        self,
        *,
        window_seconds: float = 3600,
        max_entries: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window_seconds = window_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._last_seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def check_and_record(self, resource: str, client_id: str) -> bool:
        key = f"{resource}:{client_id}"
        with self._lock:
            now = self._clock()
            last = self._last_seen.get(key)
            if last is not None and now - last < self._window_seconds:
                return False
            self._last_seen[key] = now
            if len(self._last_seen) > self._max_entries:
                self._sweep(now)
            return True

    def _sweep(self, now: float) -> None:
        cutoff = now - self._window_seconds
        # Drop keys whose window has already closed
        expired = [key for key, seen in self._last_seen.items() if seen <= cutoff]
        for key in expired:
            del self._last_seen[key]
