"""Fixed-window, per-client request limiter kept in process memory."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock


@dataclass
class _Window:
    count: int
    started_at: float


class RateLimiter:
    """Allow at most ``limit`` calls per ``window_seconds`` for each key."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be positive")
        self._limit = limit
        self._window = float(window_seconds)
        self._clock = clock
        self._lock = Lock()
        self._windows: dict[str, _Window] = {}

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            current = self._windows.get(key)
            if current is None or now - current.started_at >= self._window:
                self._windows[key] = _Window(count=1, started_at=now)
                self._evict(now)
                return True

            if current.count >= self._limit:
                return False

            current.count += 1
            return True

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _evict(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now - w.started_at >= self._window]
        for k in expired:
            del self._windows[k]
