# safarsorted/services/rate_limit.py
from __future__ import annotations

import threading
import time
from typing import Callable

from safarsorted.core.config import settings


class SlidingWindowRateLimiter:
    """
    Per-key sliding window: at most `max_requests` accepted calls within the
    trailing `window_seconds`. Rejected calls are not recorded.
    State lives in process memory and resets on restart.
    """

    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: int = 1000,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._hits: dict[str, list[float]] = {}
        self._calls = 0
        self._lock = threading.Lock()

    def _recent(self, key: str, now: float) -> list[float]:
        return [t for t in self._hits.get(key, ()) if now - t < self.window_seconds]

    def _sweep(self, now: float) -> None:
        # evict clients that have gone quiet
        for key in list(self._hits):
            recent = self._recent(key, now)
            if recent:
                self._hits[key] = recent
            else:
                del self._hits[key]

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            self._calls += 1
            if self._calls % self._sweep_interval == 0:
                self._sweep(now)

            recent = self._recent(key, now)
            if len(recent) >= self.max_requests:
                self._hits[key] = recent
                return False

            recent.append(now)
            self._hits[key] = recent
            return True

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._calls = 0


inquiry_limiter = SlidingWindowRateLimiter(
    max_requests=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)
