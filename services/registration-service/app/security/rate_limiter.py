"""In-memory sliding window limiter for registration attempts."""

from __future__ import annotations

import time
from collections import deque
from threading import Lock
from typing import Callable, Deque


class SlidingWindowRateLimiter:
    """Thread-safe per-key limiter counting attempts inside a trailing window.

    Keys with no attempts left in the window are dropped, so memory follows the
    number of recently active callers rather than every caller ever seen.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window = window_seconds
        self._clock = clock
        self._attempts: dict[str, Deque[float]] = {}
        self._last_sweep = clock()
        self._lock = Lock()

    def allow(self, key: str) -> bool:
        """Record an attempt for ``key`` and return ``False`` once the limit is reached."""
        now = self._clock()
        cutoff = now - self._window
        with self._lock:
            if now - self._last_sweep >= self._window:
                self._sweep(cutoff)
                self._last_sweep = now
            attempts = self._attempts.get(key)
            if attempts is not None:
                self._prune(attempts, cutoff)
            if attempts and len(attempts) >= self._max_requests:
                return False
            self._attempts.setdefault(key, deque()).append(now)
            return True

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._attempts)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._attempts.clear()
            else:
                self._attempts.pop(key, None)

    @staticmethod
    def _prune(attempts: Deque[float], cutoff: float) -> None:
        while attempts and attempts[0] <= cutoff:
            attempts.popleft()

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._attempts):
            attempts = self._attempts[key]
            self._prune(attempts, cutoff)
            if not attempts:
                del self._attempts[key]
