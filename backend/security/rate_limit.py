import time
import hashlib
from collections import deque
from typing import Optional
from threading import Lock


class RateLimiter:
    """Sliding-window limiter keyed by profile. Keys are hashed before storage."""

    CLEANUP_INTERVAL = 300

    def __init__(self, clock=time.monotonic):
        self._windows: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._clock = clock
        self._last_cleanup = clock()

    def _hash_key(self, key: str) -> str:
        return hashlib.sha256(key.encode()).hexdigest()[:16]

    def _cleanup(self, now: float, window_seconds: int):
        if now - self._last_cleanup < self.CLEANUP_INTERVAL:
            return
        cutoff = now - window_seconds
        stale = [k for k, w in self._windows.items() if not w or w[-1] <= cutoff]
        for k in stale:
            del self._windows[k]
        self._last_cleanup = now

    def is_allowed(
        self,
        key: str,
        max_requests: int,
        window_seconds: int,
    ) -> tuple[bool, Optional[int]]:
        """Returns (allowed, retry_after_seconds)"""
        hashed = self._hash_key(key)
        now = self._clock()

        with self._lock:
            self._cleanup(now, window_seconds)
            window = self._windows.setdefault(hashed, deque())

            cutoff = now - window_seconds
            while window and window[0] <= cutoff:
                window.popleft()

            if len(window) < max_requests:
                window.append(now)
                return True, None

            retry_after = int((window[0] + window_seconds) - now) + 1
            return False, retry_after

    def reset(self, key: str | None = None):
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(self._hash_key(key), None)


scan_limiter = RateLimiter()
recompute_limiter = RateLimiter()
