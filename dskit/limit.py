"""Sliding-window rate limiters, plain and weighted."""

from __future__ import annotations

import threading
import time
from collections import deque
from datetime import timedelta
from typing import Callable, Deque, Tuple, Union

Duration = Union[int, float, timedelta]
Clock = Callable[[], float]


class RateLimitExceeded(Exception):
    """Raised when a request does not fit in the current window."""


def _to_seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class RingWindowLimiter:
    """Allow at most ``max_count`` requests in any window of ``window_size`` seconds."""

    def __init__(self, window_size: Duration, max_count: int, *, clock: Clock = time.monotonic):
        self.window_size = _to_seconds(window_size)
        self.max_count = max_count
        self._clock = clock
        self._lock = threading.Lock()
        self._timestamps: Deque[float] = deque()

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)

    def allow(self) -> None:
        """Record a request, or raise RateLimitExceeded if the window is full."""
        with self._lock:
            now = self._clock()
            window_start = now - self.window_size
            while self._timestamps and self._timestamps[0] <= window_start:
                self._timestamps.popleft()
            if len(self._timestamps) >= self.max_count:
                raise RateLimitExceeded("request rate limit exceeded")
            self._timestamps.append(now)


class RingWindowLimiterWeight:
    """Allow requests while the summed weight in the window stays within ``max_weight``."""

    def __init__(self, window_size: Duration, max_weight: int, *, clock: Clock = time.monotonic):
        self.window_size = _to_seconds(window_size)
        self.max_weight = max_weight
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Deque[Tuple[float, int]] = deque()
        self._total_weight = 0

    @property
    def total_weight(self) -> int:
        """Weight of the requests recorded in the current window."""
        with self._lock:
            return self._total_weight

    def allow(self, weight: int) -> None:
        """Record a request of ``weight``, or raise if it would exceed the budget."""
        if weight <= 0:
            raise ValueError("weight must be positive")
        with self._lock:
            now = self._clock()
            window_start = now - self.window_size
            while self._entries and self._entries[0][0] <= window_start:
                _, expired = self._entries.popleft()
                self._total_weight -= expired
            if self._total_weight + weight > self.max_weight:
                raise RateLimitExceeded("request rate limit exceeded (weight too large)")
            self._entries.append((now, weight))
            self._total_weight += weight