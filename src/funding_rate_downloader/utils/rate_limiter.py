#!/usr/bin/env python
"""Thread-safe request rate limiter.

``RateLimiter`` allows at most ``max_requests`` acquisitions within any trailing
``window``. Callers that would exceed the limit sleep until the oldest
acquisition leaves the window.
"""

import threading
import time
from collections import deque
from datetime import timedelta
from typing import Callable, Deque, Optional, Union

from funding_rate_downloader.utils.config import (
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW,
)
from funding_rate_downloader.utils.logger_setup import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Sliding-window limiter shared by all request workers."""

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window: Union[timedelta, float] = RATE_LIMIT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the limiter.

        Args:
            max_requests: Acquisitions allowed per window
            window: Window length as a timedelta or in seconds
            clock: Monotonic clock returning seconds
            sleep: Function used to block the calling thread
        """
        window_seconds = (
            window.total_seconds() if isinstance(window, timedelta) else float(window)
        )
        if max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window must be positive, got {window_seconds}s")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._acquired: Deque[float] = deque()

    def _reserve(self) -> Optional[float]:
        """Take a slot if one is free, otherwise return how long to wait."""
        with self._lock:
            now = self._clock()
            while self._acquired and now - self._acquired[0] >= self.window_seconds:
                self._acquired.popleft()

            if len(self._acquired) < self.max_requests:
                self._acquired.append(now)
                return None

            return self.window_seconds - (now - self._acquired[0])

    def acquire(self) -> None:
        """Block until a request slot is available and take it."""
        while True:
            wait_time = self._reserve()
            if wait_time is None:
                return
            logger.debug(f"Rate limit of {self.max_requests} requests reached, waiting {wait_time:.3f}s")
            self._sleep(wait_time)

    @property
    def in_window(self) -> int:
        """Number of acquisitions currently counted against the window."""
        with self._lock:
            now = self._clock()
            return sum(1 for ts in self._acquired if now - ts < self.window_seconds)

    def close(self) -> None:
        """Forget every recorded acquisition."""
        with self._lock:
            self._acquired.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
