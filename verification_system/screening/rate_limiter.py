"""Sliding-window request limiter keyed by requester id."""

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from loguru import logger

from verification_system.config.settings import settings


class RequestRateLimiter:
    """
    Per-requester sliding window limiter for verification requests.

    Each requester may start at most max_requests verifications in any
    window of window_seconds. Timestamps older than the window are dropped
    on every check, so a requester regains capacity as old requests age out.

    Attributes:
        max_requests: Requests allowed per requester per window
        window_seconds: Length of the sliding window
        lock: Thread lock for safe concurrent access
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the limiter.

        Args:
            max_requests: Requests per window (defaults to settings)
            window_seconds: Window length (defaults to settings)
            clock: Monotonic seconds source, injected by tests
        """
        self.max_requests = max_requests or settings.rate_limit_max_requests
        self.window_seconds = window_seconds or settings.rate_limit_window_seconds
        self._clock = clock or time.monotonic
        self._requests: Dict[str, Deque[float]] = {}
        self.lock = threading.Lock()

        logger.debug(
            f"RequestRateLimiter initialized: {self.max_requests} requests "
            f"per {self.window_seconds}s"
        )

    def _prune(self, requester_id: str, now: float) -> Deque[float]:
        timestamps = self._requests.setdefault(requester_id, deque())
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()
        return timestamps

    def allow(self, requester_id: str) -> bool:
        """
        Record a request if the requester is under the limit.

        Returns:
            True if the request may proceed, False if rate limited
        """
        with self.lock:
            now = self._clock()
            timestamps = self._prune(requester_id, now)

            if len(timestamps) >= self.max_requests:
                logger.warning(f"Rate limit reached for requester {requester_id}")
                return False

            timestamps.append(now)
            return True

    def remaining(self, requester_id: str) -> int:
        """Requests the requester may still make in the current window."""
        with self.lock:
            timestamps = self._prune(requester_id, self._clock())
            return max(0, self.max_requests - len(timestamps))

    def reset(self, requester_id: Optional[str] = None) -> None:
        """Forget one requester's history, or everyone's when no id is given."""
        with self.lock:
            if requester_id is None:
                self._requests.clear()
            else:
                self._requests.pop(requester_id, None)
