"""
Rate limiting utility for the catalogue API
"""
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict
import logging

logger = logging.getLogger(__name__)


@dataclass
class RateLimitResult:
    success: bool
    limit: int
    remaining: int
    reset: float  # epoch seconds when the oldest request leaves the window


class RateLimiter:
    """
    Rate limiter that enforces a requests-per-window limit per identifier
    Uses sliding window algorithm
    """

    def __init__(
        self,
        requests_per_window: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize rate limiter

        Args:
            requests_per_window: Maximum number of requests allowed per window
            window_seconds: Length of the sliding window
            clock: Time source in epoch seconds
        """
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self._clock = clock
        self.request_times: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    def _cleanup_old_requests(self, times: Deque[float], current_time: float) -> None:
        """Remove requests older than the window"""
        while times and current_time - times[0] >= self.window_seconds:
            times.popleft()

    def _evict_idle(self, current_time: float) -> None:
        """Drop identifiers with no requests left in the window"""
        for identifier in list(self.request_times):
            times = self.request_times[identifier]
            self._cleanup_old_requests(times, current_time)
            if not times:
                del self.request_times[identifier]
        self._last_sweep = current_time

    def hit(self, identifier: str) -> RateLimitResult:
        """
        Record a request for identifier if the limit allows it
        Should be called before handling each request
        """
        current_time = self._clock()
        if current_time - self._last_sweep >= self.window_seconds:
            self._evict_idle(current_time)
        times = self.request_times.setdefault(identifier, deque())
        self._cleanup_old_requests(times, current_time)

        if len(times) >= self.requests_per_window:
            reset = times[0] + self.window_seconds
            logger.debug("Rate limit reached for %s. Resets in %.2f seconds", identifier, reset - current_time)
            return RateLimitResult(success=False, limit=self.requests_per_window, remaining=0, reset=reset)

        times.append(current_time)
        return RateLimitResult(
            success=True,
            limit=self.requests_per_window,
            remaining=self.requests_per_window - len(times),
            reset=times[0] + self.window_seconds,
        )

    def get_stats(self, identifier: str) -> dict:
        """Get current rate limiter statistics for identifier"""
        current_time = self._clock()
        times = self.request_times.get(identifier, deque())
        self._cleanup_old_requests(times, current_time)

        return {
            'requests_in_window': len(times),
            'limit': self.requests_per_window,
            'window_seconds': self.window_seconds,
        }
