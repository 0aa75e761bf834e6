"""Implementation of a request throttle.

Delicious asks clients to leave at least one second between requests and
answers impatient clients with HTTP 999. The limiter blocks the calling
thread until the minimum interval since the previous request has passed.
"""

import threading
import time
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_SECONDS = 1.0


class RateLimiter:
    """Minimum-interval limiter shared by all requests of one client."""

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initializes the rate limiter.

        Args:
            min_interval: Minimum seconds between two consecutive requests.
            clock: Monotonic time source (injectable for tests).
            sleep: Blocking sleep function (injectable for tests).
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._lock = threading.Lock()
        logger.debug(f"RateLimiter initialized: {min_interval}s between requests")

    @property
    def last_request(self) -> Optional[float]:
        return self._last_request

    def get_wait_time(self) -> float:
        """Estimates the time needed before the next request can be made."""
        with self._lock:
            return self._wait_time_locked()

    def _wait_time_locked(self) -> float:
        if self._last_request is None:
            return 0.0
        elapsed = self._clock() - self._last_request
        return max(0.0, self.min_interval - elapsed)

    def wait_for_permission(self) -> float:
        """Blocks until a request is permitted, then records its start time.

        The lock is held while sleeping so that concurrent callers on the
        same client are spaced out one after another.

        Returns:
            The number of seconds spent waiting.
        """
        with self._lock:
            wait_time = self._wait_time_locked()
            if wait_time > 0:
                logger.debug(f"Throttling: waiting {wait_time:.2f} seconds before next request.")
                self._sleep(wait_time)
            self._last_request = self._clock()
            return wait_time
