"""Minimum spacing between rate limited HubSpot calls."""

import threading
import time
from typing import Optional

from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)

# search endpoints allow roughly one request per second
DEFAULT_QUOTA_INTERVAL = 1.05


class QuotaGate:
    """
    Serializes calls and keeps ``min_interval`` seconds between the end of one
    call and the start of the next, across all threads using the gate.

    Usage:
        with gate:
            rest.post(...)

    The lock is held for the whole call and released on every exit path.
    Waiters are not guaranteed to be served in FIFO order.
    """

    def __init__(self, min_interval: float = DEFAULT_QUOTA_INTERVAL):
        if min_interval < 0:
            raise ValueError(f"min_interval must not be negative, got {min_interval}")
        self.min_interval = min_interval
        self._lock = threading.Lock()
        self._last_end: Optional[float] = None

    @property
    def last_end(self) -> Optional[float]:
        """Monotonic time the last gated call finished (None before the first call)."""
        return self._last_end

    def _begin(self) -> None:
        self._lock.acquire()
        try:
            if self._last_end is None:
                return
            elapsed = time.monotonic() - self._last_end
            if elapsed < self.min_interval:
                wait_time = self.min_interval - elapsed
                logger.debug(f"Quota: waiting {wait_time:.3f}s")
                time.sleep(wait_time)
        except BaseException:
            self._lock.release()
            raise

    def _end(self) -> None:
        self._last_end = time.monotonic()
        self._lock.release()

    def __enter__(self) -> "QuotaGate":
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end()
