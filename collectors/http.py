"""HTTP request counters"""
import threading
from typing import Dict
from .base import BaseCollector

TRACKED_METHODS = ("GET", "PUT", "POST", "DELETE")


class HttpRequestCollector(BaseCollector):
    """Count inbound requests, in total and per tracked HTTP method

    Written by the request-tracking middleware and read by the scheduler.
    Sync endpoints and the event loop may touch the counters from different
    threads, so updates and snapshots hold the lock.
    """

    def __init__(self, config=None):
        super().__init__(config, "http", "Inbound HTTP request counters")
        self._lock = threading.Lock()
        self._requests = self._zeroed()

    @staticmethod
    def _zeroed() -> Dict[str, int]:
        counters = {"total": 0}
        counters.update({method: 0 for method in TRACKED_METHODS})
        return counters

    def increment(self, method: str) -> None:
        """Count one request; unknown methods only count toward the total"""
        with self._lock:
            self._requests["total"] += 1
            if method in TRACKED_METHODS:
                self._requests[method] += 1

    def collect(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._requests)

    def reset(self) -> None:
        """Zero all counters"""
        with self._lock:
            self._requests = self._zeroed()
