import threading
from collections import Counter
from typing import Dict


class RequestCounter:
    """Best-effort request counters; only reported, never relied on."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_resource: Counter = Counter()

    def increment(self, resource: str) -> None:
        with self._lock:
            self._by_resource[resource] += 1

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self._by_resource.values())

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            by_resource = dict(self._by_resource)
        return {
            'requests_total': sum(by_resource.values()),
            'requests_by_resource': by_resource,
        }
