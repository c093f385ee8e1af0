"""Per-publisher metrics (emissions, deliveries, failures, live subscriptions)."""

from collections import Counter
from typing import Dict

MESSAGES_EMITTED = "messages_emitted"
DELIVERIES = "deliveries"
DELIVERY_FAILURES = "delivery_failures"
SUBSCRIPTIONS = "subscriptions"


class Metrics:
    """Counters only ever grow; gauges hold the last value set. Unknown names read as 0."""

    def __init__(self) -> None:
        self._counters: Counter = Counter()
        self._gauges: Dict[str, int] = {}

    def increment(self, name: str, value: int = 1) -> None:
        self._counters[name] += value

    def set_gauge(self, name: str, value: int) -> None:
        self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        return self._counters[name]

    def get_gauge(self, name: str) -> int:
        return self._gauges.get(name, 0)

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
        }
