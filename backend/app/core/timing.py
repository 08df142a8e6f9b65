from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator
import time


@dataclass
class TimerStats:
    count: int = 0
    total_ms: float = 0.0

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0


class Timers:
    """Collects call counts and cumulative durations per named section.

    One instance is meant to live for one request (or one demo run); it is
    handed to the services by the caller and is not thread safe.
    """

    def __init__(self):
        self._stats: Dict[str, TimerStats] = {}

    @contextmanager
    def track(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            stats = self._stats.setdefault(name, TimerStats())
            stats.count += 1
            stats.total_ms += elapsed_ms

    def get(self, name: str) -> TimerStats:
        return self._stats.get(name, TimerStats())

    def summary(self) -> Dict[str, Dict[str, float]]:
        return {
            name: {
                "count": stats.count,
                "total_ms": round(stats.total_ms, 3),
                "average_ms": round(stats.average_ms, 3),
            }
            for name, stats in self._stats.items()
        }

    def reset(self) -> None:
        self._stats.clear()
