"""Light-weight timing of the game loop's phases."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


@dataclass
class PerfStat:
    """Aggregated timing information for a single label."""

    count: int = 0
    total: float = 0.0
    min_time: Optional[float] = None
    max_time: float = 0.0

    def add(self, elapsed: float) -> None:
        self.count += 1
        self.total += elapsed
        if self.min_time is None or elapsed < self.min_time:
            self.min_time = elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed

    @property
    def average(self) -> float:
        """Return the average time in seconds."""

        return self.total / self.count if self.count else 0.0


class _Section:
    """Context manager that records one run of a labelled section."""

    __slots__ = ("_tracker", "_name", "_start")

    def __init__(self, tracker: "PerformanceTracker", name: str) -> None:
        self._tracker = tracker
        self._name = name
        self._start: Optional[float] = None

    def __enter__(self) -> "_Section":
        if self._tracker.enabled:
            self._start = self._tracker.clock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self._tracker.record(self._name, self._tracker.clock() - self._start)
            self._start = None
        return None


class PerformanceTracker:
    """Collect execution time statistics for labelled code sections.

    Disabled trackers hand out sections that do nothing, so the loop can always
    wrap its phases without paying for the clock calls.
    """

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], float]] = None,
        enabled: bool = True,
    ) -> None:
        self.clock = clock or time.perf_counter
        self.enabled = enabled
        self._stats: Dict[str, PerfStat] = {}

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        self._stats.clear()

    def section(self, name: str) -> _Section:
        """Return a context manager tracking ``name``'s runtime."""

        return _Section(self, name)

    def record(self, name: str, elapsed: float) -> None:
        stat = self._stats.get(name)
        if stat is None:
            stat = self._stats[name] = PerfStat()
        stat.add(elapsed)

    def summary(
        self, *, sort_by: str = "total", descending: bool = True
    ) -> List[Dict[str, float | int | str]]:
        """Return one row per label, sorted by ``sort_by``."""

        key_map = {
            "total": lambda item: item[1].total,
            "count": lambda item: item[1].count,
            "average": lambda item: item[1].average,
            "max": lambda item: item[1].max_time,
        }
        if sort_by not in key_map:
            raise ValueError(f"Unknown sort key: {sort_by}")
        items = sorted(self._stats.items(), key=key_map[sort_by], reverse=descending)
        return [
            {
                "name": name,
                "count": stat.count,
                "total": stat.total,
                "average": stat.average,
                "min": stat.min_time if stat.min_time is not None else 0.0,
                "max": stat.max_time,
            }
            for name, stat in items
        ]


def format_summary(summary: List[Dict[str, float | int | str]]) -> str:
    """Render a summary as a single log-friendly line."""

    if not summary:
        return "No timings recorded."
    parts = []
    for row in summary:
        parts.append(
            f"{row['name']}: total={row['total'] * 1000.0:.3f}ms, "
            f"count={int(row['count'])}, avg={row['average'] * 1000.0:.3f}ms, "
            f"max={row['max'] * 1000.0:.3f}ms"
        )
    return "; ".join(parts)


__all__ = ["PerfStat", "PerformanceTracker", "format_summary"]
