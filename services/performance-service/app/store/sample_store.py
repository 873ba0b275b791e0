"""
Bounded store of recent performance reports.

Reports live in process memory only and are lost on restart; each process
keeps its own window. :class:`SampleStore` is the seam where a durable
backend could be plugged in without touching the aggregation or the
query path.
"""

from __future__ import annotations

import abc
import threading
from collections import deque

from contracts.performance import PerformanceReport


class SampleStore(abc.ABC):
    """Append-only collection of reports, oldest first."""

    @property
    @abc.abstractmethod
    def capacity(self) -> int: ...

    @abc.abstractmethod
    def append(self, report: PerformanceReport) -> None:
        """Add ``report`` as the newest entry, evicting the oldest beyond capacity."""

    @abc.abstractmethod
    def all(self) -> list[PerformanceReport]:
        """Snapshot of the stored reports in insertion order."""

    @abc.abstractmethod
    def __len__(self) -> int: ...

    def window(
        self,
        limit: int,
        url_contains: str | None = None,
    ) -> tuple[list[PerformanceReport], int]:
        """Most recent reports first, optionally filtered by URL substring.

        Returns at most ``limit`` reports and the number of reports that
        matched the filter before the limit was applied.
        """
        # Newest-appended first so that equal timestamps keep that order
        # through the stable sort below.
        reports = list(reversed(self.all()))
        if url_contains:
            reports = [r for r in reports if url_contains in r.url]
        reports.sort(key=lambda r: r.timestamp, reverse=True)
        return reports[: max(limit, 0)], len(reports)


class InMemorySampleStore(SampleStore):
    def __init__(self, capacity: int = 1000):
        if capacity < 1:
            raise ValueError(f"Sample store capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._reports: deque[PerformanceReport] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, report: PerformanceReport) -> None:
        # deque(maxlen=...) drops from the left as part of the same append
        with self._lock:
            self._reports.append(report)

    def all(self) -> list[PerformanceReport]:
        with self._lock:
            return list(self._reports)

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)
