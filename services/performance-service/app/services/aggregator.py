"""
Statistics over a window of performance reports.

Pure functions, no state: the query path selects the window, this module
turns it into the dashboard summary.

  - Per-metric avg / p50 / p75 / p95 / min / max (nearest-rank percentiles)
  - Overall score statistics and A–F grade distribution
  - Device type (from the user agent) and connection type breakdowns
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from contracts.performance import PerformanceReport

from app.schemas import AggregatedMetrics, CoreWebVitals, LoadingMetrics, MetricStats, Period

# Lower bound of each letter grade, best first
GRADE_FLOORS: tuple[tuple[str, float], ...] = (("A", 90.0), ("B", 80.0), ("C", 70.0), ("D", 60.0))
FAILING_GRADE = "F"

DEVICE_TYPES: tuple[str, ...] = ("mobile", "desktop", "tablet")
_MOBILE_UA = re.compile(r"mobile|android|iphone")
_TABLET_UA = re.compile(r"tablet|ipad")

UNKNOWN_CONNECTION = "unknown"


def percentile(values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile: the ceil(p% * n)-th smallest value."""
    if not values:
        raise ValueError("percentile of an empty sequence")
    ordered = sorted(values)
    index = math.ceil(p * len(ordered) / 100) - 1
    return ordered[min(max(index, 0), len(ordered) - 1)]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean that stays finite for any finite input.

    Terms are scaled before summing so that values near the float limit
    cannot overflow the running total; the result is kept within
    [min, max] against rounding at the extremes.
    """
    n = len(values)
    if not n:
        raise ValueError("mean of an empty sequence")
    avg = math.fsum(v / n for v in values)
    return min(max(avg, min(values)), max(values))


def metric_stats(values: Sequence[float]) -> MetricStats:
    if not values:
        raise ValueError("metric_stats of an empty sequence")
    return MetricStats(
        avg=mean(values),
        p50=percentile(values, 50),
        p75=percentile(values, 75),
        p95=percentile(values, 95),
        min=min(values),
        max=max(values),
    )


def grade_for_score(score: float) -> str:
    for grade, floor in GRADE_FLOORS:
        if score >= floor:
            return grade
    return FAILING_GRADE


def classify_device(user_agent: str | None) -> str:
    # Mobile patterns win: some tablet UAs also advertise "Mobile"
    ua = (user_agent or "").lower()
    if _MOBILE_UA.search(ua):
        return "mobile"
    if _TABLET_UA.search(ua):
        return "tablet"
    return "desktop"


def grade_distribution(scores: Sequence[float]) -> dict[str, int]:
    counts = {grade: 0 for grade, _ in GRADE_FLOORS}
    counts[FAILING_GRADE] = 0
    for score in scores:
        counts[grade_for_score(score)] += 1
    return counts


def device_distribution(reports: Sequence[PerformanceReport]) -> dict[str, int]:
    counts = dict.fromkeys(DEVICE_TYPES, 0)
    for report in reports:
        counts[classify_device(report.user_agent)] += 1
    return counts


def connection_distribution(reports: Sequence[PerformanceReport]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for report in reports:
        kind = report.connection_type or UNKNOWN_CONNECTION
        counts[kind] = counts.get(kind, 0) + 1
    return counts


def aggregate(reports: Sequence[PerformanceReport]) -> AggregatedMetrics | None:
    """Summarise ``reports``; ``None`` when there is nothing to summarise."""
    if not reports:
        return None

    def stats(name: str) -> MetricStats:
        return metric_stats([r.metrics.value(name) for r in reports])

    # Reports sent before the score was computed carry none
    scores = [r.score.score for r in reports if r.score is not None]
    timestamps = [r.timestamp for r in reports]

    return AggregatedMetrics(
        period=Period(from_=min(timestamps), to=max(timestamps), count=len(reports)),
        core_web_vitals=CoreWebVitals(lcp=stats("lcp"), fid=stats("fid"), cls=stats("cls")),
        loading_metrics=LoadingMetrics(fcp=stats("fcp"), ttfb=stats("ttfb")),
        overall_score=metric_stats(scores) if scores else None,
        grade_distribution=grade_distribution(scores),
        device_types=device_distribution(reports),
        connection_types=connection_distribution(reports),
    )
