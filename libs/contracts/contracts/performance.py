"""
Wire contract for browser performance reports.

The browser-side monitor posts one :class:`PerformanceReport` per page
load (on ``visibilitychange``/``beforeunload``); the admin dashboard reads
them back through :class:`ReportSummary`. JSON keys are camelCase on the
wire and snake_case in Python.

Tracked metrics:
  - lcp   Largest Contentful Paint (ms)
  - fid   First Input Delay (ms)
  - cls   Cumulative Layout Shift (unitless)
  - fcp   First Contentful Paint (ms)
  - ttfb  Time to First Byte (ms)
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TRACKED_METRICS: tuple[str, ...] = ("lcp", "fid", "cls", "fcp", "ttfb")


class WireModel(BaseModel):
    """camelCase on the wire, immutable once built, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        allow_inf_nan=False,
    )


# ── Report ─────────────────────────────────────────────────────────────


class WebVitals(WireModel):
    # The browser monitor initialises every metric to 0 before observing it
    lcp: float = 0.0
    fid: float = 0.0
    cls: float = 0.0
    fcp: float = 0.0
    ttfb: float = 0.0
    custom_metrics: dict[str, float] = Field(default_factory=dict)

    def value(self, name: str) -> float:
        return getattr(self, name)


class ReportScore(WireModel):
    score: float
    grade: str = ""
    details: dict[str, Any] = Field(default_factory=dict)


class PerformanceReport(WireModel):
    """One page-load sample.

    ``timestamp`` is milliseconds since epoch as stamped by the server on
    ingestion; whatever the client sent is discarded.
    """

    url: str
    timestamp: int
    user_agent: str | None = None
    metrics: WebVitals
    score: ReportScore | None = None
    connection_type: str | None = None


class ReportSummary(WireModel):
    """A stored report as returned to the dashboard (no raw user agent)."""

    url: str
    timestamp: int
    score: ReportScore | None
    metrics: WebVitals
    connection_type: str | None

    @classmethod
    def from_report(cls, report: PerformanceReport) -> "ReportSummary":
        return cls(
            url=report.url,
            timestamp=report.timestamp,
            score=report.score,
            metrics=report.metrics,
            connection_type=report.connection_type,
        )
