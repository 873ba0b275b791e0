"""Pydantic schemas for performance-service responses."""

from __future__ import annotations

from pydantic import Field

from contracts.performance import ReportSummary, WireModel


class MetricStats(WireModel):
    avg: float
    p50: float
    p75: float
    p95: float
    min: float
    max: float


class Period(WireModel):
    from_: int = Field(alias="from")
    to: int
    count: int


class CoreWebVitals(WireModel):
    lcp: MetricStats
    fid: MetricStats
    cls: MetricStats


class LoadingMetrics(WireModel):
    fcp: MetricStats
    ttfb: MetricStats


class AggregatedMetrics(WireModel):
    period: Period
    core_web_vitals: CoreWebVitals
    loading_metrics: LoadingMetrics
    overall_score: MetricStats | None
    grade_distribution: dict[str, int]
    device_types: dict[str, int]
    connection_types: dict[str, int]


class PerformanceData(WireModel):
    reports: list[ReportSummary]
    aggregated: AggregatedMetrics | None
    total: int


class PerformanceQueryResponse(WireModel):
    success: bool = True
    data: PerformanceData


class AckResponse(WireModel):
    success: bool = True
