"""Shared contracts – Pydantic schemas for browser performance reports."""

from contracts.performance import (
    TRACKED_METRICS,
    PerformanceReport,
    ReportScore,
    ReportSummary,
    WebVitals,
)

__all__ = [
    "TRACKED_METRICS",
    "PerformanceReport",
    "ReportScore",
    "ReportSummary",
    "WebVitals",
]
