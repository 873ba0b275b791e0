"""
Performance telemetry business-logic layer.

Handles:
  - Ingest: presence checks, server timestamp, append to the sample store
  - Query: URL filter, most-recent-first limit, aggregation of the window
  - Logging of poor page loads with the metrics that caused them
"""

from __future__ import annotations

import json
import logging
import math
import time
from typing import Any, Callable

from pydantic import ValidationError

from contracts.performance import TRACKED_METRICS, PerformanceReport, ReportSummary

from app.core.config import (
    DEFAULT_QUERY_LIMIT,
    LOG_REPORTS,
    MAX_QUERY_LIMIT,
    METRIC_GOOD_THRESHOLDS,
    POOR_SCORE_THRESHOLD,
)
from app.schemas import PerformanceData
from app.services.aggregator import aggregate
from app.store.sample_store import SampleStore
from common.errors import InvalidReportError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("url", "metrics", "timestamp")

Clock = Callable[[], int]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def decode_report_body(raw: bytes) -> Any:
    """Strict JSON decoding: NaN / Infinity literals and overflowing floats are errors."""
    return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)


def _is_absent(value: Any) -> bool:
    return value is None or value == "" or value == 0


class PerformanceService:
    def __init__(self, store: SampleStore, clock: Clock = now_ms):
        self.store = store
        self.clock = clock

    # ── Ingest ──────────────────────────────────────────────────────────
    def ingest(self, payload: Any) -> PerformanceReport:
        if not isinstance(payload, dict):
            raise InvalidReportError()
        missing = [name for name in REQUIRED_FIELDS if _is_absent(payload.get(name))]
        if missing:
            logger.info("Rejected performance report: missing %s", ", ".join(missing))
            raise InvalidReportError()

        try:
            report = PerformanceReport.model_validate({**payload, "timestamp": self.clock()})
        except ValidationError as exc:
            logger.info("Rejected performance report: %d invalid field(s)", exc.error_count())
            raise InvalidReportError() from exc

        self.store.append(report)
        self._log_report(report)
        return report

    def _log_report(self, report: PerformanceReport) -> None:
        score = report.score
        logger.log(
            logging.INFO if LOG_REPORTS else logging.DEBUG,
            "Performance report received for %s",
            report.url,
            extra={
                "score": score.score if score else None,
                "grade": score.grade if score else None,
                "metrics": {name: report.metrics.value(name) for name in TRACKED_METRICS},
                "connection_type": report.connection_type,
            },
        )
        if score is None or score.score >= POOR_SCORE_THRESHOLD:
            return
        over = [
            name
            for name, limit in METRIC_GOOD_THRESHOLDS.items()
            if report.metrics.value(name) > limit
        ]
        logger.warning(
            "Poor performance on %s: score %.0f (%s), over budget: %s",
            report.url,
            score.score,
            score.grade or "-",
            ", ".join(over) or "none",
            extra={"over_budget": over},
        )

    # ── Query ───────────────────────────────────────────────────────────
    def query(self, *, limit: int | None = None, url: str | None = None) -> PerformanceData:
        if limit is None:
            limit = DEFAULT_QUERY_LIMIT
        limit = min(limit, MAX_QUERY_LIMIT)

        reports, total = self.store.window(limit, url_contains=url or None)
        return PerformanceData(
            reports=[ReportSummary.from_report(r) for r in reports],
            aggregated=aggregate(reports),
            total=total,
        )
