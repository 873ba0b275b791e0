"""
Unit tests – aggregator.

Coverage:
  - Nearest-rank percentiles, stats over a known window
  - Empty window returns the "no data" sentinel
  - Grade boundaries, device classification, connection buckets
  - Reports without a client score
"""

import pytest

from contracts.performance import PerformanceReport
from app.services.aggregator import (
    aggregate,
    classify_device,
    grade_distribution,
    grade_for_score,
    metric_stats,
    percentile,
)

from conftest import BASE_TS

UA_IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148"
UA_ANDROID = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36"
UA_IPAD = "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
UA_WINDOWS = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"
UA_MAC = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Version/17.0 Safari/605.1.15"


def _report(
    lcp: float = 2000.0,
    score: float | None = 85.0,
    user_agent: str | None = UA_WINDOWS,
    connection_type: str | None = "4g",
    ts: int = BASE_TS,
) -> PerformanceReport:
    return PerformanceReport(
        url="https://trattoria.example/",
        timestamp=ts,
        user_agent=user_agent,
        metrics={"lcp": lcp, "fid": lcp / 20, "cls": lcp / 10000, "fcp": lcp / 2, "ttfb": lcp / 10},
        score=None if score is None else {"score": score, "grade": grade_for_score(score)},
        connection_type=connection_type,
    )


# ═══════════════════════════════════════════════════════════════════════
#  Percentiles / stats
# ═══════════════════════════════════════════════════════════════════════


def test_percentile_nearest_rank_five_values():
    values = [100, 200, 300, 400, 500]
    assert percentile(values, 50) == 300
    assert percentile(values, 75) == 400
    assert percentile(values, 95) == 500


def test_percentile_sorts_input_without_mutating_it():
    values = [500, 100, 400, 200, 300]
    assert percentile(values, 50) == 300
    assert values == [500, 100, 400, 200, 300]


def test_percentile_single_value():
    assert percentile([42.0], 50) == 42.0
    assert percentile([42.0], 95) == 42.0


def test_percentile_low_p_clamps_to_first():
    assert percentile([3, 1, 2], 0) == 1


def test_percentile_exact_boundary_twenty_values():
    # ceil(95 * 20 / 100) - 1 == 18
    values = list(range(1, 21))
    assert percentile(values, 95) == 19
    assert percentile(values, 75) == 15
    assert percentile(values, 50) == 10


def test_percentile_empty_raises():
    with pytest.raises(ValueError):
        percentile([], 50)


def test_metric_stats_known_window():
    stats = metric_stats([100, 200, 300, 400, 500])
    assert stats.avg == 300
    assert (stats.p50, stats.p75, stats.p95) == (300, 400, 500)
    assert (stats.min, stats.max) == (100, 500)


# ═══════════════════════════════════════════════════════════════════════
#  Grades
# ═══════════════════════════════════════════════════════════════════════


def test_grade_boundaries():
    scores = [90, 89.999, 80, 79.999, 70, 60, 59.999]
    assert [grade_for_score(s) for s in scores] == ["A", "B", "B", "C", "C", "D", "F"]


def test_grade_distribution_counts_all_keys():
    dist = grade_distribution([100, 95, 81, 0])
    assert dist == {"A": 2, "B": 1, "C": 0, "D": 0, "F": 1}
    assert list(dist) == ["A", "B", "C", "D", "F"]


# ═══════════════════════════════════════════════════════════════════════
#  Device classification
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "ua, expected",
    [
        (UA_IPHONE, "mobile"),
        (UA_ANDROID, "mobile"),
        (UA_IPAD, "tablet"),
        ("Mozilla/5.0 (Linux; Android 13; SM-X700) Tablet", "mobile"),
        ("Mozilla/5.0 (Tablet; rv:120.0) Gecko/120.0 Firefox/120.0", "tablet"),
        (UA_WINDOWS, "desktop"),
        (UA_MAC, "desktop"),
        ("MOZILLA/5.0 (IPHONE)", "mobile"),
        ("", "desktop"),
        (None, "desktop"),
    ],
)
def test_classify_device(ua, expected):
    assert classify_device(ua) == expected


# ═══════════════════════════════════════════════════════════════════════
#  aggregate()
# ═══════════════════════════════════════════════════════════════════════


def test_aggregate_empty_window_is_none():
    assert aggregate([]) is None


def test_aggregate_full_summary():
    reports = [
        _report(lcp=1000, score=95, user_agent=UA_IPHONE, connection_type="4g", ts=BASE_TS + 3000),
        _report(lcp=2000, score=85, user_agent=UA_WINDOWS, connection_type="4g", ts=BASE_TS + 1000),
        _report(lcp=3000, score=72, user_agent=UA_IPAD, connection_type="3g", ts=BASE_TS + 5000),
        _report(lcp=4000, score=40, user_agent=UA_ANDROID, connection_type="", ts=BASE_TS + 2000),
    ]
    agg = aggregate(reports)

    assert agg.period.from_ == BASE_TS + 1000
    assert agg.period.to == BASE_TS + 5000
    assert agg.period.count == 4

    lcp = agg.core_web_vitals.lcp
    assert lcp.avg == 2500
    assert (lcp.p50, lcp.p75, lcp.p95) == (2000, 3000, 4000)
    assert (lcp.min, lcp.max) == (1000, 4000)
    assert agg.core_web_vitals.fid.max == 200
    assert agg.loading_metrics.fcp.p50 == 1000
    assert agg.loading_metrics.ttfb.min == 100

    assert agg.overall_score.avg == pytest.approx(73.0)
    assert agg.grade_distribution == {"A": 1, "B": 1, "C": 1, "D": 0, "F": 1}
    assert agg.device_types == {"mobile": 2, "desktop": 1, "tablet": 1}
    assert agg.connection_types == {"4g": 2, "3g": 1, "unknown": 1}


def test_aggregate_serialises_with_dashboard_keys():
    body = aggregate([_report()]).model_dump(by_alias=True)
    assert set(body) == {
        "period",
        "coreWebVitals",
        "loadingMetrics",
        "overallScore",
        "gradeDistribution",
        "deviceTypes",
        "connectionTypes",
    }
    assert set(body["period"]) == {"from", "to", "count"}
    assert set(body["coreWebVitals"]) == {"lcp", "fid", "cls"}
    assert set(body["loadingMetrics"]) == {"fcp", "ttfb"}
    assert set(body["coreWebVitals"]["lcp"]) == {"avg", "p50", "p75", "p95", "min", "max"}


def test_aggregate_missing_connection_type_counts_as_unknown():
    agg = aggregate([_report(connection_type=None), _report(connection_type="wifi")])
    assert agg.connection_types == {"unknown": 1, "wifi": 1}


def test_aggregate_skips_reports_without_score():
    agg = aggregate([_report(score=None), _report(score=64)])
    assert agg.period.count == 2
    assert agg.overall_score.avg == 64
    assert agg.grade_distribution == {"A": 0, "B": 0, "C": 0, "D": 1, "F": 0}


def test_aggregate_no_scores_at_all():
    agg = aggregate([_report(score=None)])
    assert agg.overall_score is None
    assert sum(agg.grade_distribution.values()) == 0
    assert agg.core_web_vitals.lcp.avg == 2000


def test_aggregate_passes_negative_values_through():
    agg = aggregate([_report(lcp=-500), _report(lcp=500)])
    assert agg.core_web_vitals.lcp.min == -500
    assert agg.core_web_vitals.lcp.avg == 0


def test_metric_stats_values_near_float_limit_stay_finite():
    stats = metric_stats([1e308, 1e308])
    assert stats.avg == 1e308
    assert stats.max == 1e308


def test_metric_stats_mean_mixed_signs_near_float_limit():
    stats = metric_stats([1.7e308, 1.7e308, -1.7e308])
    assert stats.avg == pytest.approx(1.7e308 / 3)


def test_aggregate_huge_scores_stay_finite():
    agg = aggregate([_report(lcp=1e308, score=1e308), _report(lcp=1e308, score=1e308)])
    assert agg.core_web_vitals.lcp.avg == 1e308
    assert agg.overall_score.avg == 1e308
