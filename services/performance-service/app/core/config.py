"""Performance-service configuration."""

from common.config import env_bool, env_int

SERVICE_NAME = "performance-service"
SERVICE_PORT = env_int("SERVICE_PORT", 8000)

STORE_CAPACITY = env_int("PERF_STORE_CAPACITY", 1000)

DEFAULT_QUERY_LIMIT = env_int("PERF_DEFAULT_QUERY_LIMIT", 50)
MAX_QUERY_LIMIT = env_int("PERF_MAX_QUERY_LIMIT", 100)

# Log every accepted report at INFO instead of DEBUG
LOG_REPORTS = env_bool("PERF_LOG_REPORTS", False)
POOR_SCORE_THRESHOLD = env_int("PERF_POOR_SCORE_THRESHOLD", 70)

# "Good" upper bounds per metric; above these a poor report names the culprit
METRIC_GOOD_THRESHOLDS: dict[str, float] = {
    "lcp": 2500.0,
    "fid": 100.0,
    "cls": 0.1,
    "fcp": 1800.0,
    "ttfb": 800.0,
}
