"""
Log output for the telemetry service.

Every line carries the service name and the request's correlation id.
Ingest and warning records may also carry report fields passed through
``extra`` (score, grade, connection type, metrics over budget):

  - ``LOG_FORMAT=json``: each field becomes a JSON key
  - otherwise: the fields are appended as ``key=value`` pairs

Call ``setup_logging()`` once at service startup.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from common.config import LOG_FORMAT, LOG_LEVEL

# Report attributes rendered on text lines, in this order
REPORT_FIELDS: tuple[str, ...] = ("score", "grade", "connection_type", "over_budget")

# Browsers post a report on every page hide; access lines would drown the app logs
_NOISY_LOGGERS: tuple[str, ...] = ("uvicorn.access", "httpx")

_TEXT_FMT = "%(asctime)s [%(levelname)s] %(service)s %(name)s (%(correlation_id)s) %(message)s"
_JSON_FMT = "%(asctime)s %(levelname)s %(service)s %(name)s %(correlation_id)s %(message)s"


class _ContextFilter(logging.Filter):
    """Stamp the service name and the current correlation id on each record."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        from common.middleware.correlation import get_correlation_id

        record.service = self.service_name  # type: ignore[attr-defined]
        record.correlation_id = get_correlation_id()  # type: ignore[attr-defined]
        return True


class ReportTextFormatter(logging.Formatter):
    """Plain-text lines with report fields appended as ``key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [
            f"{name}={_render(getattr(record, name))}"
            for name in REPORT_FIELDS
            if getattr(record, name, None) is not None
        ]
        return f"{line} {' '.join(pairs)}" if pairs else line


def _render(value: object) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value) or "-"
    return str(value)


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            fmt=_JSON_FMT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    return ReportTextFormatter(_TEXT_FMT)


def setup_logging(service_name: str = "service") -> None:
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(LOG_FORMAT))
    handler.addFilter(_ContextFilter(service_name))

    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(service_name).info("Logging initialised (%s, level %s)", LOG_FORMAT, LOG_LEVEL.upper())
