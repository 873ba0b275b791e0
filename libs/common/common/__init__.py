"""Common utilities shared by the telemetry services."""

from common.errors import register_error_handlers
from common.logging import setup_logging

__all__ = ["register_error_handlers", "setup_logging"]
