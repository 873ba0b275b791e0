"""
Shared error types and FastAPI exception handlers.

The service registers these handlers in its ``main.py`` so all error
responses have the shape the dashboard and the browser reporter expect:

    { "success": false, "error": "<message>" }

Messages are fixed per error type; internal details are only logged.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ── Base errors ────────────────────────────────────────────────────────

class AppError(Exception):
    """Generic application error (400)."""

    status_code = 400

    def __init__(self, detail: str = "Bad request"):
        self.detail = detail


class InvalidReportError(AppError):
    """Performance report is missing required fields or is malformed (400)."""

    def __init__(self, detail: str = "Invalid report format"):
        self.detail = detail


class ReportProcessingError(AppError):
    """Unexpected failure while ingesting a report (500)."""

    status_code = 500

    def __init__(self, detail: str = "Failed to process report"):
        self.detail = detail


class ReportQueryError(AppError):
    """Unexpected failure while reading or aggregating reports (500)."""

    status_code = 500

    def __init__(self, detail: str = "Failed to fetch reports"):
        self.detail = detail


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


# ── Handlers ───────────────────────────────────────────────────────────

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request parameters on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=422, content=error_body("Invalid request parameters"))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url)
        return JSONResponse(status_code=500, content=error_body("An unexpected error occurred"))
