"""
Request body size-limiting middleware.

Rejects payloads exceeding ``MAX_REQUEST_BODY_BYTES`` with HTTP 413.
The ingest endpoint is public and a page-load report is a few hundred
bytes, so the default cap is small.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from common.config import MAX_REQUEST_BODY_BYTES
from common.errors import error_body


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, max_body_bytes: int = MAX_REQUEST_BODY_BYTES):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            return JSONResponse(
                status_code=413,
                content=error_body(f"Request body exceeds {self.max_body_bytes} bytes"),
            )
        return await call_next(request)
