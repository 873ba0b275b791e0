"""Performance report ingest + dashboard query endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError

from app.api.deps import get_performance_service
from app.schemas import AckResponse, PerformanceQueryResponse
from app.services.performance_service import PerformanceService, decode_report_body
from common.errors import AppError, ReportProcessingError, ReportQueryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/performance", tags=["performance"])


def _limit(limit: str | None = Query(None)) -> int | None:
    """``?limit=`` with no value means the default window."""
    if limit is None or not limit.strip():
        return None
    try:
        value = int(limit)
    except ValueError:
        value = -1
    if value < 0:
        raise RequestValidationError(
            [{"type": "limit", "loc": ("query", "limit"), "msg": "must be a non-negative integer", "input": limit}]
        )
    return value


@router.post("", response_model=AckResponse)
async def ingest_report(request: Request, svc: PerformanceService = Depends(get_performance_service)):
    try:
        payload = decode_report_body(await request.body())
        svc.ingest(payload)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Error processing performance report")
        raise ReportProcessingError() from exc
    return AckResponse()


@router.get("", response_model=PerformanceQueryResponse)
async def query_reports(
    limit: int | None = Depends(_limit),
    url: str | None = Query(None),
    svc: PerformanceService = Depends(get_performance_service),
):
    try:
        data = svc.query(limit=limit, url=url)
    except Exception as exc:
        logger.exception("Error fetching performance reports")
        raise ReportQueryError() from exc
    return PerformanceQueryResponse(data=data)
