"""FastAPI dependencies for the process-wide sample store and clock."""

from __future__ import annotations

from fastapi import Depends, Request

from app.services.performance_service import Clock, PerformanceService, now_ms
from app.store.sample_store import SampleStore


def get_store(request: Request) -> SampleStore:
    return request.app.state.sample_store


def get_clock() -> Clock:
    return now_ms


def get_performance_service(
    store: SampleStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> PerformanceService:
    return PerformanceService(store, clock=clock)
