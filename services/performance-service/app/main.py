"""Performance-service – FastAPI application entry-point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routers.health import router as health_router
from app.api.routers.performance import router as performance_router
from app.core.config import SERVICE_PORT, STORE_CAPACITY
from app.core.logging import init_logging
from app.store.sample_store import InMemorySampleStore
from common.errors import register_error_handlers
from common.middleware import CorrelationMiddleware, RequestSizeLimitMiddleware

init_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the sample store on startup; its contents die with the process."""
    app.state.sample_store = InMemorySampleStore(capacity=STORE_CAPACITY)
    logger.info("Sample store ready (capacity %d)", STORE_CAPACITY)
    yield
    logger.info("Discarding %d stored performance reports", len(app.state.sample_store))
    app.state.sample_store = None


app = FastAPI(
    title="Performance Service",
    description="Collect browser Web Vitals reports and aggregate them for the admin dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(CorrelationMiddleware)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(performance_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=SERVICE_PORT)
