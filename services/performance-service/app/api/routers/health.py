"""Health-check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz():
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request):
    store = getattr(request.app.state, "sample_store", None)
    if store is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "detail": "Sample store not initialised"},
        )
    return {"status": "ready", "store": {"size": len(store), "capacity": store.capacity}}
