"""Health check endpoint for load balancers and monitoring."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog_console.api.deps import get_repository
from catalog_console.clients.base import CatalogRepository
from catalog_console.core.exceptions import CatalogConsoleError

router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(repository: CatalogRepository = Depends(get_repository)):
    """Readiness: app + upstream catalog reachable."""
    try:
        await repository.ping()
        return {"status": "ok", "catalog": "reachable"}
    except CatalogConsoleError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "catalog": e.message},
        )
