"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from diningreview import __version__
from diningreview.database import check_db_connectivity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe — returns 200 if the process is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready() -> JSONResponse:
    """
    Readiness probe — checks DB connectivity.
    Returns 200 with {"db": "ok"} when ready, or 503 with {"db": "error"}.
    """
    db_ok = await check_db_connectivity()
    if not db_ok:
        logger.warning("Readiness check failed: database unreachable")
    return JSONResponse(
        content={"db": "ok" if db_ok else "error"},
        status_code=200 if db_ok else 503,
    )
